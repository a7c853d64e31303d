import logging
import os

from dotenv import load_dotenv

from catalog_gateway.services.exceptions import (
    ConfigurationError,
    OperationFailed,
    ValidationFailed,
)
from catalog_gateway.services.shopify_graphql import ShopifyGraphQLClient


logger = logging.getLogger(__name__)

DEFAULT_API_VERSION = "2025-01"
DEFAULT_LOCATION_ID = "gid://shopify/Location/1"


def get_store_config() -> dict:
    """Read Shopify store settings from the environment and build a client."""
    load_dotenv()
    shop_name = os.environ.get("SHOPIFY_SHOP_NAME")
    token = os.environ.get("SHOPIFY_ADMIN_TOKEN")
    if not shop_name or not token:
        raise ConfigurationError("SHOPIFY_SHOP_NAME and SHOPIFY_ADMIN_TOKEN must be set")

    api_version = os.environ.get("SHOPIFY_API_VERSION", DEFAULT_API_VERSION)
    return {
        "shop_name": shop_name,
        "api_version": api_version,
        "default_location_id": os.environ.get("SHOPIFY_DEFAULT_LOCATION_ID", DEFAULT_LOCATION_ID),
        "cors_origins": [
            origin.strip()
            for origin in os.environ.get("CATALOG_CORS_ORIGINS", "").split(",")
            if origin.strip()
        ],
        "client": ShopifyGraphQLClient(shop_name, token, api_version=api_version)
    }


def to_gid(resource: str, value) -> str:
    """Build a Shopify GID from a numeric id; full GIDs pass through."""
    value = str(value).strip()
    if not value or value.startswith("gid://"):
        return value
    return f"gid://shopify/{resource}/{value}"


def compact(values: dict) -> dict:
    """Drop keys whose value is None so only supplied fields are sent."""
    return {key: value for key, value in values.items() if value is not None}


def mutation_payload(response, operation: str):
    """Return ``data[operation]`` from a transport response, or None."""
    data = (response.json() or {}).get("data") or {}
    return data.get(operation)


def raise_for_user_errors(payload, operation: str) -> None:
    """Raise ValidationFailed when a mutation payload carries userErrors."""
    errors = (payload or {}).get("userErrors") or []
    if errors:
        logger.error("Shopify %s errors: %s", operation, errors)
        raise ValidationFailed([error.get("message", "") for error in errors])


def require_entity(payload, key: str, failure_message: str) -> dict:
    """Return ``payload[key]`` or raise OperationFailed when it is missing."""
    entity = (payload or {}).get(key)
    if not entity:
        logger.error("%s: response had no %s", failure_message, key)
        raise OperationFailed(failure_message)
    return entity
