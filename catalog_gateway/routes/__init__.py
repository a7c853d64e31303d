import logging

import requests
from quart import jsonify

from catalog_gateway.services.exceptions import (
    MissingField,
    OperationFailed,
    ShopifyAPIError,
    ValidationFailed,
)


logger = logging.getLogger(__name__)


def bad_body(message: str = "Request body must be a JSON object"):
    return jsonify({"status": "error", "message": message}), 400


def error_response(exc: Exception, action: str):
    """Map service errors onto the JSON error envelope and a status code."""
    if isinstance(exc, MissingField):
        return jsonify({"status": "error", "message": str(exc), "field": exc.field}), 400
    # before ValueError: requests' JSONDecodeError subclasses both
    if isinstance(exc, requests.RequestException):
        logger.error("Shopify request failed while trying to %s: %s", action, exc)
        return jsonify({"status": "error", "message": "Shopify API error", "errors": str(exc)}), 502
    if isinstance(exc, ValueError):
        return jsonify({"status": "error", "message": str(exc)}), 400
    if isinstance(exc, ValidationFailed):
        return jsonify({"status": "error", "message": "Validation failed", "errors": exc.messages}), 422
    if isinstance(exc, (OperationFailed, ShopifyAPIError)):
        return jsonify({"status": "error", "message": "Shopify API error", "errors": str(exc)}), 502
    logger.exception("Failed to %s", action)
    return jsonify({"status": "error", "message": f"Failed to {action}: {exc}"}), 500


def list_params(args) -> dict:
    """Read find-all options from query string args."""
    return {
        "first": args.get("first", 25, type=int),
        "query": args.get("query", ""),
        "sort_key": args.get("sort_key"),
        "reverse": args.get("reverse", "false").lower() == "true",
        "after": args.get("after"),
    }
