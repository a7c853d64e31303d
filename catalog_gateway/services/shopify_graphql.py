import asyncio
import logging
from typing import Any, Dict, Optional, Protocol, runtime_checkable

import requests

from catalog_gateway.services.exceptions import ShopifyAPIError


logger = logging.getLogger(__name__)


class GraphQLResponse:
    """Parsed GraphQL response body with ``data`` and optional ``errors``."""

    def __init__(self, payload: dict):
        self._payload = payload or {}

    def json(self) -> dict:
        return self._payload


@runtime_checkable
class GraphQLTransport(Protocol):
    """Anything that can send a GraphQL document and return a response."""

    async def send(self, document: str, variables: Optional[Dict[str, Any]] = None) -> Any:
        ...


def ensure_transport(transport) -> GraphQLTransport:
    """Reject transports that do not expose an awaitable ``send``."""
    if not isinstance(transport, GraphQLTransport) or not callable(transport.send):
        raise TypeError(
            f"transport must provide send(document, variables), got {type(transport).__name__}"
        )
    return transport


class ShopifyGraphQLClient:
    def __init__(self, shop_name: str, access_token: str, api_version: str = "2025-01", timeout: int = 15):
        self.shop_name = shop_name
        self.access_token = access_token
        self.api_version = api_version
        self.timeout = timeout
        self.endpoint = (
            f"https://{shop_name}.myshopify.com/"
            f"admin/api/{api_version}/graphql.json"
        )
        self.headers = {
            "Content-Type": "application/json",
            "X-Shopify-Access-Token": access_token
        }

    async def send(self, document: str, variables: Optional[Dict[str, Any]] = None) -> GraphQLResponse:
        """
        Post a GraphQL document to the Admin API.

        The blocking HTTP call runs in a worker thread so callers can await it
        from an event loop.

        Args:
            document: GraphQL query or mutation text
            variables: Variables for the document

        Returns:
            GraphQLResponse wrapping the parsed JSON body
        """
        return await asyncio.to_thread(self._post, document, variables or {})

    def _post(self, document: str, variables: dict) -> GraphQLResponse:
        response = requests.post(
            self.endpoint,
            json={"query": document, "variables": variables},
            headers=self.headers,
            timeout=self.timeout
        )
        response.raise_for_status()
        data = response.json()

        if data.get("errors"):
            logger.error("Shopify GraphQL errors: %s", data["errors"])
            raise ShopifyAPIError(
                ", ".join(error.get("message", "Unknown error") for error in data["errors"])
            )

        return GraphQLResponse(data)
