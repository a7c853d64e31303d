from typing import Optional


class CatalogGatewayError(Exception):
    """Base class for catalog gateway errors."""


class MissingField(CatalogGatewayError):
    """Raised when a required field or id list is absent or blank."""

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"{field} is required")


class ValidationFailed(CatalogGatewayError):
    """Raised when Shopify reports user errors for a mutation."""

    def __init__(self, messages: list):
        self.messages = list(messages)
        super().__init__(", ".join(self.messages))


class OperationFailed(CatalogGatewayError):
    """Raised when Shopify reports success but omits the expected entity."""


class ShopifyAPIError(CatalogGatewayError):
    """Raised when Shopify API returns errors or invalid responses."""


class ConfigurationError(CatalogGatewayError):
    """Raised when the Shopify store settings are missing."""
