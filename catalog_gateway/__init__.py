"""Data-access and validation layer over the Shopify GraphQL Admin API."""

__version__ = "0.1.0"
