from catalog_gateway.services.collection_repository import CollectionRepository
from catalog_gateway.services.collection_service import CollectionService
from catalog_gateway.services.exceptions import (
    CatalogGatewayError,
    ConfigurationError,
    MissingField,
    OperationFailed,
    ShopifyAPIError,
    ValidationFailed,
)
from catalog_gateway.services.product_repository import ProductRepository
from catalog_gateway.services.product_service import ProductService
from catalog_gateway.services.shopify_graphql import GraphQLResponse, GraphQLTransport, ShopifyGraphQLClient

__all__ = [
    "CatalogGatewayError",
    "CollectionRepository",
    "CollectionService",
    "ConfigurationError",
    "GraphQLResponse",
    "GraphQLTransport",
    "MissingField",
    "OperationFailed",
    "ProductRepository",
    "ProductService",
    "ShopifyAPIError",
    "ShopifyGraphQLClient",
    "ValidationFailed",
]
