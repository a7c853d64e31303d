import logging

from catalog_gateway.services.exceptions import OperationFailed
from catalog_gateway.services.normalizers import normalize_product, normalize_variant, unwrap_edges
from catalog_gateway.services.shopify_graphql import ensure_transport
from catalog_gateway.services.shopify_helpers import (
    DEFAULT_LOCATION_ID,
    compact,
    mutation_payload,
    raise_for_user_errors,
    require_entity,
)
from catalog_gateway.services.validation import ProductSortKey, ProductStatus


logger = logging.getLogger(__name__)


PRODUCT_FIELDS = """
    id
    title
    handle
    status
    description
    variants(first: 10) {
      edges {
        node {
          id
          price
          barcode
          createdAt
          title
          sku
          inventoryQuantity
        }
      }
    }
"""

CREATE_PRODUCT = """
mutation createProduct($product: ProductCreateInput!) {
  productCreate(product: $product) {
    product { %s }
    userErrors { field message }
  }
}
""" % PRODUCT_FIELDS

UPDATE_PRODUCT = """
mutation updateProduct($product: ProductUpdateInput!) {
  productUpdate(product: $product) {
    product { %s }
    userErrors { field message }
  }
}
""" % PRODUCT_FIELDS

GET_PRODUCT = """
query getProduct($id: ID!) {
  product(id: $id) { %s }
}
""" % PRODUCT_FIELDS

LIST_PRODUCTS = """
query getProducts($first: Int!, $after: String, $query: String, $sortKey: ProductSortKeys, $reverse: Boolean) {
  products(first: $first, after: $after, query: $query, sortKey: $sortKey, reverse: $reverse) {
    edges {
      node {
        id
        title
        handle
        status
        description
        variants(first: 1) {
          edges {
            node { id price }
          }
        }
      }
    }
  }
}
"""

DELETE_PRODUCT = """
mutation deleteProduct($input: ProductDeleteInput!) {
  productDelete(input: $input) {
    deletedProductId
    userErrors { field message }
  }
}
"""

UPDATE_VARIANTS = """
mutation updateVariants($productId: ID!, $variants: [ProductVariantsBulkInput!]!) {
  productVariantsBulkUpdate(productId: $productId, variants: $variants) {
    productVariants {
      id
      price
      barcode
      createdAt
      sku
    }
    userErrors { field message }
  }
}
"""


def _status_value(status):
    if status is None:
        return None
    return ProductStatus(status).value


class ProductRepository:
    """Products and variants through the Shopify Admin GraphQL API."""

    def __init__(self, transport, default_location_id: str = DEFAULT_LOCATION_ID):
        self.transport = ensure_transport(transport)
        self.default_location_id = default_location_id

    @staticmethod
    def _product_input(product_input: dict) -> dict:
        return compact({
            "id": product_input.get("id"),
            "title": product_input.get("title"),
            "descriptionHtml": product_input.get("description"),
            "vendor": product_input.get("vendor"),
            "productType": product_input.get("product_type"),
            "tags": product_input.get("tags"),
            "status": _status_value(product_input.get("status")),
        })

    async def create(self, product_input: dict) -> dict:
        """
        Create a product.

        Args:
            product_input: Dict with title and optional description, vendor,
                product_type, tags and status (defaults to ACTIVE)

        Returns:
            Normalized product with up to 10 variants
        """
        variables = self._product_input(product_input)
        variables.setdefault("status", ProductStatus.ACTIVE.value)

        response = await self.transport.send(CREATE_PRODUCT, {"product": variables})
        payload = mutation_payload(response, "productCreate")
        raise_for_user_errors(payload, "productCreate")
        product = require_entity(payload, "product", "Failed to create product")
        return normalize_product(product)

    async def update(self, product_input: dict) -> dict:
        """Update a product; only the supplied fields are sent."""
        response = await self.transport.send(
            UPDATE_PRODUCT, {"product": self._product_input(product_input)}
        )
        payload = mutation_payload(response, "productUpdate")
        raise_for_user_errors(payload, "productUpdate")
        product = require_entity(payload, "product", "Failed to update product")
        return normalize_product(product)

    async def find_by_id(self, product_id: str):
        response = await self.transport.send(GET_PRODUCT, {"id": product_id})
        product = ((response.json() or {}).get("data") or {}).get("product")
        if not product:
            return None
        return normalize_product(product)

    async def find_all(
        self,
        first: int = 25,
        query: str = "",
        sort_key=ProductSortKey.CREATED_AT,
        reverse: bool = False,
        after: str = None
    ) -> list:
        """List products with a lighter projection (first variant id and price only)."""
        variables = compact({
            "first": first or 25,
            "after": after,
            "query": query or None,
            "sortKey": ProductSortKey(sort_key or ProductSortKey.CREATED_AT).value,
            "reverse": bool(reverse),
        })
        response = await self.transport.send(LIST_PRODUCTS, variables)
        products = ((response.json() or {}).get("data") or {}).get("products")
        return [normalize_product(node) for node in unwrap_edges(products)]

    async def delete(self, product_id: str) -> bool:
        response = await self.transport.send(DELETE_PRODUCT, {"input": {"id": product_id}})
        payload = mutation_payload(response, "productDelete")
        raise_for_user_errors(payload, "productDelete")
        return bool((payload or {}).get("deletedProductId"))

    def _variant_input(self, variant: dict) -> dict:
        variant_input = compact({
            "id": variant.get("id"),
            "price": variant.get("price"),
            "barcode": variant.get("barcode"),
            "sku": variant.get("sku"),
        })
        quantity = variant.get("inventory_quantity")
        if quantity is not None:
            variant_input["inventoryQuantities"] = [
                {
                    "availableQuantity": int(quantity),
                    "locationId": self.default_location_id
                }
            ]
        return variant_input

    async def update_variants(self, product_id: str, variants: list) -> list:
        """
        Bulk update variants of a product.

        Args:
            product_id: Shopify product GID
            variants: List of dicts with id and optional price, barcode, sku,
                inventory_quantity (set at the default location)

        Returns:
            List of updated variant summaries
        """
        variables = {
            "productId": product_id,
            "variants": [self._variant_input(variant) for variant in variants],
        }
        response = await self.transport.send(UPDATE_VARIANTS, variables)
        payload = mutation_payload(response, "productVariantsBulkUpdate")
        raise_for_user_errors(payload, "productVariantsBulkUpdate")
        if payload is None:
            logger.error("Shopify productVariantsBulkUpdate returned no payload for %s", product_id)
            raise OperationFailed("Failed to update variants")
        return [normalize_variant(node) for node in payload.get("productVariants") or []]
