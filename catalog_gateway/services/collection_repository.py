import logging

from catalog_gateway.services.normalizers import normalize_collection, unwrap_edges
from catalog_gateway.services.shopify_graphql import ensure_transport
from catalog_gateway.services.shopify_helpers import (
    compact,
    mutation_payload,
    raise_for_user_errors,
    require_entity,
)
from catalog_gateway.services.validation import CollectionSortKey


logger = logging.getLogger(__name__)


COLLECTION_FIELDS = """
    id
    title
    handle
    description
    image {
      url
      altText
    }
"""

CREATE_COLLECTION = """
mutation createCollection($input: CollectionInput!) {
  collectionCreate(input: $input) {
    collection { %s }
    userErrors { field message }
  }
}
""" % COLLECTION_FIELDS

UPDATE_COLLECTION = """
mutation updateCollection($input: CollectionInput!) {
  collectionUpdate(input: $input) {
    collection { %s }
    userErrors { field message }
  }
}
""" % COLLECTION_FIELDS

GET_COLLECTION = """
query getCollection($id: ID!) {
  collection(id: $id) {
    %s
    productsCount { count }
  }
}
""" % COLLECTION_FIELDS

LIST_COLLECTIONS = """
query getCollections($first: Int!, $after: String, $query: String, $sortKey: CollectionSortKeys, $reverse: Boolean) {
  collections(first: $first, after: $after, query: $query, sortKey: $sortKey, reverse: $reverse) {
    edges {
      node {
        %s
        productsCount { count }
      }
    }
  }
}
""" % COLLECTION_FIELDS

DELETE_COLLECTION = """
mutation deleteCollection($input: CollectionDeleteInput!) {
  collectionDelete(input: $input) {
    deletedCollectionId
    userErrors { field message }
  }
}
"""

ADD_PRODUCTS = """
mutation addProductsToCollection($id: ID!, $productIds: [ID!]!) {
  collectionAddProducts(id: $id, productIds: $productIds) {
    collection { id }
    userErrors { field message }
  }
}
"""

REMOVE_PRODUCTS = """
mutation removeProductsFromCollection($id: ID!, $productIds: [ID!]!) {
  collectionRemoveProducts(id: $id, productIds: $productIds) {
    userErrors { field message }
  }
}
"""


class CollectionRepository:
    """Collections and their product membership through the Admin GraphQL API."""

    def __init__(self, transport):
        self.transport = ensure_transport(transport)

    @staticmethod
    def _collection_input(collection_input: dict) -> dict:
        # CollectionInput has no published field
        image = collection_input.get("image")
        return compact({
            "id": collection_input.get("id"),
            "title": collection_input.get("title"),
            "descriptionHtml": collection_input.get("description"),
            "image": {"src": image} if image else None,
        })

    async def create(self, collection_input: dict) -> dict:
        response = await self.transport.send(
            CREATE_COLLECTION, {"input": self._collection_input(collection_input)}
        )
        payload = mutation_payload(response, "collectionCreate")
        raise_for_user_errors(payload, "collectionCreate")
        collection = require_entity(payload, "collection", "Failed to create collection")
        return normalize_collection(collection)

    async def update(self, collection_input: dict) -> dict:
        response = await self.transport.send(
            UPDATE_COLLECTION, {"input": self._collection_input(collection_input)}
        )
        payload = mutation_payload(response, "collectionUpdate")
        raise_for_user_errors(payload, "collectionUpdate")
        collection = require_entity(payload, "collection", "Failed to update collection")
        return normalize_collection(collection)

    async def find_by_id(self, collection_id: str):
        response = await self.transport.send(GET_COLLECTION, {"id": collection_id})
        collection = ((response.json() or {}).get("data") or {}).get("collection")
        if not collection:
            return None
        return normalize_collection(collection)

    async def find_all(
        self,
        first: int = 25,
        query: str = "",
        sort_key=CollectionSortKey.ID,
        reverse: bool = False,
        after: str = None
    ) -> list:
        variables = compact({
            "first": first or 25,
            "after": after,
            "query": query or None,
            "sortKey": CollectionSortKey(sort_key or CollectionSortKey.ID).value,
            "reverse": bool(reverse),
        })
        response = await self.transport.send(LIST_COLLECTIONS, variables)
        collections = ((response.json() or {}).get("data") or {}).get("collections")
        return [normalize_collection(node) for node in unwrap_edges(collections)]

    async def delete(self, collection_id: str) -> bool:
        response = await self.transport.send(DELETE_COLLECTION, {"input": {"id": collection_id}})
        payload = mutation_payload(response, "collectionDelete")
        raise_for_user_errors(payload, "collectionDelete")
        return bool((payload or {}).get("deletedCollectionId"))

    async def _change_membership(self, document: str, operation: str, collection_id: str, product_ids: list) -> bool:
        response = await self.transport.send(
            document, {"id": collection_id, "productIds": list(product_ids)}
        )
        payload = mutation_payload(response, operation)
        raise_for_user_errors(payload, operation)
        if payload is None:
            logger.warning("Shopify %s returned no payload for %s", operation, collection_id)
            return False
        return True

    async def add_products(self, collection_id: str, product_ids: list) -> bool:
        """Add products to a collection; True when Shopify reports no user errors."""
        return await self._change_membership(
            ADD_PRODUCTS, "collectionAddProducts", collection_id, product_ids
        )

    async def remove_products(self, collection_id: str, product_ids: list) -> bool:
        """Remove products from a collection; True when Shopify reports no user errors."""
        return await self._change_membership(
            REMOVE_PRODUCTS, "collectionRemoveProducts", collection_id, product_ids
        )
