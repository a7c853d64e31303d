from catalog_gateway.services.collection_repository import CollectionRepository
from catalog_gateway.services.validation import (
    CollectionSortKey,
    coerce_sort_key,
    require_id,
    require_ids,
    require_title,
)


class CollectionService:
    """Business rules for collections before they reach Shopify."""

    def __init__(self, repository: CollectionRepository):
        self.repository = repository

    async def create_collection(self, payload: dict) -> dict:
        require_title(payload, required=True, label="collection title")
        collection_input = dict(payload)
        collection_input["title"] = str(collection_input["title"]).strip()
        # published unless explicitly switched off
        collection_input["published"] = payload.get("published") is not False
        return await self.repository.create(collection_input)

    async def update_collection(self, payload: dict) -> dict:
        require_id(payload.get("id"), "id")
        require_title(payload, required=False, label="collection title")
        collection_input = dict(payload)
        if collection_input.get("title") is not None:
            collection_input["title"] = str(collection_input["title"]).strip()
        return await self.repository.update(collection_input)

    async def get_collection_by_id(self, collection_id: str):
        require_id(collection_id, "id")
        return await self.repository.find_by_id(collection_id)

    async def list_collections(
        self,
        first: int = 25,
        query: str = "",
        sort_key=None,
        reverse: bool = False,
        after: str = None
    ) -> list:
        return await self.repository.find_all(
            first=first,
            query=query,
            sort_key=coerce_sort_key(sort_key, CollectionSortKey, CollectionSortKey.ID),
            reverse=reverse,
            after=after
        )

    async def delete_collection(self, collection_id: str) -> bool:
        require_id(collection_id, "id")
        return await self.repository.delete(collection_id)

    async def add_products_to_collection(self, collection_id: str, product_ids: list) -> bool:
        require_id(collection_id, "collection_id")
        require_ids(product_ids, "product_ids")
        return await self.repository.add_products(collection_id, product_ids)

    async def remove_products_from_collection(self, collection_id: str, product_ids: list) -> bool:
        require_id(collection_id, "collection_id")
        require_ids(product_ids, "product_ids")
        return await self.repository.remove_products(collection_id, product_ids)
