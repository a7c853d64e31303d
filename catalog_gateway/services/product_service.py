import logging
import random

from catalog_gateway.services.exceptions import OperationFailed
from catalog_gateway.services.product_repository import ProductRepository
from catalog_gateway.services.validation import (
    ProductSortKey,
    coerce_sort_key,
    coerce_status,
    require_id,
    require_title,
    require_variants,
)


logger = logging.getLogger(__name__)

FLOW_COLORS = ["Red", "Orange", "Yellow", "Green"]
FLOW_VARIANT_PRICE = "100.00"


class ProductService:
    """Validates product requests before handing them to the repository."""

    def __init__(self, repository: ProductRepository):
        self.repository = repository

    @staticmethod
    def _clean_input(payload: dict) -> dict:
        product_input = dict(payload)
        if product_input.get("title") is not None:
            product_input["title"] = str(product_input["title"]).strip()
        if "status" in product_input:
            product_input["status"] = coerce_status(product_input["status"])
        return product_input

    async def create_product(self, payload: dict) -> dict:
        require_title(payload, required=True, label="product title")
        return await self.repository.create(self._clean_input(payload))

    async def update_product(self, payload: dict) -> dict:
        require_id(payload.get("id"), "id")
        require_title(payload, required=False, label="product title")
        return await self.repository.update(self._clean_input(payload))

    async def get_product_by_id(self, product_id: str):
        require_id(product_id, "id")
        return await self.repository.find_by_id(product_id)

    async def list_products(
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
            sort_key=coerce_sort_key(sort_key, ProductSortKey, ProductSortKey.CREATED_AT),
            reverse=reverse,
            after=after
        )

    async def delete_product(self, product_id: str) -> bool:
        require_id(product_id, "id")
        return await self.repository.delete(product_id)

    async def update_variants(self, product_id: str, variants: list) -> list:
        require_id(product_id, "product_id")
        require_variants(variants)
        return await self.repository.update_variants(product_id, variants)

    async def create_product_flow(self) -> dict:
        """Create a sample snowboard product, then reprice its first variant."""
        title = f"{random.choice(FLOW_COLORS)} Snowboard"
        product = await self.create_product({"title": title})

        variants = product.get("variants") or []
        if not variants:
            logger.error("Product %s was created without variants", product["id"])
            raise OperationFailed(f"Product {product['id']} has no variant to update")

        updated = await self.update_variants(
            product["id"], [{"id": variants[0]["id"], "price": FLOW_VARIANT_PRICE}]
        )
        return {"product": product, "variants": updated}
