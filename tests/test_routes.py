import os
import sys
import unittest
from unittest.mock import AsyncMock, Mock

import requests

CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from catalog_gateway.app import create_app
from tests.helpers import StubTransport, collection_node, product_node, user_errors


class TestProductRoutes(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.transport = StubTransport()
        self.app = create_app(transport=self.transport, default_location_id="gid://shopify/Location/5")
        self.client = self.app.test_client()

    async def test_create_product(self):
        self.transport.bodies.append(
            {"data": {"productCreate": {"product": product_node(), "userErrors": []}}}
        )

        response = await self.client.post("/products", json={"title": "Green Snowboard"})

        self.assertEqual(response.status_code, 201)
        body = await response.get_json()
        self.assertEqual(body["status"], "success")
        self.assertEqual(body["data"]["id"], "gid://shopify/Product/1")

    async def test_create_product_blank_title_is_bad_request(self):
        response = await self.client.post("/products", json={"title": "  "})

        self.assertEqual(response.status_code, 400)
        body = await response.get_json()
        self.assertEqual(body["field"], "title")
        self.assertEqual(self.transport.calls, [])

    async def test_user_errors_are_unprocessable(self):
        self.transport.bodies.append({
            "data": {"productCreate": {"product": None, "userErrors": user_errors("Handle is taken")}}
        })

        response = await self.client.post("/products", json={"title": "Board"})

        self.assertEqual(response.status_code, 422)
        body = await response.get_json()
        self.assertEqual(body["errors"], ["Handle is taken"])

    async def test_get_missing_product_is_not_found(self):
        self.transport.bodies.append({"data": {"product": None}})

        response = await self.client.get("/products/404")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(self.transport.last_variables, {"id": "gid://shopify/Product/404"})

    async def test_list_products_reads_query_args(self):
        self.transport.bodies.append({"data": {"products": {"edges": []}}})

        response = await self.client.get("/products?first=5&sort_key=title&reverse=true")

        self.assertEqual(response.status_code, 200)
        body = await response.get_json()
        self.assertEqual(body["data"], [])
        self.assertEqual(body["count"], 0)
        self.assertEqual(self.transport.last_variables, {"first": 5, "sortKey": "TITLE", "reverse": True})

    async def test_list_products_unknown_sort_key(self):
        response = await self.client.get("/products?sort_key=popularity")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.transport.calls, [])

    async def test_update_variants_uses_configured_location(self):
        self.transport.bodies.append({
            "data": {"productVariantsBulkUpdate": {"productVariants": [], "userErrors": []}}
        })

        response = await self.client.post(
            "/products/1/variants", json={"variants": [{"id": "11", "inventory_quantity": 3}]}
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.transport.last_variables, {
            "productId": "gid://shopify/Product/1",
            "variants": [{
                "id": "gid://shopify/ProductVariant/11",
                "inventoryQuantities": [{"availableQuantity": 3, "locationId": "gid://shopify/Location/5"}]
            }]
        })

    async def test_delete_product(self):
        self.transport.bodies.append(
            {"data": {"productDelete": {"deletedProductId": "gid://shopify/Product/1", "userErrors": []}}}
        )

        response = await self.client.delete("/products/1")

        self.assertEqual(response.status_code, 200)

    async def test_update_with_non_object_body_is_bad_request(self):
        response = await self.client.patch("/products/1", json=["title", "X"])

        self.assertEqual(response.status_code, 400)
        body = await response.get_json()
        self.assertEqual(body["status"], "error")
        self.assertEqual(self.transport.calls, [])

    async def test_update_variants_with_non_object_entry_is_bad_request(self):
        response = await self.client.post("/products/1/variants", json={"variants": ["11"]})

        self.assertEqual(response.status_code, 400)
        body = await response.get_json()
        self.assertEqual(body["message"], "variants must be a list of objects")
        self.assertEqual(self.transport.calls, [])

    async def test_unreadable_shopify_response_is_bad_gateway(self):
        transport = Mock(send=AsyncMock(
            side_effect=requests.exceptions.JSONDecodeError("Expecting value", "<html>", 0)
        ))
        client = create_app(transport=transport).test_client()

        response = await client.get("/products/1")

        self.assertEqual(response.status_code, 502)
        body = await response.get_json()
        self.assertEqual(body["message"], "Shopify API error")


class TestCollectionRoutes(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.transport = StubTransport()
        self.app = create_app(transport=self.transport)
        self.client = self.app.test_client()

    async def test_update_collection(self):
        self.transport.bodies.append({
            "data": {"collectionUpdate": {"collection": collection_node(title="Spring"), "userErrors": []}}
        })

        response = await self.client.patch("/collections/7", json={"title": "Spring"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            self.transport.last_variables,
            {"input": {"id": "gid://shopify/Collection/7", "title": "Spring"}}
        )

    async def test_update_with_non_object_body_is_bad_request(self):
        response = await self.client.patch("/collections/7", json="Spring")

        self.assertEqual(response.status_code, 400)
        body = await response.get_json()
        self.assertEqual(body["status"], "error")
        self.assertEqual(self.transport.calls, [])

    async def test_product_ids_must_be_a_list(self):
        response = await self.client.post("/collections/7/products", json={"product_ids": "1"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.transport.calls, [])

    async def test_add_products_requires_ids(self):
        response = await self.client.post("/collections/7/products", json={"product_ids": []})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.transport.calls, [])

    async def test_remove_products(self):
        self.transport.bodies.append({"data": {"collectionRemoveProducts": {"userErrors": []}}})

        response = await self.client.delete("/collections/7/products", json={"product_ids": ["1", "2"]})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.transport.last_variables, {
            "id": "gid://shopify/Collection/7",
            "productIds": ["gid://shopify/Product/1", "gid://shopify/Product/2"]
        })

    async def test_missing_collection_payload_is_bad_gateway(self):
        self.transport.bodies.append({"data": {"collectionCreate": {"collection": None, "userErrors": []}}})

        response = await self.client.post("/collections", json={"title": "Winter"})

        self.assertEqual(response.status_code, 502)


if __name__ == "__main__":
    unittest.main()
