from catalog_gateway.services.shopify_graphql import GraphQLResponse


class StubTransport:
    """Records every send() and replays queued response bodies in order."""

    def __init__(self, *bodies):
        self.bodies = list(bodies)
        self.calls = []

    async def send(self, document, variables=None):
        self.calls.append({"document": document, "variables": variables})
        body = self.bodies.pop(0) if self.bodies else {"data": {}}
        return GraphQLResponse(body)

    @property
    def last_variables(self):
        return self.calls[-1]["variables"]


class StatefulProductTransport:
    """Keeps the last written product so updates can be read back."""

    def __init__(self, product):
        self.product = dict(product)
        self.calls = []

    async def send(self, document, variables=None):
        self.calls.append({"document": document, "variables": variables})
        if "productUpdate" in document:
            changes = variables["product"]
            for key in ("title", "status"):
                if key in changes:
                    self.product[key] = changes[key]
            if "descriptionHtml" in changes:
                self.product["description"] = changes["descriptionHtml"]
            return GraphQLResponse({
                "data": {"productUpdate": {"product": dict(self.product), "userErrors": []}}
            })
        if variables.get("id") == self.product["id"]:
            return GraphQLResponse({"data": {"product": dict(self.product)}})
        return GraphQLResponse({"data": {"product": None}})


class StatefulCollectionTransport:
    """Keeps the last written collection so updates can be read back."""

    def __init__(self, collection):
        self.collection = dict(collection)
        self.calls = []

    async def send(self, document, variables=None):
        self.calls.append({"document": document, "variables": variables})
        if "collectionUpdate" in document:
            changes = variables["input"]
            if "title" in changes:
                self.collection["title"] = changes["title"]
            if "descriptionHtml" in changes:
                self.collection["description"] = changes["descriptionHtml"]
            return GraphQLResponse({
                "data": {"collectionUpdate": {"collection": dict(self.collection), "userErrors": []}}
            })
        if variables.get("id") == self.collection["id"]:
            return GraphQLResponse({"data": {"collection": dict(self.collection)}})
        return GraphQLResponse({"data": {"collection": None}})


def product_node(product_id="gid://shopify/Product/1", title="Green Snowboard", **overrides):
    node = {
        "id": product_id,
        "title": title,
        "handle": title.lower().replace(" ", "-"),
        "status": "ACTIVE",
        "description": "",
        "variants": {
            "edges": [
                {
                    "node": {
                        "id": "gid://shopify/ProductVariant/11",
                        "price": "0.00",
                        "barcode": None,
                        "createdAt": "2024-05-01T10:00:00Z",
                        "title": "Default Title",
                        "sku": "",
                        "inventoryQuantity": None
                    }
                }
            ]
        }
    }
    node.update(overrides)
    return node


def collection_node(collection_id="gid://shopify/Collection/7", title="Winter", **overrides):
    node = {
        "id": collection_id,
        "title": title,
        "handle": title.lower(),
        "description": None,
        "image": None,
    }
    node.update(overrides)
    return node


def user_errors(*messages):
    return [{"field": ["input"], "message": message} for message in messages]
