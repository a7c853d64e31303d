"""
Reshape Shopify GraphQL nodes into flat catalog records.

Optional fields that Shopify returns as null or an empty string are left out
of the record entirely, and connection envelopes (``{"edges": [{"node": ...}]}``)
are unwrapped into plain lists.
"""
from typing import Optional


def _optional(record: dict, key: str, value) -> None:
    if value is not None and value != "":
        record[key] = value


def unwrap_edges(connection) -> list:
    """Return the nodes of a connection, or an empty list."""
    if not connection:
        return []
    return [edge["node"] for edge in connection.get("edges") or [] if edge.get("node")]


def normalize_variant(node: dict) -> dict:
    variant = {"id": node["id"], "price": node.get("price")}
    _optional(variant, "barcode", node.get("barcode"))
    _optional(variant, "created_at", node.get("createdAt"))
    _optional(variant, "title", node.get("title"))
    _optional(variant, "sku", node.get("sku"))
    _optional(variant, "inventory_quantity", node.get("inventoryQuantity"))
    return variant


def normalize_product(node: dict) -> dict:
    product = {
        "id": node["id"],
        "title": node.get("title"),
        "handle": node.get("handle"),
        "status": node.get("status"),
    }
    _optional(product, "description", node.get("description"))
    # variants stay absent when the selection did not ask for them
    if node.get("variants") is not None:
        product["variants"] = [normalize_variant(v) for v in unwrap_edges(node["variants"])]
    return product


def normalize_image(image) -> Optional[dict]:
    if not image or not image.get("url"):
        return None
    normalized = {"url": image["url"]}
    _optional(normalized, "alt_text", image.get("altText"))
    return normalized


def normalize_collection(node: dict) -> dict:
    collection = {
        "id": node["id"],
        "title": node.get("title"),
        "handle": node.get("handle"),
    }
    _optional(collection, "description", node.get("description"))
    _optional(collection, "image", normalize_image(node.get("image")))
    count = (node.get("productsCount") or {}).get("count")
    _optional(collection, "products_count", count)
    return collection
