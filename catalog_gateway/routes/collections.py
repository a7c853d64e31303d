from quart import Blueprint, current_app, jsonify, request

from catalog_gateway.routes import bad_body, error_response, list_params
from catalog_gateway.services.shopify_helpers import to_gid

collections = Blueprint("collections", __name__)


@collections.route("/collections", methods=["POST"])
async def create_collection():
    """
    Create a collection.

    Expected JSON payload:
    {
        "title": "Winter",
        "description": "...", "image": "https://...", "published": true (optional)
    }
    """
    data = await request.get_json()
    if not data:
        return jsonify({"status": "error", "message": "Request body must be valid JSON"}), 400
    if not isinstance(data, dict):
        return bad_body()
    try:
        collection = await current_app.collection_service.create_collection(data)
    except Exception as exc:
        return error_response(exc, "create collection")
    return jsonify({"status": "success", "data": collection}), 201


@collections.route("/collections", methods=["GET"])
async def list_collections():
    try:
        result = await current_app.collection_service.list_collections(**list_params(request.args))
    except Exception as exc:
        return error_response(exc, "list collections")
    return jsonify({"status": "success", "data": result, "count": len(result)}), 200


@collections.route("/collections/<collection_id>", methods=["GET"])
async def get_collection(collection_id):
    try:
        collection = await current_app.collection_service.get_collection_by_id(
            to_gid("Collection", collection_id)
        )
    except Exception as exc:
        return error_response(exc, "retrieve collection")
    if not collection:
        return jsonify({"status": "error", "message": "Collection not found"}), 404
    return jsonify({"status": "success", "data": collection}), 200


@collections.route("/collections/<collection_id>", methods=["PATCH"])
async def update_collection(collection_id):
    data = await request.get_json() or {}
    if not isinstance(data, dict):
        return bad_body()
    data["id"] = to_gid("Collection", collection_id)
    try:
        collection = await current_app.collection_service.update_collection(data)
    except Exception as exc:
        return error_response(exc, "update collection")
    return jsonify({"status": "success", "data": collection}), 200


@collections.route("/collections/<collection_id>", methods=["DELETE"])
async def delete_collection(collection_id):
    try:
        deleted = await current_app.collection_service.delete_collection(
            to_gid("Collection", collection_id)
        )
    except Exception as exc:
        return error_response(exc, "delete collection")
    if not deleted:
        return jsonify({"status": "error", "message": "Collection not found"}), 404
    return jsonify({"status": "success", "deleted": True}), 200


def _product_ids(data):
    """GIDs for the body's product_ids, or None when the body is not shaped that way."""
    if not isinstance(data, dict):
        return None
    product_ids = data.get("product_ids") or []
    if not isinstance(product_ids, list):
        return None
    return [to_gid("Product", product_id) for product_id in product_ids]


@collections.route("/collections/<collection_id>/products", methods=["POST"])
async def add_products(collection_id):
    product_ids = _product_ids(await request.get_json() or {})
    if product_ids is None:
        return bad_body("product_ids must be a list")
    try:
        added = await current_app.collection_service.add_products_to_collection(
            to_gid("Collection", collection_id), product_ids
        )
    except Exception as exc:
        return error_response(exc, "add products to collection")
    return jsonify({"status": "success" if added else "error", "updated": added}), 200 if added else 502


@collections.route("/collections/<collection_id>/products", methods=["DELETE"])
async def remove_products(collection_id):
    product_ids = _product_ids(await request.get_json() or {})
    if product_ids is None:
        return bad_body("product_ids must be a list")
    try:
        removed = await current_app.collection_service.remove_products_from_collection(
            to_gid("Collection", collection_id), product_ids
        )
    except Exception as exc:
        return error_response(exc, "remove products from collection")
    return jsonify({"status": "success" if removed else "error", "updated": removed}), 200 if removed else 502
