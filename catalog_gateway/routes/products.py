from quart import Blueprint, current_app, jsonify, request

from catalog_gateway.routes import bad_body, error_response, list_params
from catalog_gateway.services.shopify_helpers import to_gid

products = Blueprint("products", __name__)


@products.route("/products", methods=["POST"])
async def create_product():
    """
    Create a product on Shopify.

    Expected JSON payload:
    {
        "title": "Green Snowboard",
        "description": "<p>...</p>" (optional),
        "vendor": "...", "product_type": "...", "tags": ["..."] (optional),
        "status": "ACTIVE" | "ARCHIVED" | "DRAFT" (optional)
    }
    """
    data = await request.get_json()
    if not data:
        return jsonify({"status": "error", "message": "Request body must be valid JSON"}), 400
    if not isinstance(data, dict):
        return bad_body()
    try:
        product = await current_app.product_service.create_product(data)
    except Exception as exc:
        return error_response(exc, "create product")
    return jsonify({"status": "success", "data": product}), 201


@products.route("/products", methods=["GET"])
async def list_products():
    try:
        result = await current_app.product_service.list_products(**list_params(request.args))
    except Exception as exc:
        return error_response(exc, "list products")
    return jsonify({"status": "success", "data": result, "count": len(result)}), 200


@products.route("/products/<product_id>", methods=["GET"])
async def get_product(product_id):
    try:
        product = await current_app.product_service.get_product_by_id(to_gid("Product", product_id))
    except Exception as exc:
        return error_response(exc, "retrieve product")
    if not product:
        return jsonify({"status": "error", "message": "Product not found"}), 404
    return jsonify({"status": "success", "data": product}), 200


@products.route("/products/<product_id>", methods=["PATCH"])
async def update_product(product_id):
    data = await request.get_json() or {}
    if not isinstance(data, dict):
        return bad_body()
    data["id"] = to_gid("Product", product_id)
    try:
        product = await current_app.product_service.update_product(data)
    except Exception as exc:
        return error_response(exc, "update product")
    return jsonify({"status": "success", "data": product}), 200


@products.route("/products/<product_id>", methods=["DELETE"])
async def delete_product(product_id):
    try:
        deleted = await current_app.product_service.delete_product(to_gid("Product", product_id))
    except Exception as exc:
        return error_response(exc, "delete product")
    if not deleted:
        return jsonify({"status": "error", "message": "Product not found"}), 404
    return jsonify({"status": "success", "deleted": True}), 200


@products.route("/products/<product_id>/variants", methods=["POST"])
async def update_variants(product_id):
    """Bulk update variants: {"variants": [{"id": ..., "price": ..., "inventory_quantity": ...}]}"""
    data = await request.get_json() or {}
    if not isinstance(data, dict):
        return bad_body()
    raw_variants = data.get("variants") or []
    if not isinstance(raw_variants, list) or not all(isinstance(v, dict) for v in raw_variants):
        return bad_body("variants must be a list of objects")
    variants = [
        {**variant, "id": to_gid("ProductVariant", variant.get("id", ""))}
        for variant in raw_variants
    ]
    try:
        result = await current_app.product_service.update_variants(
            to_gid("Product", product_id), variants
        )
    except Exception as exc:
        return error_response(exc, "update variants")
    return jsonify({"status": "success", "data": result, "count": len(result)}), 200


@products.route("/products/flow", methods=["POST"])
async def create_product_flow():
    try:
        result = await current_app.product_service.create_product_flow()
    except Exception as exc:
        return error_response(exc, "run product flow")
    return jsonify({"status": "success", **result}), 201
