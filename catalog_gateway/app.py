import logging
import os

from dotenv import load_dotenv
from quart import Quart
from quart_cors import cors

from catalog_gateway.routes.collections import collections
from catalog_gateway.routes.products import products
from catalog_gateway.services.collection_repository import CollectionRepository
from catalog_gateway.services.collection_service import CollectionService
from catalog_gateway.services.product_repository import ProductRepository
from catalog_gateway.services.product_service import ProductService
from catalog_gateway.services.shopify_helpers import DEFAULT_LOCATION_ID, get_store_config


def create_app(transport=None, default_location_id: str = None, cors_origins: list = None) -> Quart:
    """
    Build the Quart app with its services.

    Without an explicit transport the Shopify client is built from the
    environment (see get_store_config).
    """
    load_dotenv()  # Load environment variables from .env file
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())

    if transport is None:
        store_config = get_store_config()
        transport = store_config["client"]
        default_location_id = default_location_id or store_config["default_location_id"]
        cors_origins = cors_origins if cors_origins is not None else store_config["cors_origins"]

    app = Quart(__name__)
    if cors_origins:
        app = cors(app, allow_origin=cors_origins)

    app.product_service = ProductService(
        ProductRepository(transport, default_location_id or DEFAULT_LOCATION_ID)
    )
    app.collection_service = CollectionService(CollectionRepository(transport))

    app.register_blueprint(products)
    app.register_blueprint(collections)
    return app
