"""Main application entry point for the elCofre catalogue and checkout engine."""

import logging
import sys

from src.catalog_domain.application.catalog_service import CatalogApplicationService
from src.catalog_domain.application.product_service import ProductApplicationService
from src.catalog_domain.application.shop_service import ShopApplicationService
from src.catalog_domain.infrastructure.api_clients.remote_store_api_client import RemoteStoreApiClient
from src.catalog_domain.infrastructure.persistence.api_repository import ApiProductRepository, ApiShopRepository
from src.catalog_domain.infrastructure.persistence.json_file_repository import (
    JsonFileProductRepository,
    JsonFileShopRepository,
)
from src.checkout_domain.application.checkout_service import CheckoutApplicationService
from src.common.config.backend import BackendSelector
from src.common.exceptions.custom_exceptions import LocalStoreError, StoreError
from src.common.logger_config import setup_logging

logger = logging.getLogger(__name__)


def setup_dependencies() -> tuple[ProductApplicationService, ShopApplicationService, CheckoutApplicationService]:
    """Checks the remote store, opens the local files and wires up the services."""
    api_client = RemoteStoreApiClient()
    backend = BackendSelector.detect(api_client)

    local_products = JsonFileProductRepository()
    local_shops = JsonFileShopRepository()
    try:
        local_products.open()
        local_shops.open()
    except LocalStoreError as e:
        logger.error(f"{e} Shutting down...")
        sys.exit(1)

    product_service = ProductApplicationService(local_products, ApiProductRepository(api_client), backend)
    shop_service = ShopApplicationService(local_shops, ApiShopRepository(api_client), backend)
    checkout_service = CheckoutApplicationService(product_service, shop_service)

    if backend.is_remote_active():
        try:
            shop_service.refresh_from_remote()
        except StoreError as e:
            backend.use_local(str(e))

    return product_service, shop_service, checkout_service


if __name__ == "__main__":
    setup_logging()
    logger.info("Verifying local files...")

    product_service, shop_service, checkout_service = setup_dependencies()
    catalog_service = CatalogApplicationService(product_service, shop_service)

    products = product_service.list_products()
    shops = shop_service.list_shops()
    logger.info(f"Starting program with {len(products)} products and {len(shops)} shops.")
    for shop in shops:
        offered = catalog_service.products_in_shop(shop.name)
        logger.info(f'  "{shop.name}" ({shop.business_model.value}) sells {len(offered)} products.')
