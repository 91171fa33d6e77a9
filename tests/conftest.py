# tests/conftest.py
import json
from unittest.mock import Mock

import pytest

from src.catalog_domain.application.catalog_service import CatalogApplicationService
from src.catalog_domain.application.product_service import ProductApplicationService
from src.catalog_domain.application.shop_service import ShopApplicationService
from src.catalog_domain.domain.entities.product import Product
from src.catalog_domain.domain.entities.shop import CatalogueEntry, Shop
from src.catalog_domain.infrastructure.api_clients.remote_store_api_client import RemoteStoreApiClient
from src.catalog_domain.infrastructure.persistence.api_repository import ApiProductRepository, ApiShopRepository
from src.catalog_domain.infrastructure.persistence.json_file_repository import (
    JsonFileProductRepository,
    JsonFileShopRepository,
)
from src.checkout_domain.application.checkout_service import CheckoutApplicationService
from src.common.config.backend import BackendMode, BackendSelector
from src.common.config.settings import settings


@pytest.fixture(autouse=True)
def mock_store_settings(mocker, tmp_path) -> None:
    """Points every store setting at test locations so no test touches real files or the real API."""
    mocker.patch.object(settings, "PRODUCTS_FILE_PATH", str(tmp_path / "products.json"))
    mocker.patch.object(settings, "SHOPS_FILE_PATH", str(tmp_path / "shops.json"))
    mocker.patch.object(settings, "REMOTE_API_ENABLED", True)
    mocker.patch.object(settings, "REMOTE_API_BASE_URL", "https://store.test/dpoo")
    mocker.patch.object(settings, "REMOTE_API_GROUP_ID", "G-TEST")
    mocker.patch.object(settings, "REMOTE_API_MAX_RETRIES", 0)


@pytest.fixture
def sample_product_records() -> list[dict]:
    """Product records as stored in products.json and returned by the remote API."""
    return [
        {"name": "Laptop", "brand": "Acme Tech", "mrp": 1500.0, "category": "GENERAL", "reviews": []},
        {
            "name": "Olive Oil",
            "brand": "Sol",
            "mrp": 20.0,
            "category": "REDUCED",
            "reviews": [{"rating": 5, "comment": "Great"}, {"rating": 4, "comment": "Good"}],
            "averageRating": 4.5,
        },
        {"name": "Bread", "brand": "Panaderia", "mrp": 3.0, "category": "SUPER_REDUCED", "reviews": []},
    ]


@pytest.fixture
def sample_shop_records() -> list[dict]:
    """Shop records, one per business model."""
    return [
        {
            "name": "TechHub",
            "description": "Computers and more",
            "since": 2010,
            "businessModel": "MAX_PROFIT",
            "earnings": 0.0,
            "catalogue": [{"productName": "Laptop", "priceAtShop": 1210.0}],
        },
        {
            "name": "Corner Shop",
            "description": "Groceries round the corner",
            "since": 1998,
            "businessModel": "LOYALTY",
            "earnings": 0.0,
            "catalogue": [
                {"productName": "Olive Oil", "priceAtShop": 10.5},
                {"productName": "Bread", "priceAtShop": 2.08},
            ],
            "loyaltyThreshold": 30.0,
        },
        {
            "name": "BrandCity",
            "description": "Official brand outlet",
            "since": 2021,
            "businessModel": "SPONSORED",
            "earnings": 0.0,
            "catalogue": [{"productName": "Laptop", "priceAtShop": 1210.0}],
            "sponsorBrand": "Acme Tech",
        },
    ]


@pytest.fixture
def products_file(sample_product_records) -> str:
    with open(settings.PRODUCTS_FILE_PATH, "w", encoding="utf-8") as f:
        json.dump(sample_product_records, f)
    return settings.PRODUCTS_FILE_PATH


@pytest.fixture
def shops_file(sample_shop_records) -> str:
    with open(settings.SHOPS_FILE_PATH, "w", encoding="utf-8") as f:
        json.dump(sample_shop_records, f)
    return settings.SHOPS_FILE_PATH


@pytest.fixture
def local_product_repository(products_file) -> JsonFileProductRepository:
    return JsonFileProductRepository(products_file)


@pytest.fixture
def local_shop_repository(shops_file) -> JsonFileShopRepository:
    return JsonFileShopRepository(shops_file)


@pytest.fixture
def mock_remote_product_repository() -> Mock:
    """Mock for ApiProductRepository."""
    return Mock(spec=ApiProductRepository)


@pytest.fixture
def mock_remote_shop_repository() -> Mock:
    """Mock for ApiShopRepository."""
    return Mock(spec=ApiShopRepository)


@pytest.fixture
def mock_remote_store_api_client() -> Mock:
    """Mock for RemoteStoreApiClient."""
    return Mock(spec=RemoteStoreApiClient)


@pytest.fixture
def backend() -> BackendSelector:
    """Backend selector starting in local mode; tests switch it with use_remote()."""
    return BackendSelector(BackendMode.LOCAL)


@pytest.fixture
def product_service(local_product_repository, mock_remote_product_repository, backend) -> ProductApplicationService:
    return ProductApplicationService(local_product_repository, mock_remote_product_repository, backend)


@pytest.fixture
def shop_service(local_shop_repository, mock_remote_shop_repository, backend) -> ShopApplicationService:
    return ShopApplicationService(local_shop_repository, mock_remote_shop_repository, backend)


@pytest.fixture
def catalog_service(product_service, shop_service) -> CatalogApplicationService:
    return CatalogApplicationService(product_service, shop_service)


@pytest.fixture
def checkout_service(product_service, shop_service) -> CheckoutApplicationService:
    return CheckoutApplicationService(product_service, shop_service)


@pytest.fixture
def general_product() -> Product:
    return Product(name="Laptop", brand="Acme Tech", mrp=1500.0, category="GENERAL")


@pytest.fixture
def reduced_product() -> Product:
    return Product(name="Olive Oil", brand="Sol", mrp=20.0, category="REDUCED", average_rating=4.0)


@pytest.fixture
def loyalty_shop() -> Shop:
    return Shop(
        name="Corner Shop",
        description="Groceries round the corner",
        since=1998,
        business_model="LOYALTY",
        catalogue=[CatalogueEntry("Olive Oil", 10.5)],
        loyalty_threshold=30.0,
    )


@pytest.fixture
def sponsored_shop() -> Shop:
    return Shop(
        name="BrandCity",
        description="Official brand outlet",
        since=2021,
        business_model="SPONSORED",
        catalogue=[CatalogueEntry("Laptop", 1210.0)],
        sponsor_brand="Acme Tech",
    )
