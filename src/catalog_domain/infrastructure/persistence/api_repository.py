"""Remote API implementation of the product and shop repositories."""

import logging
from typing import Any, Callable, Generic, TypeVar

from src.catalog_domain.domain.entities.product import Product
from src.catalog_domain.domain.entities.shop import Shop
from src.catalog_domain.domain.repositories.product_repository import IProductRepository
from src.catalog_domain.domain.repositories.shop_repository import IShopRepository
from src.catalog_domain.infrastructure.api_clients.remote_store_api_client import (
    PRODUCTS_RESOURCE,
    SHOPS_RESOURCE,
    RemoteStoreApiClient,
)
from src.catalog_domain.infrastructure.persistence.record_mapper import (
    parse_product_records,
    parse_shop_records,
    product_to_record,
    shop_to_record,
)
from src.common.exceptions.custom_exceptions import APIError, NotFoundError
from src.common.utils.text_utils import same_name

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", Product, Shop)


class ApiRepository(Generic[EntityT]):
    entity_label = "Entity"

    def __init__(
        self,
        api_client: RemoteStoreApiClient,
        resource: str,
        to_record: Callable[[EntityT], dict[str, Any]],
        parse_records: Callable[[list[Any]], list[EntityT]],
    ) -> None:
        self.api_client = api_client
        self.resource = resource
        self._to_record = to_record
        self._parse_records = parse_records

    def load_all(self) -> list[EntityT]:
        return self._parse_records(self.api_client.get_collection(self.resource))

    def append(self, item: EntityT) -> None:
        self.api_client.append(self.resource, self._to_record(item))

    def update(self, item: EntityT) -> None:
        position = self._position_of(item.name)
        if position == -1:
            raise NotFoundError(self.entity_label, item.name)
        self.api_client.update_at(self.resource, position, self._to_record(item))

    def remove(self, name: str) -> bool:
        position = self._position_of(name)
        if position == -1:
            return False
        self.api_client.delete_at(self.resource, position)
        logger.info(f"Removed {self.entity_label.lower()} '{name}' at remote position {position}")
        return True

    def _position_of(self, name: str) -> int:
        """Resolves the current remote position of a record from a fresh listing.

        Positions shift after every remote mutation and are counted on the raw array, so
        records the parser would skip still occupy a slot. A record inside a nested array
        has no position of its own, so it is read-only.
        """
        for index, record in enumerate(self.api_client.get_collection(self.resource)):
            if isinstance(record, dict) and same_name(record.get("name"), name):
                return index
            if isinstance(record, list) and any(
                isinstance(item, dict) and same_name(item.get("name"), name) for item in record
            ):
                raise APIError(
                    f"{self.entity_label} '{name}' is nested at remote position {index} and is read-only",
                    operation="resolve",
                    target=self.api_client.collection_url(self.resource),
                )
        return -1


class ApiProductRepository(ApiRepository[Product], IProductRepository):
    entity_label = "Product"

    def __init__(self, api_client: RemoteStoreApiClient) -> None:
        super().__init__(api_client, PRODUCTS_RESOURCE, product_to_record, parse_product_records)


class ApiShopRepository(ApiRepository[Shop], IShopRepository):
    entity_label = "Shop"

    def __init__(self, api_client: RemoteStoreApiClient) -> None:
        super().__init__(api_client, SHOPS_RESOURCE, shop_to_record, parse_shop_records)
