"""Local JSON-file implementation of the product and shop repositories.

Each registry lives in memory as an ordered list and is written back to its file as a
single JSON array after every change.
"""

import copy
import json
import logging
from typing import Any, Callable, Generic, Optional, TypeVar

from src.catalog_domain.domain.entities.product import Product
from src.catalog_domain.domain.entities.shop import Shop
from src.catalog_domain.domain.repositories.product_repository import IProductRepository
from src.catalog_domain.domain.repositories.shop_repository import IShopCacheRepository
from src.catalog_domain.domain.services.catalog_domain_service import position_of
from src.catalog_domain.infrastructure.persistence.record_mapper import (
    parse_product_records,
    parse_shop_records,
    product_to_record,
    shop_to_record,
)
from src.common.config.settings import settings
from src.common.exceptions.custom_exceptions import LocalStoreError, NotFoundError

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", Product, Shop)


class JsonFileRepository(Generic[EntityT]):
    entity_label = "Entity"

    def __init__(
        self,
        file_path: str,
        to_record: Callable[[EntityT], dict[str, Any]],
        parse_records: Callable[[list[Any]], list[EntityT]],
        create_if_missing: bool = False,
    ) -> None:
        self.file_path = file_path
        self.create_if_missing = create_if_missing
        self._to_record = to_record
        self._parse_records = parse_records
        self._items: Optional[list[EntityT]] = None

    def open(self) -> list[EntityT]:
        """Reads the file into memory. A missing file is an error unless ``create_if_missing`` is set."""
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                records = json.load(f)
        except FileNotFoundError as e:
            if not self.create_if_missing:
                raise LocalStoreError(
                    f"The {self.file_path} file can't be accessed", original_exception=e, operation="load", target=self.file_path
                )
            logger.info(f"{self.file_path} not found, creating an empty one.")
            records = []
            self._write_records(records)
        except json.JSONDecodeError as e:
            raise LocalStoreError(
                f"Error decoding {self.file_path}", original_exception=e, operation="load", target=self.file_path
            )
        except OSError as e:
            raise LocalStoreError(
                f"Error reading {self.file_path}", original_exception=e, operation="load", target=self.file_path
            )

        if not isinstance(records, list):
            raise LocalStoreError(
                f"{self.file_path} does not contain a JSON array", operation="load", target=self.file_path
            )

        self._items = self._parse_records(records)
        logger.debug(f"Loaded {len(self._items)} records from {self.file_path}")
        return copy.deepcopy(self._items)

    def load_all(self) -> list[EntityT]:
        """Returns copies; changes only reach the store through append/update/remove."""
        return copy.deepcopy(self._ensure_loaded())

    def save_all(self, items: list[EntityT]) -> None:
        """Replaces the whole collection (used to mirror the remote store into the local file)."""
        self._commit([copy.deepcopy(item) for item in items])

    def append(self, item: EntityT) -> None:
        self._commit(self._ensure_loaded() + [copy.deepcopy(item)])

    def update(self, item: EntityT) -> None:
        items = list(self._ensure_loaded())
        position = position_of(items, item.name)
        if position == -1:
            raise NotFoundError(self.entity_label, item.name)
        items[position] = copy.deepcopy(item)
        self._commit(items)

    def remove(self, name: str) -> bool:
        items = list(self._ensure_loaded())
        position = position_of(items, name)
        if position == -1:
            return False
        items.pop(position)
        self._commit(items)
        return True

    def _ensure_loaded(self) -> list[EntityT]:
        if self._items is None:
            self.open()
        return self._items

    def _commit(self, items: list[EntityT]) -> None:
        # The in-memory list only changes once the file has been written
        self._write_records([self._to_record(item) for item in items])
        self._items = items

    def _write_records(self, records: list[dict[str, Any]]) -> None:
        try:
            with open(self.file_path, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise LocalStoreError(
                f"Error writing {self.file_path}", original_exception=e, operation="save", target=self.file_path
            )


class JsonFileProductRepository(JsonFileRepository[Product], IProductRepository):
    """products.json must exist before the application starts."""

    entity_label = "Product"

    def __init__(self, file_path: Optional[str] = None) -> None:
        super().__init__(
            file_path or settings.PRODUCTS_FILE_PATH,
            product_to_record,
            parse_product_records,
            create_if_missing=False,
        )


class JsonFileShopRepository(JsonFileRepository[Shop], IShopCacheRepository):
    """shops.json is created empty on first use."""

    entity_label = "Shop"

    def __init__(self, file_path: Optional[str] = None) -> None:
        super().__init__(
            file_path or settings.SHOPS_FILE_PATH,
            shop_to_record,
            parse_shop_records,
            create_if_missing=True,
        )
