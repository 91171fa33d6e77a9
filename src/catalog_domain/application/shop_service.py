"""Application service for the shop registry: shops, catalogues and earnings."""

import logging
from typing import Callable, Optional, TypeVar

from src.catalog_domain.domain.entities.shop import CatalogueEntry, Shop
from src.catalog_domain.domain.repositories.shop_repository import IShopCacheRepository, IShopRepository
from src.catalog_domain.domain.services import catalog_domain_service
from src.catalog_domain.domain.services.discount_policy import BusinessModel
from src.common.config.backend import BackendSelector
from src.common.exceptions.custom_exceptions import LocalStoreError, NotFoundError, ValidationError
from src.common.utils.text_utils import normalize_brand

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT")


class ShopApplicationService:
    """Shop registry.

    In remote mode the remote store is the only source of truth for the call; afterwards the
    remote shop list is copied into the local file as a cache. A failing copy is only logged.
    """

    def __init__(
        self, local_repo: IShopCacheRepository, remote_repo: IShopRepository, backend: BackendSelector
    ) -> None:
        self.local_repo = local_repo
        self.remote_repo = remote_repo
        self.backend = backend

    def _active_repo(self) -> IShopRepository:
        if self.backend.is_remote_active():
            return self.remote_repo
        return self.local_repo

    def _mirror_to_local(self, shops: list[Shop]) -> None:
        try:
            self.local_repo.save_all(shops)
        except LocalStoreError as e:
            logger.warning(f"Could not mirror remote shops to the local file: {e}")

    # --- Queries ---

    def list_shops(self) -> list[Shop]:
        return self._active_repo().load_all()

    def find_by_name(self, name: str) -> Optional[Shop]:
        return catalog_domain_service.find_by_name(self.list_shops(), name)

    def shop_exists(self, name: str) -> bool:
        return self.find_by_name(name) is not None

    def get_catalogue(self, shop_name: str) -> list[CatalogueEntry]:
        """Catalogue of a shop; empty when the shop does not exist."""
        shop = self.find_by_name(shop_name)
        if shop is None:
            return []
        return list(shop.catalogue)

    def price_at(self, shop_name: str, product_name: str) -> Optional[float]:
        shop = self.find_by_name(shop_name)
        if shop is None:
            return None
        return shop.price_at(product_name)

    def refresh_from_remote(self) -> list[Shop]:
        """Loads the remote shop list and makes it the local copy as well."""
        shops = self.remote_repo.load_all()
        self._mirror_to_local(shops)
        return shops

    # --- Commands ---

    def create_shop(
        self,
        name: str,
        description: str,
        since: int,
        business_model: str | BusinessModel,
        loyalty_threshold: Optional[float] = None,
        sponsor_brand: Optional[str] = None,
    ) -> Shop:
        remote = self.backend.is_remote_active()
        repo = self.remote_repo if remote else self.local_repo

        shops = repo.load_all()
        if catalog_domain_service.find_by_name(shops, name) is not None:
            raise ValidationError(f"Shop '{name}' already exists.")

        shop = Shop(
            name=(name or "").strip(),
            description=description,
            since=since,
            business_model=BusinessModel.from_tag(business_model),
            loyalty_threshold=loyalty_threshold,
            sponsor_brand=normalize_brand(sponsor_brand),
        )
        repo.append(shop)
        if remote:
            self._mirror_to_local(shops + [shop])
        logger.info(f'"{shop.name}" is now part of elCofre family.')
        return shop

    def add_to_catalogue(self, shop_name: str, product_name: str, price_at_shop: float) -> CatalogueEntry:
        _, entry = self._modify_shop(shop_name, lambda shop: shop.add_to_catalogue(product_name, price_at_shop))
        logger.info(f'"{product_name}" is now being sold at "{shop_name}" for {price_at_shop}.')
        return entry

    def remove_from_catalogue(self, shop_name: str, product_name: str) -> Optional[CatalogueEntry]:
        """Removes the last catalogue entry for the product; None when the shop does not list it."""
        _, removed = self._modify_shop(shop_name, lambda shop: shop.remove_from_catalogue(product_name))
        if removed is not None:
            logger.info(f'"{product_name}" is no longer being sold at "{shop_name}".')
        return removed

    def add_earnings(self, shop_name: str, amount: float) -> Shop:
        """Posts earnings to a shop and returns the updated shop."""
        shop, total = self._modify_shop(shop_name, lambda shop: shop.add_earnings(amount))
        logger.info(f'"{shop.name}" has earned {amount:.2f} for a historic total of {total:.2f}.')
        return shop

    def _modify_shop(self, shop_name: str, change: Callable[[Shop], ResultT]) -> tuple[Shop, ResultT]:
        remote = self.backend.is_remote_active()
        repo = self.remote_repo if remote else self.local_repo

        shops = repo.load_all()
        shop = catalog_domain_service.find_by_name(shops, shop_name)
        if shop is None:
            raise NotFoundError("Shop", shop_name)

        result = change(shop)
        repo.update(shop)
        if remote:
            self._mirror_to_local(shops)
        return shop, result
