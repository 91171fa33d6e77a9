"""Catalogue operations that need both registries: validated expansion, views and pruning."""

import logging

from src.catalog_domain.application.product_service import ProductApplicationService
from src.catalog_domain.application.shop_service import ShopApplicationService
from src.catalog_domain.domain.services import catalog_domain_service
from src.common.dtos.catalog_dtos import CatalogueItemDTO, ShopOfferDTO
from src.common.exceptions.custom_exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class CatalogApplicationService:
    def __init__(self, product_service: ProductApplicationService, shop_service: ShopApplicationService) -> None:
        self.product_service = product_service
        self.shop_service = shop_service

    def expand_catalogue(self, shop_name: str, product_name: str, price_at_shop: float):
        """Lists a product at a shop after checking both exist and the price is acceptable.

        A price is acceptable when it is not negative and at least one product in the
        registry has an MRP greater than or equal to it.
        """
        if not self.shop_service.shop_exists(shop_name):
            raise NotFoundError("Shop", shop_name)

        products = self.product_service.list_products()
        product = catalog_domain_service.find_by_name(products, product_name)
        if product is None:
            raise NotFoundError("Product", product_name)

        if price_at_shop is None or price_at_shop < 0:
            raise ValidationError(f"Price cannot be negative: {price_at_shop}")
        if not catalog_domain_service.price_within_limit(price_at_shop, products):
            raise ValidationError(f"Price exceeds maximum allowed: {price_at_shop}")

        return self.shop_service.add_to_catalogue(shop_name, product.name, price_at_shop)

    def reduce_catalogue(self, shop_name: str, product_name: str):
        removed = self.shop_service.remove_from_catalogue(shop_name, product_name)
        if removed is None:
            raise NotFoundError("Catalogue entry", f"{product_name} @ {shop_name}")
        return removed

    def products_in_shop(self, shop_name: str) -> list[CatalogueItemDTO]:
        """Catalogue of a shop priced for the buyer. Entries whose product no longer exists are skipped."""
        shop = self.shop_service.find_by_name(shop_name)
        if shop is None:
            raise NotFoundError("Shop", shop_name)

        products = self.product_service.list_products()
        items = []
        for entry in shop.catalogue:
            product = catalog_domain_service.find_by_name(products, entry.product_name)
            if product is None:
                logger.debug(f'Skipping dangling entry "{entry.product_name}" in "{shop.name}"')
                continue
            items.append(
                CatalogueItemDTO(
                    product_name=product.name,
                    brand=product.brand,
                    listed_price=entry.price_at_shop,
                    final_price=shop.calculate_discount(entry.price_at_shop, product),
                )
            )
        return items

    def offers_for_product(self, product_name: str) -> list[ShopOfferDTO]:
        product = self.product_service.find_by_name(product_name)
        if product is None:
            raise NotFoundError("Product", product_name)

        offers = []
        for shop in self.shop_service.list_shops():
            listed_price = shop.price_at(product.name)
            if listed_price is None:
                continue
            offers.append(
                ShopOfferDTO(
                    shop_name=shop.name,
                    product_name=product.name,
                    brand=product.brand,
                    listed_price=listed_price,
                    final_price=shop.calculate_discount(listed_price, product),
                    regular_customer=shop.is_regular,
                )
            )
        return offers

    def prune_catalogue(self, shop_name: str) -> list[str]:
        """Removes catalogue entries whose product is gone. Returns the removed product names."""
        shop = self.shop_service.find_by_name(shop_name)
        if shop is None:
            raise NotFoundError("Shop", shop_name)

        products = self.product_service.list_products()
        dangling = [
            entry.product_name
            for entry in shop.catalogue
            if catalog_domain_service.find_by_name(products, entry.product_name) is None
        ]
        for product_name in dangling:
            self.shop_service.remove_from_catalogue(shop.name, product_name)
        if dangling:
            logger.info(f'Pruned {len(dangling)} dangling entries from "{shop.name}".')
        return dangling
