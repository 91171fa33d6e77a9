"""Cart and checkout: prices the cart and posts earnings to each shop once per checkout."""

import logging
from datetime import datetime
from typing import Optional

import pytz

from src.catalog_domain.application.product_service import ProductApplicationService
from src.catalog_domain.application.shop_service import ShopApplicationService
from src.catalog_domain.domain.entities.shop import Shop
from src.catalog_domain.domain.services import catalog_domain_service
from src.checkout_domain.domain.entities.cart_line import CartLine
from src.common.dtos.checkout_dtos import (
    CartTotalDTO,
    CheckoutResultDTO,
    CheckoutStatus,
    ClearStatus,
    PricedLineDTO,
    ShopEarningsDTO,
    ShopPostingFailureDTO,
)
from src.common.exceptions.custom_exceptions import NotFoundError, StoreError, ValidationError

logger = logging.getLogger(__name__)


class CheckoutApplicationService:
    """Holds the cart of the current session.

    Cart lines are not persisted and are not validated when added; unknown products or
    shops only show up as skipped lines when the cart is priced.
    """

    def __init__(self, product_service: ProductApplicationService, shop_service: ShopApplicationService) -> None:
        self.product_service = product_service
        self.shop_service = shop_service
        self._lines: list[CartLine] = []

    def cart_lines(self) -> list[CartLine]:
        return list(self._lines)

    def add_line(self, product_name: str, shop_name: str) -> CartLine:
        line = CartLine(product_name=product_name, shop_name=shop_name)
        self._lines.append(line)
        logger.info(f'1x "{product_name}" by "{shop_name}" has been added to your cart.')
        return line

    def compute_total(self, lines: Optional[list[CartLine]] = None) -> CartTotalDTO:
        priced, _ = self._resolve(self._lines if lines is None else lines)
        return CartTotalDTO(lines=priced, total=_sum_priced(priced))

    def checkout(self, confirmed: bool) -> CheckoutResultDTO:
        """Posts the cart's earnings to the shops and empties the cart.

        Earnings are summed per shop and posted in one call per shop. A shop whose posting
        fails is reported in ``failures``; the other shops are still posted and the cart is
        cleared regardless.
        """
        if not confirmed:
            logger.info("Cancelling checkout.")
            return CheckoutResultDTO(status=CheckoutStatus.CANCELLED, lines=[], total=0.0)
        if not self._lines:
            logger.info("Your cart is already empty.")
            return CheckoutResultDTO(status=CheckoutStatus.ALREADY_EMPTY)

        # A store failure here propagates before anything is posted
        priced, shops = self._resolve(self._lines)

        amounts_by_shop: dict[str, float] = {}
        for line in priced:
            if line.skipped:
                continue
            amounts_by_shop[line.shop_name] = amounts_by_shop.get(line.shop_name, 0.0) + line.final_price

        postings: list[ShopEarningsDTO] = []
        failures: list[ShopPostingFailureDTO] = []
        for shop_name, amount in amounts_by_shop.items():
            was_regular = shops[shop_name].is_regular
            try:
                updated = self.shop_service.add_earnings(shop_name, amount)
            except (StoreError, NotFoundError, ValidationError) as e:
                logger.error(f'Could not post {amount:.2f} to "{shop_name}": {e}')
                failures.append(ShopPostingFailureDTO(shop_name=shop_name, amount=amount, error=str(e)))
                continue

            became_regular = updated.is_regular and not was_regular
            if became_regular:
                logger.info(f'You are now a regular at "{updated.name}".')
            postings.append(
                ShopEarningsDTO(
                    shop_name=updated.name,
                    amount=amount,
                    total_earnings=updated.earnings,
                    became_regular=became_regular,
                )
            )

        self._lines.clear()
        return CheckoutResultDTO(
            status=CheckoutStatus.COMPLETED,
            lines=priced,
            total=_sum_priced(priced),
            postings=postings,
            failures=failures,
            completed_at=datetime.now(pytz.utc),
        )

    def clear(self) -> ClearStatus:
        if not self._lines:
            return ClearStatus.ALREADY_EMPTY
        self._lines.clear()
        logger.info("Your cart has been cleared.")
        return ClearStatus.CLEARED

    def _resolve(self, lines: list[CartLine]) -> tuple[list[PricedLineDTO], dict[str, Shop]]:
        """Prices each line against one snapshot of the registries.

        Returns the priced lines and the shops they were priced at, keyed by the shop's
        registered name.
        """
        if not lines:
            return [], {}
        products = self.product_service.list_products()
        shops = self.shop_service.list_shops()

        priced: list[PricedLineDTO] = []
        shops_by_name: dict[str, Shop] = {}
        for line in lines:
            product = catalog_domain_service.find_by_name(products, line.product_name)
            shop = catalog_domain_service.find_by_name(shops, line.shop_name)
            if product is None:
                priced.append(_skipped(line, "Unknown product"))
                continue
            if shop is None:
                priced.append(_skipped(line, "Unknown shop"))
                continue

            listed_price = shop.price_at(product.name)
            if listed_price is None:
                priced.append(_skipped(line, "Not listed at this shop"))
                continue

            shops_by_name[shop.name] = shop
            priced.append(
                PricedLineDTO(
                    product_name=product.name,
                    shop_name=shop.name,
                    listed_price=listed_price,
                    final_price=shop.calculate_discount(listed_price, product),
                    regular_customer=shop.is_regular,
                )
            )
        return priced, shops_by_name


def _skipped(line: CartLine, reason: str) -> PricedLineDTO:
    logger.warning(f'Skipping cart line "{line.product_name}" at "{line.shop_name}": {reason}')
    return PricedLineDTO(product_name=line.product_name, shop_name=line.shop_name, skipped_reason=reason)


def _sum_priced(lines: list[PricedLineDTO]) -> float:
    return sum(line.final_price for line in lines if not line.skipped)
