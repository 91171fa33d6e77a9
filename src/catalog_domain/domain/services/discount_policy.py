"""Discount policy: final price a shop charges for a catalogue entry, tax included in the computation."""

from enum import Enum
from typing import TYPE_CHECKING, Callable

from src.catalog_domain.domain.services.tax_policy import sell_price
from src.common.exceptions.custom_exceptions import ValidationError

if TYPE_CHECKING:
    from src.catalog_domain.domain.entities.product import Product
    from src.catalog_domain.domain.entities.shop import Shop

SPONSORED_BRAND_MULTIPLIER = 0.9


class BusinessModel(str, Enum):
    MAX_PROFIT = "MAX_PROFIT"
    LOYALTY = "LOYALTY"
    SPONSORED = "SPONSORED"

    @classmethod
    def from_tag(cls, tag: "str | BusinessModel") -> "BusinessModel":
        """Parses a business model tag case-insensitively."""
        if isinstance(tag, cls):
            return tag
        try:
            return cls(str(tag).strip().upper())
        except ValueError as e:
            raise ValidationError(f"Unknown business model '{tag}'", original_exception=e)


def _taxed(listed_price: float, product: "Product") -> float:
    return sell_price(listed_price, product.category, product.average_rating)


def _max_profit(listed_price: float, shop: "Shop", product: "Product") -> float:
    return _taxed(listed_price, product)


def _loyalty(listed_price: float, shop: "Shop", product: "Product") -> float:
    # Loyalty grants a status, not a rate
    return _taxed(listed_price, product)


def _sponsored(listed_price: float, shop: "Shop", product: "Product") -> float:
    if product.brand == shop.sponsor_brand:
        return _taxed(listed_price, product) * SPONSORED_BRAND_MULTIPLIER
    return _taxed(listed_price, product)


_FINAL_PRICE_BY_MODEL: dict[BusinessModel, Callable[[float, "Shop", "Product"], float]] = {
    BusinessModel.MAX_PROFIT: _max_profit,
    BusinessModel.LOYALTY: _loyalty,
    BusinessModel.SPONSORED: _sponsored,
}


def final_price(listed_price: float, shop: "Shop", product: "Product") -> float:
    """Applies the product's tax category and then the shop's business model to a listed catalogue price."""
    return _FINAL_PRICE_BY_MODEL[shop.business_model](listed_price, shop, product)
