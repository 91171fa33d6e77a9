"""Tax policy: converts a listed price into a sell price according to the product's tax category."""

from enum import Enum
from typing import Callable, Optional

from src.common.exceptions.custom_exceptions import ValidationError

GENERAL_TAX_RATE = 21.0
REDUCED_TAX_RATE = 10.0
REDUCED_TAX_RATE_WELL_RATED = 5.0
MINIMUM_AVERAGE_RATING = 3.5  # strictly above this the lower reduced rate applies
SUPER_REDUCED_TAX_RATE = 4.0
SUPER_REDUCED_THRESHOLD = 100.0  # listed prices at or above this are not adjusted


class TaxCategory(str, Enum):
    GENERAL = "GENERAL"
    REDUCED = "REDUCED"
    SUPER_REDUCED = "SUPER_REDUCED"

    @classmethod
    def from_tag(cls, tag: "str | TaxCategory") -> "TaxCategory":
        """Parses a category tag case-insensitively; unknown tags are a construction-time error."""
        if isinstance(tag, cls):
            return tag
        try:
            return cls(str(tag).strip().upper())
        except ValueError as e:
            raise ValidationError(f"Unknown tax category '{tag}'", original_exception=e)


def _remove_tax(price: float, rate: float) -> float:
    return price / (1 + rate / 100)


def _general(listed_price: float, average_rating: Optional[float]) -> float:
    return _remove_tax(listed_price, GENERAL_TAX_RATE)


def _reduced(listed_price: float, average_rating: Optional[float]) -> float:
    if average_rating is not None and average_rating > MINIMUM_AVERAGE_RATING:
        return _remove_tax(listed_price, REDUCED_TAX_RATE_WELL_RATED)
    return _remove_tax(listed_price, REDUCED_TAX_RATE)


def _super_reduced(listed_price: float, average_rating: Optional[float]) -> float:
    if listed_price >= SUPER_REDUCED_THRESHOLD:
        return listed_price
    return _remove_tax(listed_price, SUPER_REDUCED_TAX_RATE)


_SELL_PRICE_BY_CATEGORY: dict[TaxCategory, Callable[[float, Optional[float]], float]] = {
    TaxCategory.GENERAL: _general,
    TaxCategory.REDUCED: _reduced,
    TaxCategory.SUPER_REDUCED: _super_reduced,
}


def sell_price(listed_price: float, category: TaxCategory, average_rating: Optional[float] = None) -> float:
    """Returns the sell price for a listed price.

    The rating only matters for REDUCED products; every other category ignores it.
    """
    return _SELL_PRICE_BY_CATEGORY[category](listed_price, average_rating)
