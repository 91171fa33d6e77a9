"""Data Transfer Objects for cart totals and checkout results."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class CheckoutStatus(str, Enum):
    CANCELLED = "CANCELLED"
    ALREADY_EMPTY = "ALREADY_EMPTY"
    COMPLETED = "COMPLETED"


class ClearStatus(str, Enum):
    CLEARED = "CLEARED"
    ALREADY_EMPTY = "ALREADY_EMPTY"


@dataclass
class PricedLineDTO:
    """A cart line after pricing. Lines that could not be priced carry ``skipped_reason``."""

    product_name: str
    shop_name: str
    listed_price: float | None = None
    final_price: float = 0.0
    regular_customer: bool = False  # Reported only, never changes the price
    skipped_reason: str | None = None

    @property
    def skipped(self) -> bool:
        return self.skipped_reason is not None


@dataclass
class CartTotalDTO:
    lines: list[PricedLineDTO] = field(default_factory=list)
    total: float = 0.0


@dataclass
class ShopEarningsDTO:
    """Earnings posted to one shop during checkout."""

    shop_name: str
    amount: float
    total_earnings: float
    became_regular: bool = False


@dataclass
class ShopPostingFailureDTO:
    shop_name: str
    amount: float
    error: str


@dataclass
class CheckoutResultDTO:
    status: CheckoutStatus
    lines: list[PricedLineDTO] = field(default_factory=list)
    total: float = 0.0
    postings: list[ShopEarningsDTO] = field(default_factory=list)
    failures: list[ShopPostingFailureDTO] = field(default_factory=list)
    completed_at: datetime | None = None  # UTC, set only for COMPLETED checkouts
