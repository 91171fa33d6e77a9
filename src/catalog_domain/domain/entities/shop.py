"""Shop entity, its catalogue entries and loyalty status."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from src.catalog_domain.domain.entities.product import Product
from src.catalog_domain.domain.services.discount_policy import BusinessModel, final_price
from src.common.exceptions.custom_exceptions import ValidationError
from src.common.utils.text_utils import same_name


class LoyaltyStatus(str, Enum):
    NOT_REGULAR = "NOT_REGULAR"
    REGULAR = "REGULAR"


@dataclass
class CatalogueEntry:
    """A product offered by one shop at a shop-local price. Refers to the product by name only."""

    product_name: str
    price_at_shop: float


@dataclass
class Shop:
    name: str
    description: str
    since: int
    business_model: BusinessModel
    earnings: float = 0.0
    catalogue: list[CatalogueEntry] = field(default_factory=list)
    loyalty_threshold: Optional[float] = None  # LOYALTY only
    sponsor_brand: Optional[str] = None  # SPONSORED only

    def __post_init__(self) -> None:
        self.business_model = BusinessModel.from_tag(self.business_model)
        if not self.name or not self.name.strip():
            raise ValidationError("Shop name cannot be empty.")
        if self.earnings is None or self.earnings < 0:
            raise ValidationError(f"Earnings of shop '{self.name}' cannot be negative.")

        if self.business_model is BusinessModel.LOYALTY:
            if self.loyalty_threshold is None or self.loyalty_threshold < 0:
                raise ValidationError(f"LOYALTY shop '{self.name}' needs a non-negative loyalty threshold.")
        else:
            self.loyalty_threshold = None

        if self.business_model is BusinessModel.SPONSORED:
            if not self.sponsor_brand:
                raise ValidationError(f"SPONSORED shop '{self.name}' needs a sponsor brand.")
        else:
            self.sponsor_brand = None

    # --- Catalogue ---

    def add_to_catalogue(self, product_name: str, price_at_shop: float) -> CatalogueEntry:
        """Appends an entry; an existing entry for the same product is left in place."""
        entry = CatalogueEntry(product_name=product_name, price_at_shop=price_at_shop)
        self.catalogue.append(entry)
        return entry

    def remove_from_catalogue(self, product_name: str) -> Optional[CatalogueEntry]:
        """Removes the last entry matching the product name.

        The whole catalogue is scanned and only the last match is removed, so with
        duplicate entries the earlier ones survive.
        """
        last_match_index = None
        for index, entry in enumerate(self.catalogue):
            if same_name(entry.product_name, product_name):
                last_match_index = index
        if last_match_index is None:
            return None
        return self.catalogue.pop(last_match_index)

    def price_at(self, product_name: str) -> Optional[float]:
        """Listed price of a product at this shop (last matching entry wins), or None when not listed."""
        price = None
        for entry in self.catalogue:
            if same_name(entry.product_name, product_name):
                price = entry.price_at_shop
        return price

    def sells(self, product_name: str) -> bool:
        return any(same_name(entry.product_name, product_name) for entry in self.catalogue)

    # --- Pricing ---

    def calculate_discount(self, listed_price: float, product: Product) -> float:
        """Final price of a product listed at this shop."""
        return final_price(listed_price, self, product)

    # --- Earnings & loyalty ---

    def add_earnings(self, amount: float) -> float:
        """Adds to the cumulative earnings and returns the new total."""
        if amount < 0:
            raise ValidationError(f"Cannot post negative earnings ({amount}) to shop '{self.name}'.")
        self.earnings += amount
        return self.earnings

    @property
    def loyalty_status(self) -> LoyaltyStatus:
        # Earnings never decrease, so once REGULAR a shop stays REGULAR.
        # Nothing earned yet means nothing bought yet, even with a threshold of 0.
        if self.business_model is not BusinessModel.LOYALTY or self.earnings <= 0:
            return LoyaltyStatus.NOT_REGULAR
        if self.earnings >= self.loyalty_threshold:
            return LoyaltyStatus.REGULAR
        return LoyaltyStatus.NOT_REGULAR

    @property
    def is_regular(self) -> bool:
        return self.loyalty_status is LoyaltyStatus.REGULAR
