"""Product entity and its reviews."""

from dataclasses import dataclass, field
from typing import Optional

from src.catalog_domain.domain.services.tax_policy import TaxCategory, sell_price
from src.common.exceptions.custom_exceptions import ValidationError

MIN_RATING = 1
MAX_RATING = 5


@dataclass(frozen=True)  # Reviews are immutable once written
class Review:
    rating: int
    comment: str

    def __post_init__(self) -> None:
        if isinstance(self.rating, bool) or not isinstance(self.rating, int):
            raise ValidationError(f"Rating must be an integer, got {self.rating!r}")
        if not MIN_RATING <= self.rating <= MAX_RATING:
            raise ValidationError(f"Rating must be between {MIN_RATING} and {MAX_RATING}, got {self.rating}")


@dataclass
class Product:
    """A product identified by its name (case-insensitive) and sold under a tax category."""

    name: str
    brand: str
    mrp: float
    category: TaxCategory
    average_rating: Optional[float] = None  # Only meaningful for REDUCED products
    reviews: list[Review] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.category = TaxCategory.from_tag(self.category)
        if not self.name or not self.name.strip():
            raise ValidationError("Product name cannot be empty.")
        if self.mrp is None or self.mrp < 0:
            raise ValidationError(f"MRP cannot be negative for product '{self.name}'.")
        if self.category is TaxCategory.REDUCED:
            if self.average_rating is None:
                raise ValidationError(f"REDUCED product '{self.name}' needs an average rating.")
        else:
            self.average_rating = None

    def calculate_price(self, listed_price: float) -> float:
        """Sell price of this product for a given listed price."""
        return sell_price(listed_price, self.category, self.average_rating)

    def add_review(self, review: Review) -> None:
        self.reviews.append(review)
