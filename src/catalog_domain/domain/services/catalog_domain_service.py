"""Domain rules shared by the product and shop registries."""

from typing import Iterable, Optional, Protocol, Sequence, TypeVar

from src.catalog_domain.domain.entities.product import Product, Review
from src.common.utils.text_utils import same_name


class _Named(Protocol):
    name: str


NamedT = TypeVar("NamedT", bound=_Named)


def find_by_name(items: Iterable[NamedT], name: str) -> Optional[NamedT]:
    """Case-insensitive exact match; None when absent."""
    for item in items:
        if same_name(item.name, name):
            return item
    return None


def position_of(items: Sequence[NamedT], name: str) -> int:
    """Index of the first item with the given name, -1 when absent."""
    for index, item in enumerate(items):
        if same_name(item.name, name):
            return index
    return -1


def price_within_limit(candidate_price: float, products: Iterable[Product]) -> bool:
    """A shop price is acceptable when at least one product in the registry has an MRP >= the price.

    This is a global check across all products, not against the product being listed.
    """
    return any(candidate_price <= product.mrp for product in products)


def matches_query(product: Product, query: str) -> bool:
    text = query.lower()
    return text in product.name.lower() or text in product.brand.lower()


def search_products(products: Iterable[Product], query: str) -> list[Product]:
    """Products whose name or brand contains the query, case-insensitively."""
    return [product for product in products if matches_query(product, query)]


def average_rating(reviews: Sequence[Review]) -> float:
    if not reviews:
        return 0.0
    total = sum(review.rating for review in reviews)
    return round(total / len(reviews), 2)
