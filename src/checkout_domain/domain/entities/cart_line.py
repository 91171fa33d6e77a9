from dataclasses import dataclass


@dataclass(frozen=True)
class CartLine:
    """One unit of a product bought at a shop. Both are referenced by name."""

    product_name: str
    shop_name: str
