"""Data Transfer Objects for catalogue queries."""

from dataclasses import dataclass


@dataclass
class ShopOfferDTO:
    """One shop offering a product, priced for the buyer."""

    shop_name: str
    product_name: str
    brand: str
    listed_price: float
    final_price: float
    regular_customer: bool = False  # True when a LOYALTY discount already applies


@dataclass
class CatalogueItemDTO:
    """A catalogue entry joined with the product it refers to."""

    product_name: str
    brand: str
    listed_price: float
    final_price: float
