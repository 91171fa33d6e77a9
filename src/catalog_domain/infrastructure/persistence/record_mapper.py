"""Conversion between entities and the persisted record shape shared by the local files and the remote API.

Field names are part of the storage contract and must not change.
"""

import logging
from typing import Any

from src.catalog_domain.domain.entities.product import Product, Review
from src.catalog_domain.domain.entities.shop import CatalogueEntry, Shop
from src.catalog_domain.domain.services.discount_policy import BusinessModel
from src.catalog_domain.domain.services.tax_policy import TaxCategory
from src.common.exceptions.custom_exceptions import ParseError, ValidationError

logger = logging.getLogger(__name__)


# --- Products ---


def product_to_record(product: Product) -> dict[str, Any]:
    record: dict[str, Any] = {
        "name": product.name,
        "brand": product.brand,
        "mrp": product.mrp,
        "category": product.category.value,
        "reviews": [{"rating": review.rating, "comment": review.comment} for review in product.reviews],
    }
    if product.category is TaxCategory.REDUCED:
        record["averageRating"] = product.average_rating
    return record


def product_from_record(record: Any) -> Product:
    """Builds a Product from a record. Raises ParseError when the record cannot be used."""
    if not isinstance(record, dict):
        raise ParseError(f"Product record is not an object: {record!r}")

    tag = record.get("category")
    if tag is None:
        raise ParseError("Missing category property in product record", record=record)
    try:
        category = TaxCategory.from_tag(tag)
        reviews = [
            Review(rating=_whole_number(item["rating"]), comment=item.get("comment") or "")
            for item in (record.get("reviews") or [])
        ]
        return Product(
            name=record.get("name"),
            brand=record.get("brand") or "",
            mrp=float(record["mrp"]),
            category=category,
            average_rating=_optional_float(record.get("averageRating")),
            reviews=reviews,
        )
    except (ValidationError, AttributeError, KeyError, TypeError, ValueError) as e:
        raise ParseError(f"Invalid product record '{record.get('name')}': {e}", record=record)


def parse_product_records(records: list[Any]) -> list[Product]:
    """Parses a whole collection, skipping records that fail instead of aborting the load."""
    products = []
    for record in records:
        try:
            products.append(product_from_record(record))
        except ParseError as e:
            logger.warning(f"Skipping product record: {e}")
    return products


# --- Shops ---


def shop_to_record(shop: Shop) -> dict[str, Any]:
    record: dict[str, Any] = {
        "name": shop.name,
        "description": shop.description,
        "since": shop.since,
        "businessModel": shop.business_model.value,
        "earnings": shop.earnings,
        "catalogue": [
            {"productName": entry.product_name, "priceAtShop": entry.price_at_shop} for entry in shop.catalogue
        ],
    }
    if shop.business_model is BusinessModel.LOYALTY:
        record["loyaltyThreshold"] = shop.loyalty_threshold
    if shop.business_model is BusinessModel.SPONSORED:
        record["sponsorBrand"] = shop.sponsor_brand
    return record


def shop_from_record(record: Any) -> Shop:
    """Builds a Shop from a record. Raises ParseError when the record cannot be used."""
    if not isinstance(record, dict):
        raise ParseError(f"Shop record is not an object: {record!r}")

    tag = record.get("businessModel")
    if tag is None:
        raise ParseError(f"Shop '{record.get('name')}' has no businessModel property", record=record)
    try:
        business_model = BusinessModel.from_tag(tag)
        catalogue = [
            CatalogueEntry(product_name=item["productName"], price_at_shop=float(item["priceAtShop"]))
            for item in (record.get("catalogue") or [])
        ]
        return Shop(
            name=record.get("name"),
            description=record.get("description") or "",
            since=int(record.get("since") or 0),
            business_model=business_model,
            earnings=float(record.get("earnings") or 0.0),
            catalogue=catalogue,
            loyalty_threshold=_optional_float(record.get("loyaltyThreshold")),
            sponsor_brand=record.get("sponsorBrand"),
        )
    except (ValidationError, AttributeError, KeyError, TypeError, ValueError) as e:
        raise ParseError(f"Invalid shop record '{record.get('name')}': {e}", record=record)


def parse_shop_records(records: list[Any]) -> list[Shop]:
    """Parses a shop collection. Nested arrays are flattened one level; unusable records are skipped.

    Shops found inside a nested array are listed but have no position of their own in the
    remote collection, so they cannot be updated there.
    """
    shops = []
    for index, element in enumerate(records):
        nested = isinstance(element, list)
        for record in element if nested else [element]:
            try:
                shop = shop_from_record(record)
            except ParseError as e:
                logger.warning(f"Skipping shop record: {e}")
                continue
            if nested:
                logger.warning(f"Shop '{shop.name}' is nested at position {index} and is read-only.")
            shops.append(shop)
    return shops


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    return float(value)


def _whole_number(value: Any) -> Any:
    """4.0 becomes 4; anything else is passed through for the entity to validate."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value
