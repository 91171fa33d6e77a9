# tests/test_catalog_domain/test_domain/test_catalog_domain_service.py
"""Tests for the shared catalog domain rules."""

from src.catalog_domain.domain.entities.product import Product, Review
from src.catalog_domain.domain.services import catalog_domain_service


def _products() -> list[Product]:
    return [
        Product(name="Laptop", brand="Acme Tech", mrp=1500.0, category="GENERAL"),
        Product(name="Bread", brand="Panaderia", mrp=3.0, category="SUPER_REDUCED"),
    ]


def test_find_by_name_is_case_insensitive() -> None:
    assert catalog_domain_service.find_by_name(_products(), "lAPTOP").name == "Laptop"
    assert catalog_domain_service.find_by_name(_products(), "Phone") is None


def test_position_of() -> None:
    assert catalog_domain_service.position_of(_products(), "bread") == 1
    assert catalog_domain_service.position_of(_products(), "Phone") == -1


def test_price_within_limit_checks_any_product() -> None:
    """A price above one product's MRP is fine when some other product's MRP covers it."""
    assert catalog_domain_service.price_within_limit(1000.0, _products())
    assert catalog_domain_service.price_within_limit(1500.0, _products())
    assert not catalog_domain_service.price_within_limit(1500.01, _products())
    assert not catalog_domain_service.price_within_limit(1.0, [])


def test_search_matches_name_or_brand_substring() -> None:
    assert [p.name for p in catalog_domain_service.search_products(_products(), "tech")] == ["Laptop"]
    assert [p.name for p in catalog_domain_service.search_products(_products(), "BRE")] == ["Bread"]
    assert catalog_domain_service.search_products(_products(), "phone") == []


def test_average_rating() -> None:
    reviews = [Review(5, "a"), Review(4, "b"), Review(4, "c")]
    assert catalog_domain_service.average_rating(reviews) == 4.33
    assert catalog_domain_service.average_rating([]) == 0.0
