# tests/test_checkout_domain/test_application/test_checkout_service.py
"""Tests for the CheckoutApplicationService."""

from datetime import datetime

import pytest
import pytz

from src.checkout_domain.domain.entities.cart_line import CartLine
from src.common.dtos.checkout_dtos import CheckoutStatus, ClearStatus
from src.common.exceptions.custom_exceptions import APIError, LocalStoreError


def test_add_line_does_not_validate(checkout_service) -> None:
    checkout_service.add_line("Phone", "Nowhere")
    assert checkout_service.cart_lines() == [CartLine("Phone", "Nowhere")]


def test_compute_total_prices_each_line(checkout_service) -> None:
    checkout_service.add_line("Laptop", "TechHub")
    checkout_service.add_line("laptop", "BrandCity")
    checkout_service.add_line("Bread", "Corner Shop")

    cart_total = checkout_service.compute_total()

    assert [line.final_price for line in cart_total.lines] == pytest.approx([1000.0, 900.0, 2.0])
    assert cart_total.total == pytest.approx(1902.0)


def test_compute_total_skips_unresolvable_lines(checkout_service) -> None:
    checkout_service.add_line("Phone", "TechHub")
    checkout_service.add_line("Bread", "Nowhere")
    checkout_service.add_line("Bread", "TechHub")
    checkout_service.add_line("Olive Oil", "Corner Shop")

    cart_total = checkout_service.compute_total()

    assert [line.skipped_reason for line in cart_total.lines] == [
        "Unknown product",
        "Unknown shop",
        "Not listed at this shop",
        None,
    ]
    assert cart_total.total == pytest.approx(10.0)


def test_compute_total_of_explicit_lines(checkout_service) -> None:
    cart_total = checkout_service.compute_total([CartLine("Bread", "Corner Shop")])
    assert cart_total.total == pytest.approx(2.0)
    assert checkout_service.cart_lines() == []


def test_compute_total_uses_last_catalogue_price(checkout_service, shop_service) -> None:
    shop_service.add_to_catalogue("TechHub", "Laptop", 605.0)
    checkout_service.add_line("Laptop", "TechHub")

    assert checkout_service.compute_total().total == pytest.approx(500.0)


def test_unconfirmed_checkout_changes_nothing(checkout_service, shop_service) -> None:
    checkout_service.add_line("Laptop", "TechHub")

    result = checkout_service.checkout(False)

    assert result.status is CheckoutStatus.CANCELLED
    assert checkout_service.cart_lines() == [CartLine("Laptop", "TechHub")]
    assert shop_service.find_by_name("TechHub").earnings == 0.0


def test_empty_cart_checkout_is_already_empty(checkout_service, mocker) -> None:
    mock_add_earnings = mocker.patch.object(checkout_service.shop_service, "add_earnings")

    result = checkout_service.checkout(True)

    assert result.status is CheckoutStatus.ALREADY_EMPTY
    mock_add_earnings.assert_not_called()


def test_checkout_posts_once_per_shop_and_clears(checkout_service, shop_service, mocker) -> None:
    spy = mocker.spy(shop_service, "add_earnings")
    checkout_service.add_line("Olive Oil", "Corner Shop")
    checkout_service.add_line("Bread", "corner shop")
    checkout_service.add_line("Laptop", "TechHub")
    checkout_service.add_line("Phone", "TechHub")

    result = checkout_service.checkout(True)

    assert result.status is CheckoutStatus.COMPLETED
    assert spy.call_count == 2
    amounts = {posting.shop_name: posting.amount for posting in result.postings}
    assert amounts == pytest.approx({"Corner Shop": 12.0, "TechHub": 1000.0})
    assert shop_service.find_by_name("Corner Shop").earnings == pytest.approx(12.0)
    assert checkout_service.cart_lines() == []
    assert result.failures == []
    assert isinstance(result.completed_at, datetime)
    assert result.completed_at.tzinfo == pytz.utc


def test_loyalty_shop_becomes_regular_exactly_once(checkout_service, shop_service) -> None:
    for _ in range(4):
        checkout_service.add_line("Olive Oil", "Corner Shop")

    first = checkout_service.checkout(True)

    assert first.postings[0].became_regular is True
    assert shop_service.find_by_name("Corner Shop").is_regular

    checkout_service.add_line("Olive Oil", "Corner Shop")
    second = checkout_service.checkout(True)

    assert second.postings[0].became_regular is False
    assert second.lines[0].regular_customer is True
    assert second.total == pytest.approx(10.0)
    assert shop_service.find_by_name("Corner Shop").is_regular


def test_failed_posting_does_not_block_other_shops(checkout_service, shop_service, mocker) -> None:
    real_add_earnings = shop_service.add_earnings

    def flaky_add_earnings(shop_name, amount):
        if shop_name == "TechHub":
            raise LocalStoreError("disk full")
        return real_add_earnings(shop_name, amount)

    mocker.patch.object(shop_service, "add_earnings", side_effect=flaky_add_earnings)
    checkout_service.add_line("Laptop", "TechHub")
    checkout_service.add_line("Bread", "Corner Shop")

    result = checkout_service.checkout(True)

    assert result.status is CheckoutStatus.COMPLETED
    assert [failure.shop_name for failure in result.failures] == ["TechHub"]
    assert result.failures[0].amount == pytest.approx(1000.0)
    assert [posting.shop_name for posting in result.postings] == ["Corner Shop"]
    assert checkout_service.cart_lines() == []


def test_store_failure_while_pricing_posts_nothing(checkout_service, mocker) -> None:
    mocker.patch.object(checkout_service.product_service, "list_products", side_effect=APIError("down"))
    mock_add_earnings = mocker.patch.object(checkout_service.shop_service, "add_earnings")
    checkout_service.add_line("Laptop", "TechHub")

    with pytest.raises(APIError):
        checkout_service.checkout(True)

    mock_add_earnings.assert_not_called()
    assert checkout_service.cart_lines() == [CartLine("Laptop", "TechHub")]


def test_clear_is_idempotent(checkout_service) -> None:
    checkout_service.add_line("Bread", "Corner Shop")

    assert checkout_service.clear() is ClearStatus.CLEARED
    assert checkout_service.clear() is ClearStatus.ALREADY_EMPTY
    assert checkout_service.cart_lines() == []


def test_failed_local_write_does_not_post_earnings(checkout_service, shop_service, local_shop_repository, tmp_path) -> None:
    local_shop_repository.load_all()
    local_shop_repository.file_path = str(tmp_path / "missing" / "shops.json")
    checkout_service.add_line("Olive Oil", "Corner Shop")

    result = checkout_service.checkout(True)

    assert [failure.shop_name for failure in result.failures] == ["Corner Shop"]
    assert result.postings == []
    assert shop_service.find_by_name("Corner Shop").earnings == 0.0
    assert checkout_service.cart_lines() == []


def test_zero_threshold_shop_becomes_regular_on_first_purchase(checkout_service, shop_service) -> None:
    shop = shop_service.create_shop("Zero", "Everyone is welcome", 2024, "LOYALTY", loyalty_threshold=0.0)
    shop_service.add_to_catalogue("Zero", "Bread", 2.08)
    assert not shop.is_regular

    checkout_service.add_line("Bread", "Zero")
    result = checkout_service.checkout(True)

    assert result.postings[0].became_regular is True
    assert shop_service.find_by_name("Zero").is_regular
