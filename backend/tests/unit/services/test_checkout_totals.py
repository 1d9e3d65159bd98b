"""
Unit tests for checkout totals and the order notification payload.
"""

import re
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from procell.services.checkout import (
    AppliedPromo,
    BrandDiscount,
    CartItem,
    ColorOption,
    CustomerDetails,
    build_order_notification,
    build_order_summary,
    calculate_totals,
    generate_order_number,
    round_half_up,
)


@pytest.fixture
def cart():
    return [
        CartItem(
            product_id="iphone-15",
            name="iPhone 15",
            price=1000,
            quantity=2,
            brand_id="apple",
            color=ColorOption(name="Black", value="#000000"),
        ),
        CartItem(
            product_id="galaxy-a55", name="Galaxy A55", price=333, quantity=1, brand_id="samsung"
        ),
        CartItem(
            product_id="redmi-13", name="Redmi 13", price=500, quantity=1, brand_id="xiaomi"
        ),
    ]


@pytest.fixture
def promo():
    return AppliedPromo(
        code="spring24",
        brand_discounts=[
            BrandDiscount(brand_id="apple", discount_percentage=15),
            BrandDiscount(brand_id="samsung", discount_percentage=10),
        ],
    )


@pytest.fixture
def customer():
    return CustomerDetails(
        customer_name="Test Customer",
        phone_number="+1 555 0100",
        address="1 Main Street",
    )


class TestRounding:
    """Test half-up rounding."""

    @pytest.mark.parametrize(
        "value,expected",
        [(0.5, 1), (2.5, 3), (33.3, 33), (299.7, 300), (1.49, 1), (0, 0)],
    )
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected


class TestCalculateTotals:
    """Test subtotal, discount and total arithmetic."""

    def test_cart_with_promo(self, cart, promo):
        totals = calculate_totals(cart, promo)

        assert totals.subtotal == 2833
        assert totals.discount == 333
        assert totals.total == 2500

    def test_no_promo(self, cart):
        totals = calculate_totals(cart)

        assert totals.subtotal == 2833
        assert totals.discount == 0
        assert totals.total == 2833

    def test_each_line_rounded_separately(self):
        items = [
            CartItem(product_id="a", name="A", price=5, quantity=1, brand_id="apple"),
            CartItem(product_id="b", name="B", price=25, quantity=1, brand_id="apple"),
        ]
        promo = AppliedPromo(
            code="X", brand_discounts=[BrandDiscount(brand_id="apple", discount_percentage=10)]
        )

        assert calculate_totals(items, promo).discount == 1 + 3

    def test_item_without_brand_gets_no_discount(self, promo):
        items = [CartItem(product_id="x", name="Case", price=20, quantity=3)]
        assert calculate_totals(items, promo).discount == 0

    def test_first_matching_brand_discount_wins(self):
        promo = AppliedPromo(
            code="DUP",
            brand_discounts=[
                BrandDiscount(brand_id="apple", discount_percentage=20),
                BrandDiscount(brand_id="apple", discount_percentage=50),
            ],
        )
        assert promo.discount_for("apple") == 20


class TestOrderSummary:
    """Test the summary shown at checkout."""

    def test_line_prices(self, cart, promo):
        summary = build_order_summary(cart, promo)
        prices = {line.product_id: line.price for line in summary.items}

        assert prices == {"iphone-15": 850, "galaxy-a55": 300, "redmi-13": 500}
        assert summary.items[0].original_price == 1000
        assert summary.items[0].discount_percent == 15
        assert summary.items[2].discount_percent == 0

    def test_summary_fields(self, cart, promo):
        summary = build_order_summary(cart, promo)

        assert summary.promo_code == "SPRING24"
        assert summary.quantity == 4
        assert summary.has_discount

    def test_summary_without_promo(self, cart):
        summary = build_order_summary(cart)

        assert summary.promo_code is None
        assert not summary.has_discount


class TestOrderNotification:
    """Test the notification payload."""

    def test_amounts_match_summary(self, cart, promo, customer):
        summary = build_order_summary(cart, promo)
        payload = build_order_notification(customer, summary)
        data = payload["data"]

        assert payload["type"] == "order"
        assert data["subtotal"] == summary.totals.subtotal == 2833
        assert data["total_discount"] == summary.totals.discount == 333
        assert data["total_price"] == summary.totals.total == 2500
        assert data["promo_code"] == "SPRING24"
        assert data["payment_method"] == "Cash on Delivery"

    def test_items(self, cart, promo, customer):
        payload = build_order_notification(customer, build_order_summary(cart, promo))
        first, second, _ = payload["data"]["items"]

        assert first == {
            "name": "iPhone 15",
            "quantity": 2,
            "originalPrice": 1000,
            "price": 850,
            "discountPercent": 15,
            "color": "Black",
        }
        assert second["color"] is None

    def test_customer_and_timestamp(self, cart, customer):
        created_at = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
        payload = build_order_notification(
            customer, build_order_summary(cart), payment_method="Card", created_at=created_at
        )
        data = payload["data"]

        assert data["customer_name"] == "Test Customer"
        assert data["phone_number"] == "+1 555 0100"
        assert data["address"] == "1 Main Street"
        assert data["payment_method"] == "Card"
        assert data["created_at"] == "2026-03-01T12:00:00+00:00"


class TestCheckoutModels:
    """Test checkout model validation."""

    def test_promo_code_normalized(self):
        assert AppliedPromo(code="  save10 ").code == "SAVE10"

    def test_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            CartItem(product_id="x", name="X", price=10, quantity=0)

    def test_discount_percentage_bounds(self):
        with pytest.raises(ValidationError):
            BrandDiscount(brand_id="apple", discount_percentage=120)

    def test_order_number_format(self):
        number = generate_order_number(datetime(2026, 1, 1, tzinfo=timezone.utc))

        assert re.match(r"^ORD-\d+-\d{1,3}$", number)
        assert number.startswith("ORD-1767225600000-")
