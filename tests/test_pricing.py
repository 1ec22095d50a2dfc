"""Tests for price derivations: current bid, discount, money text, bid hints."""

from decimal import Decimal

import pytest

from laterooms.services import pricing


class TestCurrentBid:
    """Test current bid fallback."""

    def test_uses_highest_bid(self):
        assert pricing.current_bid({"current_bid": Decimal("120"), "starting_bid": Decimal("95")}) == Decimal("120")

    def test_falls_back_to_starting_bid(self):
        assert pricing.current_bid({"current_bid": None, "starting_bid": Decimal("95")}) == Decimal("95")


class TestDiscountPercent:
    """Test discount rounding."""

    def test_example_discount(self):
        assert pricing.discount_percent(Decimal("250"), Decimal("95")) == 62

    def test_half_rounds_up(self):
        # (200 - 99) / 200 * 100 = 50.5
        assert pricing.discount_percent(Decimal("200"), Decimal("99")) == 51

    def test_rounds_to_nearest(self):
        # (300 - 100) / 300 * 100 = 66.66...
        assert pricing.discount_percent(Decimal("300"), Decimal("100")) == 67
        # (300 - 200) / 300 * 100 = 33.33...
        assert pricing.discount_percent(Decimal("300"), Decimal("200")) == 33

    def test_zero_original_price(self):
        assert pricing.discount_percent(Decimal("0"), Decimal("10")) == 0

    @pytest.mark.parametrize(
        "value,expected",
        [(Decimal("2.5"), 3), (Decimal("-2.5"), -2), (Decimal("2.4999"), 2), (0.5, 1)],
    )
    def test_js_round(self, value, expected):
        assert pricing.js_round(value) == expected


class TestFormatAmount:
    """Test money rendering without trailing zeros."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (Decimal("120.00"), "120"),
            (Decimal("125.50"), "125.5"),
            (Decimal("99.99"), "99.99"),
            (Decimal("1000"), "1000"),
            (150, "150"),
        ],
    )
    def test_format(self, value, expected):
        assert pricing.format_amount(value) == expected


class TestBidHints:
    """Test minimum next bid and quick bid buttons."""

    def test_minimum_next_bid(self):
        assert pricing.minimum_next_bid(Decimal("120")) == Decimal("121")

    def test_quick_bids(self):
        assert pricing.quick_bids(Decimal("120")) == [
            Decimal("125"),
            Decimal("130"),
            Decimal("140"),
            Decimal("170"),
        ]

    def test_stars(self):
        assert pricing.stars(4) == "★★★★☆"
