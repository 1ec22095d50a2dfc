"""Price derivations shared by cards, detail views and the bid flow."""

import math
from decimal import Decimal
from typing import Any, Mapping

QUICK_BID_INCREMENTS = (5, 10, 20, 50)


def to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def current_bid(listing: Mapping[str, Any]) -> Decimal:
    """Highest bid so far, or the starting bid while there are none."""
    return to_decimal(listing.get("current_bid") or listing["starting_bid"])


def js_round(value: Decimal | float) -> int:
    """Round half up, the way browsers' ``Math.round`` does (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(to_decimal(value) + Decimal("0.5"))


def discount_percent(original: Any, current: Any) -> int:
    """Percent saved against the original price, e.g. 250 -> 95 is 62."""
    original = to_decimal(original)
    if original == 0:
        return 0
    return js_round((original - to_decimal(current)) / original * 100)


def format_amount(value: Any) -> str:
    """Render money without trailing zeros: ``120``, ``125.5``."""
    normalized = to_decimal(value).normalize()
    return format(normalized, "f")


def stars(star_rating: int) -> str:
    rating = max(0, min(5, star_rating))
    return "★" * rating + "☆" * (5 - rating)


def minimum_next_bid(current: Decimal) -> Decimal:
    return current + 1


def quick_bids(current: Decimal) -> list[Decimal]:
    return [current + increment for increment in QUICK_BID_INCREMENTS]
