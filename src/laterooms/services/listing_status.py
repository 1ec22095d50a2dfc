"""Status badges for the partner's listing tables.

"Ended" is derived from the clock at read time and never stored.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Mapping

from laterooms.services.countdown import ensure_aware


class ListingStatus(str, Enum):
    ACTIVE = "active"
    SOLD = "sold"
    CANCELLED = "cancelled"
    ENDED = "ended"


BADGE_LABELS = {
    ListingStatus.CANCELLED: "Cancelled",
    ListingStatus.SOLD: "Sold",
    ListingStatus.ENDED: "Ended",
    ListingStatus.ACTIVE: "Live",
}


def derive_status(status: str, ends_at: datetime | None, now: datetime) -> ListingStatus:
    """Explicit cancelled/sold win; then an auction past its end is ended."""
    if status == ListingStatus.CANCELLED.value:
        return ListingStatus.CANCELLED
    if status == ListingStatus.SOLD.value:
        return ListingStatus.SOLD
    if ends_at is not None and ensure_aware(ends_at) < ensure_aware(now):
        return ListingStatus.ENDED
    return ListingStatus.ACTIVE


def room_status(room: Mapping[str, Any], now: datetime) -> ListingStatus:
    return derive_status(room["status"], room["auction_ends_at"], now)


def secret_status(listing: Mapping[str, Any]) -> ListingStatus:
    # Secret listings have no time-based end
    return derive_status(listing["status"], None, datetime.min)


def room_can_cancel(room: Mapping[str, Any], now: datetime) -> bool:
    return room["status"] == "active" and ensure_aware(room["auction_ends_at"]) > ensure_aware(now)


def secret_can_cancel(listing: Mapping[str, Any]) -> bool:
    return listing["status"] == "active"
