"""Auction countdown and urgency derivation.

Pure functions of ``(ends_at, now)``; callers recompute them every tick and
never cache the result.
"""

from datetime import datetime, timezone
from enum import Enum
from uuid import UUID

from pydantic import BaseModel

URGENT_SECONDS = 30 * 60
SOON_SECONDS = 60 * 60

ENDED_LABEL = "Ended"
DETAIL_ENDED_LABEL = "Auction Ended"


class Urgency(str, Enum):
    URGENT = "urgent"
    SOON = "soon"
    NORMAL = "normal"
    ENDED = "ended"


class Countdown(BaseModel):
    """One tick of a listing's countdown."""

    listing_id: UUID | None = None
    ends_at: datetime
    time_left: str
    urgency: Urgency
    ended: bool


def ensure_aware(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def seconds_left(ends_at: datetime, now: datetime) -> int:
    """Whole seconds until ``ends_at``, floored; <= 0 once ended."""
    diff = (ensure_aware(ends_at) - ensure_aware(now)).total_seconds()
    return int(diff // 1)


def is_ended(ends_at: datetime, now: datetime) -> bool:
    return ensure_aware(now) >= ensure_aware(ends_at)


def time_left(ends_at: datetime, now: datetime, detail: bool = False) -> str:
    """Format the remaining time.

    Cards show ``"2h 5m"``, ``"5m 3s"`` or ``"42s"``; the detail view adds
    seconds to the hours form (``"2h 5m 3s"``).
    """
    if is_ended(ends_at, now):
        return DETAIL_ENDED_LABEL if detail else ENDED_LABEL

    diff = seconds_left(ends_at, now)
    hours = diff // 3600
    minutes = diff % 3600 // 60
    seconds = diff % 60

    if hours > 0:
        return f"{hours}h {minutes}m {seconds}s" if detail else f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"


def admin_time_left(ends_at: datetime, now: datetime) -> str:
    """Coarser label used in the partner's room list."""
    if is_ended(ends_at, now):
        return ENDED_LABEL

    diff = seconds_left(ends_at, now)
    hours = diff // 3600
    minutes = diff % 3600 // 60
    if hours > 0:
        return f"{hours}h {minutes}m left"
    return f"{minutes}m left"


def urgency(ends_at: datetime, now: datetime) -> Urgency:
    if is_ended(ends_at, now):
        return Urgency.ENDED

    diff = (ensure_aware(ends_at) - ensure_aware(now)).total_seconds()
    if diff < URGENT_SECONDS:
        return Urgency.URGENT
    if diff < SOON_SECONDS:
        return Urgency.SOON
    return Urgency.NORMAL


def countdown_for(
    ends_at: datetime,
    now: datetime,
    listing_id: UUID | None = None,
    detail: bool = False,
) -> Countdown:
    return Countdown(
        listing_id=listing_id,
        ends_at=ensure_aware(ends_at),
        time_left=time_left(ends_at, now, detail=detail),
        urgency=urgency(ends_at, now),
        ended=is_ended(ends_at, now),
    )
