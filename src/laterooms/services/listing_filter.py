"""Client-side filtering of fetched listing collections."""

from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Iterable, Mapping

from laterooms.services.countdown import ensure_aware

ALL = "all"
ENDING_WINDOW = timedelta(hours=1)


class TimeFilter(str, Enum):
    ALL = "all"
    TONIGHT = "tonight"
    TOMORROW = "tomorrow"
    ENDING = "ending"


ROOM_TIME_FILTERS = [TimeFilter.ALL, TimeFilter.TONIGHT, TimeFilter.TOMORROW, TimeFilter.ENDING]
SECRET_TIME_FILTERS = [TimeFilter.ALL, TimeFilter.TONIGHT, TimeFilter.TOMORROW]

TIME_FILTER_LABELS = {
    TimeFilter.ALL: "All Times",
    TimeFilter.TONIGHT: "Tonight",
    TimeFilter.TOMORROW: "Tomorrow",
    TimeFilter.ENDING: "⏱ Ending Soon",
}


def local_today(now: datetime) -> date:
    """Calendar day of ``now`` on the server's local clock."""
    return ensure_aware(now).astimezone().date()


def _as_date(value: Any) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def date_label(available_date: Any, now: datetime) -> str:
    """``Tonight`` for today's rooms, ``Tomorrow`` for anything else."""
    return "Tonight" if _as_date(available_date) == local_today(now) else "Tomorrow"


def matches(
    listing: Mapping[str, Any],
    region: str,
    time_filter: TimeFilter,
    now: datetime,
) -> bool:
    if region != ALL and listing.get("region_name") != region:
        return False

    today = local_today(now)
    available = _as_date(listing.get("available_date"))
    if time_filter == TimeFilter.TONIGHT and available != today:
        return False
    if time_filter == TimeFilter.TOMORROW and available != today + timedelta(days=1):
        return False
    if time_filter == TimeFilter.ENDING:
        ends_at = listing.get("auction_ends_at")
        if ends_at is None or ensure_aware(ends_at) > ensure_aware(now) + ENDING_WINDOW:
            return False
    return True


def filter_listings(
    listings: Iterable[Mapping[str, Any]],
    now: datetime,
    region: str = ALL,
    time_filter: TimeFilter = TimeFilter.ALL,
) -> list[Mapping[str, Any]]:
    """Filter by region name and time bucket, keeping the fetched order."""
    return [listing for listing in listings if matches(listing, region, time_filter, now)]


def count_label(count: int, noun: str) -> str:
    """``"3 rooms available"`` / ``"1 room available"``."""
    return f"{count} {noun}{'' if count == 1 else 's'} available"
