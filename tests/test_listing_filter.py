"""Tests for region and time filtering of fetched listings."""

from datetime import timedelta
from uuid import uuid4

from laterooms.services.listing_filter import (
    TimeFilter,
    count_label,
    date_label,
    filter_listings,
)


def listing(region, available_date, ends_at=None):
    return {
        "id": uuid4(),
        "region_name": region,
        "available_date": available_date,
        "auction_ends_at": ends_at,
    }


class TestRegionFilter:
    """Test exact region matching."""

    def test_keeps_only_matching_region_in_order(self, now, today):
        a = listing("London", today)
        b = listing("Manchester", today)
        c = listing("London", today)

        result = filter_listings([a, b, c], now, region="London")

        assert [r["id"] for r in result] == [a["id"], c["id"]]

    def test_all_keeps_everything(self, now, today):
        rows = [listing("London", today), listing("Edinburgh", today)]
        assert filter_listings(rows, now, region="all") == rows

    def test_unknown_region_is_empty(self, now, today):
        assert filter_listings([listing("London", today)], now, region="Narnia") == []


class TestTimeFilter:
    """Test tonight/tomorrow/ending buckets."""

    def test_tonight(self, now, today):
        tonight = listing("London", today)
        tomorrow = listing("London", today + timedelta(days=1))

        assert filter_listings([tonight, tomorrow], now, time_filter=TimeFilter.TONIGHT) == [tonight]

    def test_tomorrow(self, now, today):
        tonight = listing("London", today)
        tomorrow = listing("London", today + timedelta(days=1))
        later = listing("London", today + timedelta(days=2))

        result = filter_listings([tonight, tomorrow, later], now, time_filter=TimeFilter.TOMORROW)

        assert result == [tomorrow]

    def test_ending_keeps_59_minutes_drops_61(self, now, today):
        soon = listing("London", today, ends_at=now + timedelta(minutes=59))
        later = listing("London", today, ends_at=now + timedelta(minutes=61))

        assert filter_listings([soon, later], now, time_filter=TimeFilter.ENDING) == [soon]

    def test_ending_includes_exactly_one_hour(self, now, today):
        edge = listing("London", today, ends_at=now + timedelta(hours=1))
        assert filter_listings([edge], now, time_filter=TimeFilter.ENDING) == [edge]

    def test_region_and_time_combined(self, now, today):
        keep = listing("London", today)
        wrong_day = listing("London", today + timedelta(days=1))
        wrong_region = listing("Leeds", today)

        result = filter_listings(
            [keep, wrong_day, wrong_region], now, region="London", time_filter=TimeFilter.TONIGHT
        )

        assert result == [keep]


class TestLabels:
    """Test date and count labels."""

    def test_date_label(self, now, today):
        assert date_label(today, now) == "Tonight"
        assert date_label(today + timedelta(days=1), now) == "Tomorrow"

    def test_date_label_accepts_iso_strings(self, now, today):
        assert date_label(today.isoformat(), now) == "Tonight"

    def test_count_label(self):
        assert count_label(1, "room") == "1 room available"
        assert count_label(3, "room") == "3 rooms available"
        assert count_label(0, "secret hotel") == "0 secret hotels available"
