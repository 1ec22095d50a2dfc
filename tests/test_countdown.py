"""Tests for countdown text and urgency tiers.

Boundaries:
- below 30 minutes is urgent, exactly 30 minutes is soon
- below 60 minutes is soon, exactly 60 minutes is normal
- at or past the end time the auction is ended
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from laterooms.services.countdown import (
    Urgency,
    admin_time_left,
    countdown_for,
    time_left,
    urgency,
)

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def ends_in(**kwargs) -> datetime:
    return NOW + timedelta(**kwargs)


class TestTimeLeft:
    """Test card and detail countdown text."""

    def test_hours_and_minutes(self):
        assert time_left(ends_in(hours=2, minutes=5, seconds=3), NOW) == "2h 5m"

    def test_minutes_and_seconds(self):
        assert time_left(ends_in(minutes=5, seconds=3), NOW) == "5m 3s"

    def test_seconds_only(self):
        assert time_left(ends_in(seconds=42), NOW) == "42s"

    def test_detail_adds_seconds_to_hours(self):
        assert time_left(ends_in(hours=2, minutes=5, seconds=3), NOW, detail=True) == "2h 5m 3s"

    def test_detail_below_one_hour_matches_card(self):
        assert time_left(ends_in(minutes=5, seconds=3), NOW, detail=True) == "5m 3s"

    def test_fractional_seconds_are_floored(self):
        assert time_left(ends_in(seconds=42, milliseconds=900), NOW) == "42s"

    def test_past_end_is_ended(self):
        assert time_left(ends_in(minutes=-1), NOW) == "Ended"
        assert time_left(ends_in(minutes=-1), NOW, detail=True) == "Auction Ended"

    def test_exact_end_is_ended(self):
        assert time_left(NOW, NOW) == "Ended"

    def test_naive_end_time_treated_as_utc(self):
        naive = (NOW + timedelta(minutes=10)).replace(tzinfo=None)
        assert time_left(naive, NOW) == "10m 0s"


class TestUrgency:
    """Test urgency tier boundaries."""

    @pytest.mark.parametrize(
        "delta,expected",
        [
            (timedelta(minutes=29, seconds=59), Urgency.URGENT),
            (timedelta(minutes=30), Urgency.SOON),
            (timedelta(minutes=59, seconds=59), Urgency.SOON),
            (timedelta(minutes=60), Urgency.NORMAL),
            (timedelta(hours=5), Urgency.NORMAL),
            (timedelta(seconds=1), Urgency.URGENT),
            (timedelta(0), Urgency.ENDED),
            (timedelta(minutes=-5), Urgency.ENDED),
        ],
    )
    def test_tiers(self, delta, expected):
        assert urgency(NOW + delta, NOW) == expected


class TestAdminTimeLeft:
    """Test the partner table's coarser label."""

    def test_hours_left(self):
        assert admin_time_left(ends_in(hours=3, minutes=15), NOW) == "3h 15m left"

    def test_minutes_left(self):
        assert admin_time_left(ends_in(minutes=45, seconds=30), NOW) == "45m left"

    def test_ended(self):
        assert admin_time_left(ends_in(seconds=-1), NOW) == "Ended"


class TestCountdownFor:
    """Test the combined countdown tick."""

    def test_live_countdown(self):
        listing_id = uuid4()
        countdown = countdown_for(ends_in(minutes=20), NOW, listing_id=listing_id)

        assert countdown.listing_id == listing_id
        assert countdown.time_left == "20m 0s"
        assert countdown.urgency == Urgency.URGENT
        assert countdown.ended is False

    def test_ended_countdown(self):
        countdown = countdown_for(ends_in(minutes=-1), NOW, detail=True)

        assert countdown.ended is True
        assert countdown.urgency == Urgency.ENDED
        assert countdown.time_left == "Auction Ended"
