"""Tests for partner table status badges and cancel eligibility."""

from datetime import timedelta

import pytest

from laterooms.schemas.admin import AdminRoomRow, AdminSecretRow, StatusBadge, split_amenities
from laterooms.services.listing_status import (
    ListingStatus,
    derive_status,
    room_can_cancel,
    room_status,
    secret_can_cancel,
    secret_status,
)


class TestDeriveStatus:
    """Test badge precedence: cancelled, sold, ended, active."""

    def test_cancelled_wins_over_ended(self, now):
        assert derive_status("cancelled", now - timedelta(hours=1), now) == ListingStatus.CANCELLED

    def test_sold_wins_over_ended(self, now):
        assert derive_status("sold", now - timedelta(hours=1), now) == ListingStatus.SOLD

    def test_past_end_is_ended(self, now):
        assert derive_status("active", now - timedelta(seconds=1), now) == ListingStatus.ENDED

    def test_future_end_is_active(self, now):
        assert derive_status("active", now + timedelta(hours=1), now) == ListingStatus.ACTIVE

    @pytest.mark.parametrize(
        "status,label",
        [
            (ListingStatus.CANCELLED, "Cancelled"),
            (ListingStatus.SOLD, "Sold"),
            (ListingStatus.ENDED, "Ended"),
            (ListingStatus.ACTIVE, "Live"),
        ],
    )
    def test_badge_labels(self, status, label):
        assert StatusBadge.of(status).label == label


class TestCanCancel:
    """Test which rows offer the cancel action."""

    def test_active_room_can_cancel(self, room_row, now):
        assert room_can_cancel(room_row, now) is True

    def test_ended_room_cannot_cancel(self, room_row, now):
        room_row["auction_ends_at"] = now - timedelta(minutes=1)
        assert room_status(room_row, now) == ListingStatus.ENDED
        assert room_can_cancel(room_row, now) is False

    def test_cancelled_room_cannot_cancel(self, room_row, now):
        room_row["status"] = "cancelled"
        assert room_can_cancel(room_row, now) is False

    def test_secret_listing_ignores_time(self, secret_row):
        assert secret_status(secret_row) == ListingStatus.ACTIVE
        assert secret_can_cancel(secret_row) is True

    def test_sold_secret_cannot_cancel(self, secret_row):
        secret_row["status"] = "sold"
        assert secret_status(secret_row) == ListingStatus.SOLD
        assert secret_can_cancel(secret_row) is False


class TestAdminRows:
    """Test partner table row views."""

    def test_room_row(self, room_row, now):
        row = AdminRoomRow.from_row(room_row, now)

        assert row.time_left == "2h 0m left"
        assert row.badge.label == "Live"
        assert row.can_cancel is True

    def test_cancelled_room_row(self, room_row, now):
        room_row["status"] = "cancelled"
        row = AdminRoomRow.from_row(room_row, now)

        assert row.badge.label == "Cancelled"
        assert row.can_cancel is False

    def test_secret_row_title(self, secret_row, now):
        row = AdminSecretRow.from_row(secret_row, now)

        assert row.title == "Secret 5-Star · Deluxe King Room"
        assert row.date_label == "Tonight"


class TestSplitAmenities:
    def test_split_trims_and_drops_empties(self):
        assert split_amenities(" Spa, Pool ,, Gym ") == ["Spa", "Pool", "Gym"]

    def test_empty_input(self):
        assert split_amenities("") == []
