"""Partner portal service: listings, stats, bookings and lifecycle changes."""

import logging
from datetime import datetime, timedelta
from typing import Any
from uuid import UUID

from laterooms.backend import BackendClient, BackendError
from laterooms.schemas.admin import (
    AvailableDay,
    DashboardStats,
    RoomListingCreate,
    SecretListingCreate,
)
from laterooms.services.listing_filter import local_today
from laterooms.services.listing_status import ListingStatus

logger = logging.getLogger(__name__)

STARTING_BID_MESSAGE = "Starting bid must be at least the minimum bid"
HOTEL_NOT_FOUND_MESSAGE = "Hotel not found"
CONFIRM_CANCEL_MESSAGE = "Are you sure you want to cancel this listing?"


class ListingRejected(ValueError):
    """A create request failed validation before reaching the backend."""


class ListingNotFound(LookupError):
    """The listing does not exist or belongs to another partner."""


def resolve_available_date(day: AvailableDay, now: datetime):
    today = local_today(now)
    return today if day == AvailableDay.TODAY else today + timedelta(days=1)


def greeting_name(contact_name: str | None) -> str:
    """First word of the contact name, or ``Partner``."""
    if contact_name and contact_name.split():
        return contact_name.split()[0]
    return "Partner"


class PartnerService:
    """Service class for the hotel partner portal."""

    def __init__(self, backend: BackendClient):
        self.backend = backend

    async def get_partner_for_user(self, user_id: UUID) -> dict[str, Any] | None:
        """Partner row for a signed-in user, or None when the user is not a partner."""
        try:
            return await self.backend.table("hotel_partners").select("*").eq("user_id", user_id).single()
        except BackendError as e:
            logger.info(f"No partner for user {user_id}: {e.message}")
            return None

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_rooms(self, partner_id: UUID) -> list[dict[str, Any]]:
        """Room auctions on the partner's hotels, newest first."""
        try:
            return await (
                self.backend.table("room_listings")
                .select(
                    "*",
                    "hotel_name:hotels.name",
                    "area_name:areas.name",
                    "region_name:regions.name",
                )
                .join("hotels")
                .join("areas", inner=False)
                .join("regions", inner=False)
                .eq("hotels.partner_id", partner_id)
                .order("created_at", ascending=False)
                .execute()
            )
        except BackendError as e:
            logger.error(f"Error fetching rooms for partner {partner_id}: {e.message}")
            return []

    async def get_recent_rooms(self, partner_id: UUID, limit: int = 5) -> list[dict[str, Any]]:
        try:
            return await (
                self.backend.table("room_listings")
                .select("*", "hotel_name:hotels.name")
                .join("hotels")
                .eq("hotels.partner_id", partner_id)
                .order("created_at", ascending=False)
                .limit(limit)
                .execute()
            )
        except BackendError as e:
            logger.error(f"Error fetching recent rooms for partner {partner_id}: {e.message}")
            return []

    async def get_secret_listings(self, partner_id: UUID) -> list[dict[str, Any]]:
        """Secret listings owned by the partner, newest first."""
        try:
            return await (
                self.backend.table("secret_hotel_listings")
                .select("*", "region_name:regions.name")
                .join("regions", inner=False)
                .eq("partner_id", partner_id)
                .order("created_at", ascending=False)
                .execute()
            )
        except BackendError as e:
            logger.error(f"Error fetching secret hotels for partner {partner_id}: {e.message}")
            return []

    async def get_hotels(self, partner_id: UUID) -> list[dict[str, Any]]:
        """The partner's active hotels, for the new room form."""
        try:
            return await (
                self.backend.table("hotels")
                .select("*", "area_name:areas.name", "region_name:regions.name")
                .join("areas", inner=False)
                .join("regions", inner=False)
                .eq("partner_id", partner_id)
                .eq("is_active", True)
                .order("name")
                .execute()
            )
        except BackendError as e:
            logger.error(f"Error fetching hotels for partner {partner_id}: {e.message}")
            return []

    async def get_regions(self) -> list[dict[str, Any]]:
        try:
            return await self.backend.table("regions").select("*").order("display_order").execute()
        except BackendError as e:
            logger.error(f"Error fetching regions: {e.message}")
            return []

    async def get_bookings(self, partner_id: UUID) -> list[dict[str, Any]]:
        """Bookings on the partner's room listings, newest first."""
        try:
            return await (
                self.backend.table("bookings")
                .select(
                    "*",
                    "room_type:room_listings.room_type",
                    "hotel_name:hotels.name",
                )
                .join("room_listings")
                .join("hotels")
                .eq("hotels.partner_id", partner_id)
                .order("created_at", ascending=False)
                .execute()
            )
        except BackendError as e:
            logger.error(f"Error fetching bookings for partner {partner_id}: {e.message}")
            return []

    async def get_dashboard_stats(self, partner_id: UUID) -> DashboardStats:
        """Headline counts for the dashboard.

        Bid totals are not tracked per partner and stay at zero.
        """
        stats = DashboardStats()
        try:
            stats.active_rooms = await (
                self.backend.table("room_listings")
                .join("hotels")
                .eq("hotels.partner_id", partner_id)
                .eq("status", ListingStatus.ACTIVE.value)
                .count()
            )
            stats.secret_hotels = await (
                self.backend.table("secret_hotel_listings")
                .eq("partner_id", partner_id)
                .eq("status", ListingStatus.ACTIVE.value)
                .count()
            )
            stats.bookings = await (
                self.backend.table("bookings")
                .join("room_listings")
                .join("hotels")
                .eq("hotels.partner_id", partner_id)
                .count()
            )
        except BackendError as e:
            logger.error(f"Error fetching dashboard stats for partner {partner_id}: {e.message}")
        return stats

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create_room(
        self, partner_id: UUID, data: RoomListingCreate, now: datetime
    ) -> dict[str, Any]:
        """Create an active room auction ending ``auction_hours`` from ``now``.

        Raises:
            ListingRejected: Starting bid below minimum, or hotel not the partner's
            BackendError: The insert failed
        """
        if data.starting_bid < data.minimum_bid:
            raise ListingRejected(STARTING_BID_MESSAGE)

        hotels = await (
            self.backend.table("hotels")
            .select("id")
            .eq("id", data.hotel_id)
            .eq("partner_id", partner_id)
            .execute()
        )
        if not hotels:
            raise ListingRejected(HOTEL_NOT_FOUND_MESSAGE)

        listing = await self.backend.table("room_listings").insert(
            {
                "hotel_id": data.hotel_id,
                "room_type": data.room_type,
                "original_price": data.original_price,
                "minimum_bid": data.minimum_bid,
                "starting_bid": data.starting_bid,
                "available_date": resolve_available_date(data.available_date, now),
                "check_in_time": data.check_in_time,
                "max_guests": data.max_guests,
                "auction_ends_at": now + timedelta(hours=data.auction_hours),
                "status": ListingStatus.ACTIVE.value,
            }
        )
        logger.info(f"Room auction created: id={listing['id']}, partner={partner_id}")
        return listing

    async def create_secret(
        self, partner_id: UUID, data: SecretListingCreate, now: datetime
    ) -> dict[str, Any]:
        listing = await self.backend.table("secret_hotel_listings").insert(
            {
                "partner_id": partner_id,
                "region_id": data.region_id,
                "radius_area": data.radius_area,
                "radius_description": data.radius_description,
                "star_rating": data.star_rating,
                "amenities": data.amenities,
                "room_type": data.room_type,
                "review_score": data.review_score,
                "review_count": data.review_count,
                "original_value": data.original_value,
                "secret_price": data.secret_price,
                "available_date": resolve_available_date(data.available_date, now),
                "check_in_time": data.check_in_time,
                "max_guests": data.max_guests,
                "actual_hotel_name": data.actual_hotel_name,
                "actual_address": data.actual_address,
                "status": ListingStatus.ACTIVE.value,
            }
        )
        logger.info(f"Secret listing created: id={listing['id']}, partner={partner_id}")
        return listing

    async def cancel_room(self, partner_id: UUID, listing_id: UUID) -> None:
        """Mark a room auction cancelled. There is no undo.

        Raises:
            ListingNotFound: Unknown listing or another partner's hotel
            BackendError: The update failed
        """
        owned = await (
            self.backend.table("room_listings")
            .select("id")
            .join("hotels")
            .eq("id", listing_id)
            .eq("hotels.partner_id", partner_id)
            .execute()
        )
        if not owned:
            raise ListingNotFound(listing_id)

        await (
            self.backend.table("room_listings")
            .eq("id", listing_id)
            .update({"status": ListingStatus.CANCELLED.value})
        )
        logger.info(f"Room auction cancelled: id={listing_id}, partner={partner_id}")

    async def cancel_secret(self, partner_id: UUID, listing_id: UUID) -> None:
        owned = await (
            self.backend.table("secret_hotel_listings")
            .select("id")
            .eq("id", listing_id)
            .eq("partner_id", partner_id)
            .execute()
        )
        if not owned:
            raise ListingNotFound(listing_id)

        await (
            self.backend.table("secret_hotel_listings")
            .eq("id", listing_id)
            .update({"status": ListingStatus.CANCELLED.value})
        )
        logger.info(f"Secret listing cancelled: id={listing_id}, partner={partner_id}")
