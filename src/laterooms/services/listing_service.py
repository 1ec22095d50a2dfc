"""Read paths for the public browse pages.

Read failures are logged and degrade to "no data"; they never raise.
"""

import logging
from datetime import datetime
from typing import Any
from uuid import UUID

from laterooms.backend import BackendClient, BackendError

logger = logging.getLogger(__name__)


class ListingService:
    """Service class for listing queries against the read models."""

    def __init__(self, backend: BackendClient):
        self.backend = backend

    async def get_regions(self) -> list[dict[str, Any]]:
        try:
            return await self.backend.table("regions").select("*").order("display_order").execute()
        except BackendError as e:
            logger.error(f"Error fetching regions: {e.message}")
            return []

    async def get_active_rooms(self, now: datetime) -> list[dict[str, Any]]:
        """Active, unexpired auctions, soonest end first."""
        try:
            return await (
                self.backend.table("room_listings_full")
                .select("*")
                .eq("status", "active")
                .gt("auction_ends_at", now)
                .order("auction_ends_at", ascending=True)
                .execute()
            )
        except BackendError as e:
            logger.error(f"Error fetching rooms: {e.message}")
            return []

    async def get_room(self, listing_id: UUID) -> dict[str, Any] | None:
        """One auction by id, or None when missing or unreadable."""
        try:
            return await (
                self.backend.table("room_listings_full").select("*").eq("id", listing_id).single()
            )
        except BackendError as e:
            logger.error(f"Error fetching room {listing_id}: {e.message}")
            return None

    async def get_active_secret_hotels(self) -> list[dict[str, Any]]:
        """Active secret listings, cheapest first."""
        try:
            return await (
                self.backend.table("secret_listings_full")
                .select("*")
                .eq("status", "active")
                .order("secret_price", ascending=True)
                .execute()
            )
        except BackendError as e:
            logger.error(f"Error fetching secret hotels: {e.message}")
            return []
