"""Bid service for placing bids on room auctions."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping
from uuid import UUID

from laterooms.backend import BackendClient
from laterooms.services import pricing
from laterooms.services.countdown import is_ended

logger = logging.getLogger(__name__)

AUCTION_ENDED_MESSAGE = "This auction has ended"


class BidRejected(ValueError):
    """The bid failed validation and was never sent to the backend."""


def validate_bid(amount: Decimal, current: Decimal) -> str | None:
    """Return the rejection message, or None when the bid may be placed.

    Only "higher than the current bid" is checked: no upper bound and no
    increment rule.
    """
    if amount <= current:
        return f"Bid must be higher than £{pricing.format_amount(current)}"
    return None


def success_message(amount: Decimal) -> str:
    return f"Bid of £{pricing.format_amount(amount)} placed successfully!"


class BidService:
    """Service class for bid operations."""

    def __init__(self, backend: BackendClient):
        self.backend = backend

    async def place_bid(
        self,
        room: Mapping[str, Any],
        customer_id: UUID,
        amount: Decimal,
        now: datetime,
    ) -> dict[str, Any]:
        """Validate ``amount`` against the fetched room and insert the bid.

        The comparison uses the ``room`` row the caller fetched; nothing
        re-checks it at insert time, so two concurrent bidders can both pass
        against the same value. The read model recomputes the current bid as
        the maximum over all bids.

        Args:
            room: Row from ``room_listings_full``
            customer_id: Signed-in user id
            amount: Proposed bid
            now: Reference instant for the ended check

        Returns:
            The inserted bid row

        Raises:
            BidRejected: Auction ended or amount not above the current bid
            BackendError: The insert failed; message is the backend's own
        """
        if is_ended(room["auction_ends_at"], now):
            raise BidRejected(AUCTION_ENDED_MESSAGE)

        error = validate_bid(amount, pricing.current_bid(room))
        if error:
            raise BidRejected(error)

        bid = await self.backend.table("bids").insert(
            {
                "listing_id": room["id"],
                "customer_id": customer_id,
                "amount": amount,
            }
        )
        logger.info(f"Bid placed: listing={room['id']}, customer={customer_id}, amount={amount}")
        return bid
