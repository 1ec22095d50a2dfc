"""Room auction browse and bidding endpoints."""

import logging
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from laterooms.api.deps import (
    LOGIN_PATH,
    BidServiceDep,
    ListingServiceDep,
    Now,
    OptionalUser,
    redirect,
)
from laterooms.backend import BackendError
from laterooms.middleware.metrics import record_bid_attempt
from laterooms.schemas.bid import BidCreate, BidPlacedResponse
from laterooms.schemas.listing import (
    RegionResponse,
    RoomCard,
    RoomDetail,
    RoomListPage,
    time_filter_options,
)
from laterooms.services.bid_service import BidRejected, success_message
from laterooms.services.listing_filter import (
    ALL,
    ROOM_TIME_FILTERS,
    TimeFilter,
    count_label,
    filter_listings,
)

logger = logging.getLogger(__name__)

router = APIRouter()

ROOM_NOT_FOUND = "Room not found"


@router.get("", response_model=RoomListPage)
async def list_rooms(
    listing_service: ListingServiceDep,
    now: Now,
    region: str = Query(ALL, description="Region name or 'all'"),
    time: TimeFilter = Query(TimeFilter.ALL, description="Time filter"),
):
    """Home page: active auctions, soonest end first.

    Filtering happens over the fetched collection, so ``live_auctions`` and
    ``total_bids`` cover every active auction regardless of the filters.
    """
    regions = await listing_service.get_regions()
    rooms = await listing_service.get_active_rooms(now)
    filtered = filter_listings(rooms, now, region=region, time_filter=time)

    return RoomListPage(
        rooms=[RoomCard.from_row(row, now) for row in filtered],
        count=len(filtered),
        count_label=count_label(len(filtered), "room"),
        live_auctions=len(rooms),
        total_bids=sum(row.get("bid_count") or 0 for row in rooms),
        region=region,
        time_filter=time,
        time_filters=time_filter_options(ROOM_TIME_FILTERS, time),
        regions=[RegionResponse.model_validate(r) for r in regions],
    )


@router.get("/{listing_id}", response_model=RoomDetail)
async def get_room(listing_id: UUID, listing_service: ListingServiceDep, now: Now):
    """Single auction with bid suggestions."""
    room = await listing_service.get_room(listing_id)
    if room is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=ROOM_NOT_FOUND,
        )
    return RoomDetail.from_row(room, now)


@router.post("/{listing_id}/bids", response_model=BidPlacedResponse)
async def place_bid(
    listing_id: UUID,
    bid_data: BidCreate,
    user: OptionalUser,
    listing_service: ListingServiceDep,
    bid_service: BidServiceDep,
    now: Now,
):
    """Place a bid on a room auction.

    Args:
        listing_id: Auction being bid on
        bid_data: Proposed amount

    Returns:
        Success message and the refetched auction

    Raises:
        303: Not signed in
        404: Unknown auction
        400: Auction ended, amount not above the current bid, or insert failed
    """
    if user is None:
        raise redirect(LOGIN_PATH)

    room = await listing_service.get_room(listing_id)
    if room is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=ROOM_NOT_FOUND,
        )

    try:
        await bid_service.place_bid(room, user.id, bid_data.amount, now)
    except BidRejected as e:
        record_bid_attempt("rejected")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except BackendError as e:
        record_bid_attempt("error")
        logger.error(f"Bid insert failed for listing {listing_id}: {e.message}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        )

    record_bid_attempt("accepted")
    refreshed = await listing_service.get_room(listing_id)
    return BidPlacedResponse(
        message=success_message(bid_data.amount),
        room=RoomDetail.from_row(refreshed, now) if refreshed else None,
    )
