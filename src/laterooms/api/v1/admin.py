"""Hotel partner portal endpoints."""

import logging
from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, HTTPException, Response, status

from laterooms.api.deps import (
    ADMIN_LOGIN_PATH,
    Backend,
    CurrentPartner,
    Now,
    PartnerServiceDep,
    SessionToken,
)
from laterooms.api.v1.auth import clear_session_cookie, set_session_cookie
from laterooms.backend import BackendError
from laterooms.core.config import settings
from laterooms.schemas.admin import (
    AdminLoginResponse,
    AdminRoomListPage,
    AdminRoomRow,
    AdminSecretListPage,
    AdminSecretRow,
    BookingRow,
    BookingsPage,
    CancelRequest,
    DashboardPage,
    HotelOption,
    ListingCreatedResponse,
    PartnerResponse,
    RecentListing,
    RoomFormPage,
    RoomListingCreate,
    SecretFormPage,
    SecretListingCreate,
)
from laterooms.schemas.layout import AdminLayoutView
from laterooms.schemas.listing import RegionResponse
from laterooms.schemas.user import AuthResult, UserLogin
from laterooms.services import pricing
from laterooms.services.partner_service import (
    CONFIRM_CANCEL_MESSAGE,
    ListingNotFound,
    ListingRejected,
    greeting_name,
)

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_A_PARTNER_MESSAGE = (
    "This account is not registered as a hotel partner. Please contact support."
)
LISTING_NOT_FOUND = "Listing not found"
ROOMS_PATH = "/admin/rooms"
SECRET_HOTELS_PATH = "/admin/secret-hotels"


def _layout(path: str, partner: PartnerResponse) -> AdminLayoutView:
    return AdminLayoutView.for_path(path, partner.company_name)


def _bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


# =============================================================================
# Session
# =============================================================================


@router.post("/login", response_model=AdminLoginResponse)
async def admin_login(
    user_data: UserLogin,
    response: Response,
    backend: Backend,
    partner_service: PartnerServiceDep,
):
    """Partner sign in.

    A valid account without a partner record is signed straight back out.

    Raises:
        400: Invalid login credentials
        403: Account is not a hotel partner
    """
    try:
        session = await backend.auth.sign_in_with_password(user_data.email, user_data.password)
    except BackendError as e:
        raise _bad_request(e.message)

    partner = await partner_service.get_partner_for_user(session.user.id)
    if partner is None:
        try:
            await backend.auth.sign_out(session.access_token)
        except BackendError as e:
            raise _bad_request(e.message)
        logger.warning(f"Partner sign in refused for user {session.user.id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=NOT_A_PARTNER_MESSAGE,
        )

    set_session_cookie(response, session)
    return AdminLoginResponse(
        partner=PartnerResponse.model_validate(partner),
        access_token=session.access_token,
    )


@router.post("/logout", response_model=AuthResult)
async def admin_logout(response: Response, backend: Backend, token: SessionToken):
    try:
        await backend.auth.sign_out(token)
    except BackendError as e:
        raise _bad_request(e.message)
    clear_session_cookie(response)
    return AuthResult(redirect_to=ADMIN_LOGIN_PATH)


# =============================================================================
# Dashboard & bookings
# =============================================================================


@router.get("", response_model=DashboardPage)
async def dashboard(partner: CurrentPartner, partner_service: PartnerServiceDep):
    """Headline stats and the five most recent room auctions."""
    stats = await partner_service.get_dashboard_stats(partner.id)
    recent = await partner_service.get_recent_rooms(partner.id)

    return DashboardPage(
        layout=_layout("/admin", partner),
        partner=partner,
        greeting=greeting_name(partner.contact_name),
        stats=stats,
        recent_listings=[
            RecentListing(
                id=row["id"],
                hotel_name=row.get("hotel_name"),
                room_type=row["room_type"],
                current_price=f"£{pricing.format_amount(row['starting_bid'])}",
                status=row["status"],
            )
            for row in recent
        ],
    )


@router.get("/bookings", response_model=BookingsPage)
async def bookings(partner: CurrentPartner, partner_service: PartnerServiceDep):
    rows = await partner_service.get_bookings(partner.id)
    return BookingsPage(
        layout=_layout("/admin/bookings", partner),
        partner=partner,
        bookings=[BookingRow.model_validate(row) for row in rows],
    )


# =============================================================================
# Room auctions
# =============================================================================


async def _room_list_page(
    partner: PartnerResponse, partner_service: PartnerServiceDep, now: datetime
) -> AdminRoomListPage:
    rows = await partner_service.get_rooms(partner.id)
    return AdminRoomListPage(
        layout=_layout(ROOMS_PATH, partner),
        partner=partner,
        rooms=[AdminRoomRow.from_row(row, now) for row in rows],
    )


@router.get("/rooms", response_model=AdminRoomListPage)
async def list_rooms(partner: CurrentPartner, partner_service: PartnerServiceDep, now: Now):
    """Room auctions on the partner's hotels, newest first."""
    return await _room_list_page(partner, partner_service, now)


@router.get("/rooms/new", response_model=RoomFormPage)
async def new_room_form(partner: CurrentPartner, partner_service: PartnerServiceDep):
    hotels = await partner_service.get_hotels(partner.id)
    return RoomFormPage(
        layout=_layout(ROOMS_PATH, partner),
        partner=partner,
        hotels=[HotelOption.from_row(row) for row in hotels],
    )


@router.post("/rooms", response_model=ListingCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_room(
    listing_data: RoomListingCreate,
    partner: CurrentPartner,
    partner_service: PartnerServiceDep,
    now: Now,
):
    """Create a room auction.

    Raises:
        400: Starting bid below minimum, unknown hotel, or insert failed
    """
    try:
        listing = await partner_service.create_room(partner.id, listing_data, now)
    except ListingRejected as e:
        raise _bad_request(str(e))
    except BackendError as e:
        logger.error(f"Room auction insert failed for partner {partner.id}: {e.message}")
        raise _bad_request(e.message)

    return ListingCreatedResponse(
        listing=listing,
        redirect_to=ROOMS_PATH,
        redirect_after_ms=settings.CREATE_SUCCESS_DELAY_MS,
    )


@router.post("/rooms/{listing_id}/cancel", response_model=AdminRoomListPage)
async def cancel_room(
    listing_id: UUID,
    cancel: CancelRequest,
    partner: CurrentPartner,
    partner_service: PartnerServiceDep,
    now: Now,
):
    """Cancel a room auction and return the refreshed list.

    Raises:
        400: Not confirmed, or the update failed
        404: Not one of the partner's listings
    """
    if not cancel.confirm:
        raise _bad_request(CONFIRM_CANCEL_MESSAGE)

    try:
        await partner_service.cancel_room(partner.id, listing_id)
    except ListingNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=LISTING_NOT_FOUND,
        )
    except BackendError as e:
        raise _bad_request(e.message)

    return await _room_list_page(partner, partner_service, now)


# =============================================================================
# Secret hotels
# =============================================================================


async def _secret_list_page(
    partner: PartnerResponse, partner_service: PartnerServiceDep, now: datetime
) -> AdminSecretListPage:
    rows = await partner_service.get_secret_listings(partner.id)
    return AdminSecretListPage(
        layout=_layout(SECRET_HOTELS_PATH, partner),
        partner=partner,
        hotels=[AdminSecretRow.from_row(row, now) for row in rows],
    )


@router.get("/secret-hotels", response_model=AdminSecretListPage)
async def list_secret_hotels(partner: CurrentPartner, partner_service: PartnerServiceDep, now: Now):
    return await _secret_list_page(partner, partner_service, now)


@router.get("/secret-hotels/new", response_model=SecretFormPage)
async def new_secret_form(partner: CurrentPartner, partner_service: PartnerServiceDep):
    regions = await partner_service.get_regions()
    return SecretFormPage(
        layout=_layout(SECRET_HOTELS_PATH, partner),
        partner=partner,
        regions=[RegionResponse.model_validate(r) for r in regions],
    )


@router.post(
    "/secret-hotels",
    response_model=ListingCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_secret_hotel(
    listing_data: SecretListingCreate,
    partner: CurrentPartner,
    partner_service: PartnerServiceDep,
    now: Now,
):
    try:
        listing = await partner_service.create_secret(partner.id, listing_data, now)
    except BackendError as e:
        logger.error(f"Secret listing insert failed for partner {partner.id}: {e.message}")
        raise _bad_request(e.message)

    return ListingCreatedResponse(
        listing=listing,
        redirect_to=SECRET_HOTELS_PATH,
        redirect_after_ms=settings.CREATE_SUCCESS_DELAY_MS,
    )


@router.post("/secret-hotels/{listing_id}/cancel", response_model=AdminSecretListPage)
async def cancel_secret_hotel(
    listing_id: UUID,
    cancel: CancelRequest,
    partner: CurrentPartner,
    partner_service: PartnerServiceDep,
    now: Now,
):
    if not cancel.confirm:
        raise _bad_request(CONFIRM_CANCEL_MESSAGE)

    try:
        await partner_service.cancel_secret(partner.id, listing_id)
    except ListingNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=LISTING_NOT_FOUND,
        )
    except BackendError as e:
        raise _bad_request(e.message)

    return await _secret_list_page(partner, partner_service, now)
