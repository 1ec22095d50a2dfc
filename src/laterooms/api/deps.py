"""API dependencies: backend client, session, signed-in user and partner."""

import logging
from datetime import datetime
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.requests import HTTPConnection
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from laterooms.backend import BackendClient, BackendError
from laterooms.core.config import settings
from laterooms.schemas.admin import PartnerResponse
from laterooms.schemas.user import AuthUser
from laterooms.services.bid_service import BidService
from laterooms.services.countdown import utcnow
from laterooms.services.countdown_ticker import CountdownTicker
from laterooms.services.listing_service import ListingService
from laterooms.services.partner_service import PartnerService

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

LOGIN_PATH = "/login"
ADMIN_LOGIN_PATH = "/admin/login"
HOME_PATH = "/"


def redirect(location: str) -> HTTPException:
    """A 303 See Other pointing the client at ``location``."""
    return HTTPException(
        status_code=status.HTTP_303_SEE_OTHER,
        headers={"Location": location},
    )


def get_backend(conn: HTTPConnection) -> BackendClient:
    """The process-wide client built in the app lifespan."""
    return conn.app.state.backend


def get_ticker(conn: HTTPConnection) -> CountdownTicker:
    return conn.app.state.ticker


def get_now() -> datetime:
    return utcnow()


def get_session_token(
    conn: HTTPConnection,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str | None:
    """Bearer header first, then the session cookie."""
    if credentials is not None:
        return credentials.credentials
    return conn.cookies.get(settings.SESSION_COOKIE_NAME)


Backend = Annotated[BackendClient, Depends(get_backend)]
Ticker = Annotated[CountdownTicker, Depends(get_ticker)]
Now = Annotated[datetime, Depends(get_now)]
SessionToken = Annotated[str | None, Depends(get_session_token)]


async def get_optional_user(backend: Backend, token: SessionToken) -> AuthUser | None:
    """Signed-in user, or None when there is no usable session.

    A failed session lookup is logged and treated as signed out.
    """
    try:
        return await backend.auth.get_user(token)
    except BackendError as e:
        logger.error(f"Session lookup failed: {e.message}")
        return None


OptionalUser = Annotated[AuthUser | None, Depends(get_optional_user)]


async def get_current_user(user: OptionalUser) -> AuthUser:
    """Signed-in user, or a redirect to the sign-in page."""
    if user is None:
        raise redirect(LOGIN_PATH)
    return user


def get_listing_service(backend: Backend) -> ListingService:
    return ListingService(backend)


def get_bid_service(backend: Backend) -> BidService:
    return BidService(backend)


def get_partner_service(backend: Backend) -> PartnerService:
    return PartnerService(backend)


ListingServiceDep = Annotated[ListingService, Depends(get_listing_service)]
BidServiceDep = Annotated[BidService, Depends(get_bid_service)]
PartnerServiceDep = Annotated[PartnerService, Depends(get_partner_service)]


async def get_current_partner(
    user: OptionalUser,
    partner_service: PartnerServiceDep,
) -> PartnerResponse:
    """Partner record of the signed-in user.

    Raises:
        HTTPException: 303 to the partner sign-in page when there is no
            session or the user is not a partner
    """
    if user is None:
        raise redirect(ADMIN_LOGIN_PATH)

    partner = await partner_service.get_partner_for_user(user.id)
    if partner is None:
        raise redirect(ADMIN_LOGIN_PATH)
    return PartnerResponse.model_validate(partner)


CurrentUser = Annotated[AuthUser, Depends(get_current_user)]
CurrentPartner = Annotated[PartnerResponse, Depends(get_current_partner)]
