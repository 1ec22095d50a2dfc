"""Pydantic schemas for request/response validation."""

from laterooms.schemas.admin import (
    AdminRoomRow,
    AdminSecretRow,
    RoomListingCreate,
    SecretListingCreate,
    StatusBadge,
)
from laterooms.schemas.bid import BidCreate, BidPlacedResponse
from laterooms.schemas.layout import AdminLayoutView, HeaderView, NavLink
from laterooms.schemas.listing import (
    RegionResponse,
    RoomCard,
    RoomDetail,
    RoomListPage,
    SecretHotelCard,
    SecretHotelListPage,
)
from laterooms.schemas.user import AuthSessionResponse, AuthUser, UserLogin, UserSignup

__all__ = [
    "UserSignup",
    "UserLogin",
    "AuthUser",
    "AuthSessionResponse",
    "RegionResponse",
    "RoomCard",
    "RoomDetail",
    "RoomListPage",
    "SecretHotelCard",
    "SecretHotelListPage",
    "BidCreate",
    "BidPlacedResponse",
    "HeaderView",
    "NavLink",
    "AdminLayoutView",
    "AdminRoomRow",
    "AdminSecretRow",
    "RoomListingCreate",
    "SecretListingCreate",
    "StatusBadge",
]
