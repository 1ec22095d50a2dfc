"""SQLAlchemy ORM models."""

from laterooms.models.base import TimestampMixin
from laterooms.models.bid import Bid
from laterooms.models.booking import Booking
from laterooms.models.listing import RoomListing, SecretHotelListing
from laterooms.models.partner import Hotel, HotelPartner
from laterooms.models.region import Area, Region
from laterooms.models.user import AuthSession, User
from laterooms.models.views import room_listings_full, secret_listings_full

__all__ = [
    "TimestampMixin",
    "User",
    "AuthSession",
    "Region",
    "Area",
    "HotelPartner",
    "Hotel",
    "RoomListing",
    "SecretHotelListing",
    "Bid",
    "Booking",
    "room_listings_full",
    "secret_listings_full",
]
