"""Partner portal schemas: forms, table rows and page views."""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Literal, Mapping
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from laterooms.schemas.layout import AdminLayoutView
from laterooms.schemas.listing import RegionResponse
from laterooms.services import pricing
from laterooms.services.countdown import admin_time_left
from laterooms.services.listing_filter import date_label
from laterooms.services.listing_status import (
    BADGE_LABELS,
    ListingStatus,
    room_can_cancel,
    room_status,
    secret_can_cancel,
    secret_status,
)

CHECK_IN_OPTIONS = ["2pm onwards", "3pm onwards", "4pm onwards", "Flexible"]
SECRET_CHECK_IN_OPTIONS = ["2pm onwards", "3pm onwards", "4pm onwards"]
GUEST_OPTIONS = [1, 2, 3, 4]
AUCTION_HOUR_OPTIONS = [1, 2, 4, 6, 12, 24]
STAR_OPTIONS = [3, 4, 5]


class AvailableDay(str, Enum):
    TODAY = "today"
    TOMORROW = "tomorrow"


class PartnerResponse(BaseModel):
    """Schema for the signed-in partner."""

    id: UUID
    user_id: UUID
    company_name: str
    contact_name: str | None = None
    contact_email: str | None = None
    phone: str | None = None

    model_config = {"from_attributes": True}


class StatusBadge(BaseModel):
    status: ListingStatus
    label: str

    @classmethod
    def of(cls, status: ListingStatus) -> "StatusBadge":
        return cls(status=status, label=BADGE_LABELS[status])


class AdminRoomRow(BaseModel):
    """One row of the partner's room auction table."""

    id: UUID
    hotel_name: str | None
    area_name: str | None
    region_name: str | None
    room_type: str
    original_price: Decimal
    starting_bid: Decimal
    minimum_bid: Decimal
    available_date: date
    auction_ends_at: datetime
    time_left: str
    badge: StatusBadge
    can_cancel: bool
    created_at: datetime | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any], now: datetime) -> "AdminRoomRow":
        return cls(
            id=row["id"],
            hotel_name=row.get("hotel_name"),
            area_name=row.get("area_name"),
            region_name=row.get("region_name"),
            room_type=row["room_type"],
            original_price=row["original_price"],
            starting_bid=row["starting_bid"],
            minimum_bid=row["minimum_bid"],
            available_date=row["available_date"],
            auction_ends_at=row["auction_ends_at"],
            time_left=admin_time_left(row["auction_ends_at"], now),
            badge=StatusBadge.of(room_status(row, now)),
            can_cancel=room_can_cancel(row, now),
            created_at=row.get("created_at"),
        )


class AdminSecretRow(BaseModel):
    """One row of the partner's secret hotel table."""

    id: UUID
    title: str
    radius_area: str
    radius_description: str
    region_name: str | None
    original_value: Decimal
    secret_price: Decimal
    available_date: date
    date_label: str
    badge: StatusBadge
    can_cancel: bool
    created_at: datetime | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any], now: datetime) -> "AdminSecretRow":
        return cls(
            id=row["id"],
            title=f"Secret {row['star_rating']}-Star · {row['room_type']}",
            radius_area=row["radius_area"],
            radius_description=row["radius_description"],
            region_name=row.get("region_name"),
            original_value=row["original_value"],
            secret_price=row["secret_price"],
            available_date=row["available_date"],
            date_label=date_label(row["available_date"], now),
            badge=StatusBadge.of(secret_status(row)),
            can_cancel=secret_can_cancel(row),
            created_at=row.get("created_at"),
        )


class AdminRoomListPage(BaseModel):
    layout: AdminLayoutView
    partner: PartnerResponse
    rooms: list[AdminRoomRow]


class AdminSecretListPage(BaseModel):
    layout: AdminLayoutView
    partner: PartnerResponse
    hotels: list[AdminSecretRow]


class DashboardStats(BaseModel):
    active_rooms: int = 0
    secret_hotels: int = 0
    total_bids: int = 0
    bookings: int = 0


class RecentListing(BaseModel):
    id: UUID
    hotel_name: str | None
    room_type: str
    current_price: str
    status: str


class DashboardPage(BaseModel):
    layout: AdminLayoutView
    partner: PartnerResponse
    greeting: str
    stats: DashboardStats
    recent_listings: list[RecentListing]


class BookingRow(BaseModel):
    id: UUID
    listing_id: UUID
    hotel_name: str | None
    room_type: str | None
    amount: Decimal
    status: str
    created_at: datetime


class BookingsPage(BaseModel):
    layout: AdminLayoutView
    partner: PartnerResponse
    bookings: list[BookingRow]


class HotelOption(BaseModel):
    id: UUID
    label: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "HotelOption":
        return cls(
            id=row["id"],
            label=f"{row['name']} - {row.get('area_name')}, {row.get('region_name')}",
        )


class RoomFormPage(BaseModel):
    """Choices for the new room auction form."""

    layout: AdminLayoutView
    partner: PartnerResponse
    hotels: list[HotelOption]
    available_dates: list[AvailableDay] = [AvailableDay.TODAY, AvailableDay.TOMORROW]
    check_in_options: list[str] = CHECK_IN_OPTIONS
    guest_options: list[int] = GUEST_OPTIONS
    auction_hour_options: list[int] = AUCTION_HOUR_OPTIONS


class SecretFormPage(BaseModel):
    """Choices for the new secret hotel form."""

    layout: AdminLayoutView
    partner: PartnerResponse
    regions: list[RegionResponse]
    star_options: list[int] = STAR_OPTIONS
    available_dates: list[AvailableDay] = [AvailableDay.TODAY, AvailableDay.TOMORROW]
    check_in_options: list[str] = SECRET_CHECK_IN_OPTIONS
    guest_options: list[int] = GUEST_OPTIONS


class RoomListingCreate(BaseModel):
    """Schema for the new room auction form."""

    hotel_id: UUID
    room_type: str = Field(..., min_length=1, max_length=255)
    original_price: Decimal = Field(..., ge=1)
    minimum_bid: Decimal = Field(..., ge=1)
    starting_bid: Decimal = Field(..., ge=1)
    available_date: AvailableDay = AvailableDay.TODAY
    check_in_time: str = "3pm onwards"
    max_guests: int = Field(2, ge=1, le=4)
    auction_hours: Literal[1, 2, 4, 6, 12, 24] = 4


def split_amenities(raw: str) -> list[str]:
    """``" Spa, Pool ,, Gym "`` -> ``["Spa", "Pool", "Gym"]``."""
    return [item.strip() for item in raw.split(",") if item.strip()]


class SecretListingCreate(BaseModel):
    """Schema for the new secret hotel form."""

    radius_area: str = Field(..., min_length=1, max_length=255)
    radius_description: str = Field(..., min_length=1, max_length=255)
    region_id: UUID
    star_rating: int = Field(4, ge=3, le=5)
    amenities: list[str] = []
    room_type: str = Field(..., min_length=1, max_length=255)
    review_score: Decimal | None = Field(None, ge=0, le=10)
    review_count: int | None = Field(None, ge=0)
    original_value: Decimal = Field(..., ge=1)
    secret_price: Decimal = Field(..., ge=1)
    available_date: AvailableDay = AvailableDay.TODAY
    check_in_time: str = "3pm onwards"
    max_guests: int = Field(2, ge=1, le=4)
    actual_hotel_name: str = Field(..., min_length=1, max_length=255)
    actual_address: str = Field(..., min_length=1)

    @field_validator("amenities", mode="before")
    @classmethod
    def parse_amenities(cls, value: Any) -> Any:
        if isinstance(value, str):
            return split_amenities(value)
        return value

    @field_validator("review_score", "review_count", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        return None if value == "" else value


class CancelRequest(BaseModel):
    confirm: bool = False


class ListingCreatedResponse(BaseModel):
    """Success state shown briefly before returning to the listing table."""

    success: bool = True
    listing: dict[str, Any]
    redirect_to: str
    redirect_after_ms: int


class AdminLoginResponse(BaseModel):
    partner: PartnerResponse
    redirect_to: str = "/admin"
    access_token: str
