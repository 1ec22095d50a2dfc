"""Room auction and secret hotel listing models."""

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from laterooms.core.database import Base
from laterooms.models.base import TimestampMixin

if TYPE_CHECKING:
    from laterooms.models.bid import Bid
    from laterooms.models.booking import Booking
    from laterooms.models.partner import Hotel, HotelPartner
    from laterooms.models.region import Region

LISTING_STATUSES = ("active", "sold", "cancelled")


class RoomListing(Base, TimestampMixin):
    """A room offered by auction until ``auction_ends_at``."""

    __tablename__ = "room_listings"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    hotel_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("hotels.id"),
        nullable=False,
    )
    room_type: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    original_price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
    )
    minimum_bid: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
    )
    starting_bid: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
    )
    available_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )
    check_in_time: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )
    max_guests: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=2,
    )
    auction_ends_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="active",
    )

    hotel: Mapped["Hotel"] = relationship("Hotel", back_populates="room_listings")
    bids: Mapped[List["Bid"]] = relationship("Bid", back_populates="listing")
    bookings: Mapped[List["Booking"]] = relationship("Booking", back_populates="listing")

    __table_args__ = (
        CheckConstraint("original_price > 0", name="chk_room_original_price_positive"),
        CheckConstraint("minimum_bid > 0", name="chk_room_minimum_bid_positive"),
        CheckConstraint(
            "status IN ('active', 'sold', 'cancelled')", name="chk_room_listing_status"
        ),
        Index("idx_room_listings_status_ends", "status", "auction_ends_at"),
        Index("idx_room_listings_hotel_created", "hotel_id", "created_at"),
    )


class SecretHotelListing(Base, TimestampMixin):
    """A fixed-price listing whose hotel identity is withheld until purchase."""

    __tablename__ = "secret_hotel_listings"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    partner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("hotel_partners.id"),
        nullable=False,
    )
    region_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("regions.id"),
        nullable=False,
    )
    radius_area: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    radius_description: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    star_rating: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    amenities: Mapped[list[str]] = mapped_column(
        ARRAY(Text),
        nullable=False,
        default=list,
    )
    room_type: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    review_score: Mapped[Decimal | None] = mapped_column(
        Numeric(3, 1),
        nullable=True,
    )
    review_count: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
    )
    original_value: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
    )
    secret_price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
    )
    available_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )
    check_in_time: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )
    max_guests: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=2,
    )
    actual_hotel_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    actual_address: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="active",
    )

    partner: Mapped["HotelPartner"] = relationship(
        "HotelPartner", back_populates="secret_listings"
    )
    region: Mapped["Region"] = relationship("Region")

    __table_args__ = (
        CheckConstraint("secret_price > 0", name="chk_secret_price_positive"),
        CheckConstraint(
            "status IN ('active', 'sold', 'cancelled')", name="chk_secret_listing_status"
        ),
        Index("idx_secret_listings_partner_created", "partner_id", "created_at"),
    )
