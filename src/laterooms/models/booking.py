"""Booking model for won auctions."""

import uuid
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Numeric, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from laterooms.core.database import Base
from laterooms.models.base import TimestampMixin

if TYPE_CHECKING:
    from laterooms.models.listing import RoomListing


class Booking(Base, TimestampMixin):
    """A booking created by the settlement process outside this service."""

    __tablename__ = "bookings"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    listing_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("room_listings.id"),
        nullable=False,
    )
    customer_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="pending",
    )

    listing: Mapped["RoomListing"] = relationship("RoomListing", back_populates="bookings")

    __table_args__ = (Index("idx_bookings_listing_created", "listing_id", "created_at"),)
