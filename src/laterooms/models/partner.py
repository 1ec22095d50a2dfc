"""Hotel partner and hotel models."""

import uuid
from typing import TYPE_CHECKING, List

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from laterooms.core.database import Base
from laterooms.models.base import TimestampMixin

if TYPE_CHECKING:
    from laterooms.models.listing import RoomListing, SecretHotelListing
    from laterooms.models.region import Area


class HotelPartner(Base, TimestampMixin):
    """A hotel operator account; scopes every admin-visible listing."""

    __tablename__ = "hotel_partners"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id"),
        unique=True,
        nullable=False,
    )
    company_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    contact_name: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    contact_email: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    phone: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
    )

    hotels: Mapped[List["Hotel"]] = relationship("Hotel", back_populates="partner")
    secret_listings: Mapped[List["SecretHotelListing"]] = relationship(
        "SecretHotelListing", back_populates="partner"
    )


class Hotel(Base, TimestampMixin):
    """A hotel operated by a partner."""

    __tablename__ = "hotels"

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
    area_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("areas.id"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(
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
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )

    partner: Mapped["HotelPartner"] = relationship("HotelPartner", back_populates="hotels")
    area: Mapped["Area"] = relationship("Area", back_populates="hotels")
    room_listings: Mapped[List["RoomListing"]] = relationship(
        "RoomListing", back_populates="hotel"
    )

    __table_args__ = (
        CheckConstraint("star_rating BETWEEN 1 AND 5", name="chk_hotel_star_rating"),
        Index("idx_hotels_partner", "partner_id"),
    )
