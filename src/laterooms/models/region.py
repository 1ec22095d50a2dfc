"""Region and area lookup models."""

import uuid
from typing import TYPE_CHECKING, List

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from laterooms.core.database import Base

if TYPE_CHECKING:
    from laterooms.models.partner import Hotel


class Region(Base):
    """A UK region used for browsing filters (e.g. London, Scotland)."""

    __tablename__ = "regions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
    )
    display_order: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    areas: Mapped[List["Area"]] = relationship("Area", back_populates="region")


class Area(Base):
    """An area inside a region (e.g. Mayfair)."""

    __tablename__ = "areas"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    region_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("regions.id"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    region: Mapped["Region"] = relationship("Region", back_populates="areas")
    hotels: Mapped[List["Hotel"]] = relationship("Hotel", back_populates="area")
