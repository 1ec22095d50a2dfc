"""Bid schemas for request/response validation."""

from decimal import Decimal

from pydantic import BaseModel, Field

from laterooms.schemas.listing import RoomDetail


class BidCreate(BaseModel):
    """Schema for bid placement request."""

    amount: Decimal = Field(..., gt=0)


class BidPlacedResponse(BaseModel):
    """Success message plus the refetched auction."""

    message: str
    room: RoomDetail | None
