"""WebSocket event schemas for the live countdown."""

from typing import Literal

from pydantic import BaseModel

from laterooms.services.countdown import Countdown


class CountdownEvent(BaseModel):
    """Countdown tick pushed once per interval while a listing is displayed."""

    event: Literal["countdown"] = "countdown"
    data: Countdown


class ListingMissingEvent(BaseModel):
    event: Literal["listing_missing"] = "listing_missing"
    detail: str = "Room not found"
