"""Listing view models: the cards and pages the browse routes return."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Mapping
from uuid import UUID

from pydantic import BaseModel

from laterooms.services import pricing
from laterooms.services.countdown import Countdown, countdown_for
from laterooms.services.listing_filter import TIME_FILTER_LABELS, TimeFilter, date_label

CARD_AMENITY_LIMIT = 3


class RegionResponse(BaseModel):
    """Schema for a browse region."""

    id: UUID
    name: str
    display_order: int

    model_config = {"from_attributes": True}


class TimeFilterOption(BaseModel):
    value: TimeFilter
    label: str
    selected: bool


def time_filter_options(filters: list[TimeFilter], selected: TimeFilter) -> list[TimeFilterOption]:
    return [
        TimeFilterOption(value=f, label=TIME_FILTER_LABELS[f], selected=f == selected)
        for f in filters
    ]


class RoomCard(BaseModel):
    """A room auction as shown in the browse grid."""

    id: UUID
    hotel_name: str
    area_name: str | None
    region_name: str | None
    stars: str
    star_rating: int
    amenities: list[str]
    original_price: Decimal
    current_bid: Decimal
    current_bid_display: str
    discount_percent: int
    bid_count: int
    available_date: date
    date_label: str
    check_in_time: str
    auction_ends_at: datetime
    countdown: Countdown
    href: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any], now: datetime) -> "RoomCard":
        current = pricing.current_bid(row)
        return cls(
            id=row["id"],
            hotel_name=row["hotel_name"],
            area_name=row.get("area_name"),
            region_name=row.get("region_name"),
            stars=pricing.stars(row["star_rating"]),
            star_rating=row["star_rating"],
            amenities=list(row.get("amenities") or [])[:CARD_AMENITY_LIMIT],
            original_price=row["original_price"],
            current_bid=current,
            current_bid_display=f"£{pricing.format_amount(current)}",
            discount_percent=pricing.discount_percent(row["original_price"], current),
            bid_count=row.get("bid_count") or 0,
            available_date=row["available_date"],
            date_label=date_label(row["available_date"], now),
            check_in_time=row["check_in_time"],
            auction_ends_at=row["auction_ends_at"],
            countdown=countdown_for(row["auction_ends_at"], now, listing_id=row["id"]),
            href=f"/room/{row['id']}",
        )


class RoomDetail(RoomCard):
    """The auction page: full amenities, bid hints and the detail countdown."""

    room_type: str
    max_guests: int
    auction_ended: bool
    min_bid: Decimal
    min_bid_display: str
    quick_bids: list[Decimal]
    check_in_note: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any], now: datetime) -> "RoomDetail":
        card = RoomCard.from_row(row, now)
        current = card.current_bid
        min_bid = pricing.minimum_next_bid(current)
        countdown = countdown_for(row["auction_ends_at"], now, listing_id=row["id"], detail=True)
        return cls(
            **card.model_dump(exclude={"amenities", "countdown"}),
            amenities=list(row.get("amenities") or []),
            countdown=countdown,
            room_type=row["room_type"],
            max_guests=row["max_guests"],
            auction_ended=countdown.ended,
            min_bid=min_bid,
            min_bid_display=f"Min £{pricing.format_amount(min_bid)}",
            quick_bids=pricing.quick_bids(current),
            check_in_note=(
                "If you win, you'll pay your bid amount. "
                f"Check in {(row['check_in_time'] or '').lower()}."
            ),
        )


class RoomListPage(BaseModel):
    """Home page: filtered room cards plus the filter state."""

    rooms: list[RoomCard]
    count: int
    count_label: str
    live_auctions: int
    total_bids: int
    region: str
    time_filter: TimeFilter
    time_filters: list[TimeFilterOption]
    regions: list[RegionResponse]


class SecretHotelCard(BaseModel):
    """An anonymous fixed-price listing; never carries the hotel's identity."""

    id: UUID
    title: str
    stars: str
    star_rating: int
    radius_description: str
    radius_label: str
    region_name: str | None
    amenities: list[str]
    room_type: str
    review_score: Decimal | None
    review_count: int | None
    original_value: Decimal
    secret_price: Decimal
    secret_price_display: str
    discount_percent: int
    available_date: date
    date_label: str
    check_in_time: str
    href: str
    action_label: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any], now: datetime) -> "SecretHotelCard":
        price = pricing.format_amount(row["secret_price"])
        return cls(
            id=row["id"],
            title=f"Secret {row['star_rating']}-Star Hotel",
            stars=pricing.stars(row["star_rating"]),
            star_rating=row["star_rating"],
            radius_description=row["radius_description"],
            radius_label=f"Within {row['radius_description']}",
            region_name=row.get("region_name"),
            amenities=list(row.get("amenities") or [])[:CARD_AMENITY_LIMIT],
            room_type=row["room_type"],
            review_score=row.get("review_score"),
            review_count=row.get("review_count"),
            original_value=row["original_value"],
            secret_price=row["secret_price"],
            secret_price_display=f"£{price}",
            discount_percent=pricing.discount_percent(row["original_value"], row["secret_price"]),
            available_date=row["available_date"],
            date_label=date_label(row["available_date"], now),
            check_in_time=row["check_in_time"],
            href=f"/secret/{row['id']}",
            action_label=f"Book Now · £{price}",
        )


class SecretHotelListPage(BaseModel):
    """Secret hotels page: filtered cards plus the filter state."""

    hotels: list[SecretHotelCard]
    count: int
    count_label: str
    region: str
    time_filter: TimeFilter
    time_filters: list[TimeFilterOption]
    regions: list[RegionResponse]
