"""Seed data script for development.

Creates:
- UK regions and areas for the browse filters
- 1 demo customer and 1 demo hotel partner with two hotels
- A handful of room auctions ending at staggered times
- Two secret hotel listings

Environment Variables:
    RESET_DATA: Set to "true" to clear listings and bids before seeding (default: false)

Usage:
    python -m scripts.seed_data
    RESET_DATA=true python -m scripts.seed_data
"""

import asyncio
import os
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from laterooms.core.database import async_session_maker, engine
from laterooms.core.security import get_password_hash
from laterooms.models import (
    Area,
    Bid,
    Hotel,
    HotelPartner,
    Region,
    RoomListing,
    SecretHotelListing,
    User,
)

RESET_DATA = os.getenv("RESET_DATA", "false").lower() == "true"

REGIONS = {
    "London": ["Mayfair", "Covent Garden", "Shoreditch"],
    "Manchester": ["Northern Quarter", "Deansgate"],
    "Edinburgh": ["Old Town", "Leith"],
}


async def reset_listing_data(session: AsyncSession) -> None:
    """Clear bookings, bids and listings."""
    print("Resetting listing data...")
    for table in ("bookings", "bids", "room_listings", "secret_hotel_listings"):
        await session.execute(text(f"DELETE FROM {table}"))
    await session.commit()
    print("  Cleared bookings, bids, room_listings, secret_hotel_listings")


async def seed_regions(session: AsyncSession) -> dict[str, Area]:
    """Create regions and their areas; returns areas by name."""
    print("Seeding regions...")

    result = await session.execute(select(Region).limit(1))
    if result.scalar_one_or_none():
        print("  Regions already exist, skipping...")
        result = await session.execute(select(Area))
        return {area.name: area for area in result.scalars().all()}

    areas: dict[str, Area] = {}
    for order, (region_name, area_names) in enumerate(REGIONS.items(), start=1):
        region = Region(name=region_name, display_order=order)
        session.add(region)
        await session.flush()
        for area_name in area_names:
            area = Area(region_id=region.id, name=area_name)
            session.add(area)
            areas[area_name] = area

    await session.commit()
    print(f"  Created {len(REGIONS)} regions, {len(areas)} areas")
    return areas


async def seed_users(session: AsyncSession) -> tuple[User, User]:
    """Create the demo customer and partner logins.

    Users:
    - Customer: guest@test.com / password123
    - Partner: partner@test.com / password123
    """
    print("Seeding users...")

    result = await session.execute(select(User).where(User.email == "partner@test.com"))
    partner_user = result.scalar_one_or_none()
    if partner_user:
        print("  Users already exist, skipping...")
        result = await session.execute(select(User).where(User.email == "guest@test.com"))
        return result.scalar_one(), partner_user

    password_hash = get_password_hash("password123")
    customer = User(email="guest@test.com", password_hash=password_hash, full_name="Grace Guest")
    partner_user = User(
        email="partner@test.com", password_hash=password_hash, full_name="Priya Patel"
    )
    session.add_all([customer, partner_user])
    await session.commit()
    await session.refresh(customer)
    await session.refresh(partner_user)

    print("  Created customer: guest@test.com / password123")
    print("  Created partner: partner@test.com / password123")
    return customer, partner_user


async def seed_partner(
    session: AsyncSession, user: User, areas: dict[str, Area]
) -> tuple[HotelPartner, list[Hotel]]:
    print("Seeding hotel partner...")

    result = await session.execute(select(HotelPartner).where(HotelPartner.user_id == user.id))
    partner = result.scalar_one_or_none()
    if partner:
        print("  Partner already exists, skipping...")
        result = await session.execute(select(Hotel).where(Hotel.partner_id == partner.id))
        return partner, list(result.scalars().all())

    partner = HotelPartner(
        user_id=user.id,
        company_name="Patel Hotels Group",
        contact_name="Priya Patel",
        contact_email="partner@test.com",
        phone="020 7946 0000",
    )
    session.add(partner)
    await session.flush()

    hotels = [
        Hotel(
            partner_id=partner.id,
            area_id=areas["Mayfair"].id,
            name="The Grosvenor Rooms",
            star_rating=5,
            amenities=["Spa", "Pool", "Restaurant", "Gym"],
        ),
        Hotel(
            partner_id=partner.id,
            area_id=areas["Deansgate"].id,
            name="Deansgate Lofts",
            star_rating=4,
            amenities=["Bar", "Gym"],
        ),
    ]
    session.add_all(hotels)
    await session.commit()

    print(f"  Created partner: {partner.company_name} with {len(hotels)} hotels")
    return partner, hotels


async def seed_room_listings(
    session: AsyncSession, hotels: list[Hotel], customer: User
) -> list[RoomListing]:
    """Create auctions ending in 25 minutes, 50 minutes and 3 hours."""
    print("Seeding room auctions...")

    if not RESET_DATA:
        result = await session.execute(select(RoomListing).limit(1))
        if result.scalar_one_or_none():
            print("  Room auctions already exist, skipping...")
            return []

    now = datetime.now(timezone.utc)
    today = date.today()
    listings = [
        RoomListing(
            hotel_id=hotels[0].id,
            room_type="Deluxe King Room",
            original_price=Decimal("250"),
            minimum_bid=Decimal("80"),
            starting_bid=Decimal("95"),
            available_date=today,
            check_in_time="3pm onwards",
            max_guests=2,
            auction_ends_at=now + timedelta(minutes=25),
        ),
        RoomListing(
            hotel_id=hotels[0].id,
            room_type="Junior Suite",
            original_price=Decimal("420"),
            minimum_bid=Decimal("150"),
            starting_bid=Decimal("180"),
            available_date=today,
            check_in_time="4pm onwards",
            max_guests=3,
            auction_ends_at=now + timedelta(minutes=50),
        ),
        RoomListing(
            hotel_id=hotels[1].id,
            room_type="Superior Double",
            original_price=Decimal("160"),
            minimum_bid=Decimal("55"),
            starting_bid=Decimal("60"),
            available_date=today + timedelta(days=1),
            check_in_time="Flexible",
            max_guests=2,
            auction_ends_at=now + timedelta(hours=3),
        ),
    ]
    session.add_all(listings)
    await session.flush()

    session.add(Bid(listing_id=listings[0].id, customer_id=customer.id, amount=Decimal("120")))
    await session.commit()

    for listing in listings:
        print(f"  {listing.room_type}: ends {listing.auction_ends_at:%H:%M} UTC")
    return listings


async def seed_secret_listings(
    session: AsyncSession, partner: HotelPartner
) -> list[SecretHotelListing]:
    print("Seeding secret hotels...")

    if not RESET_DATA:
        result = await session.execute(select(SecretHotelListing).limit(1))
        if result.scalar_one_or_none():
            print("  Secret hotels already exist, skipping...")
            return []

    result = await session.execute(select(Region).order_by(Region.display_order))
    regions = {region.name: region for region in result.scalars().all()}
    today = date.today()

    listings = [
        SecretHotelListing(
            partner_id=partner.id,
            region_id=regions["London"].id,
            radius_area="Central London",
            radius_description="0.5 miles of Oxford Circus",
            star_rating=5,
            amenities=["Spa", "Pool", "Restaurant"],
            room_type="Deluxe King Room",
            review_score=Decimal("9.2"),
            review_count=1500,
            original_value=Decimal("350"),
            secret_price=Decimal("149"),
            available_date=today,
            check_in_time="3pm onwards",
            max_guests=2,
            actual_hotel_name="The Langham London",
            actual_address="1C Portland Place, London W1B 1JA",
        ),
        SecretHotelListing(
            partner_id=partner.id,
            region_id=regions["Edinburgh"].id,
            radius_area="Old Town",
            radius_description="0.3 miles of the Royal Mile",
            star_rating=4,
            amenities=["Bar"],
            room_type="Superior Double",
            original_value=Decimal("190"),
            secret_price=Decimal("89"),
            available_date=today + timedelta(days=1),
            check_in_time="2pm onwards",
            max_guests=2,
            actual_hotel_name="The Cobbled Close",
            actual_address="12 High Street, Edinburgh EH1 1TB",
        ),
    ]
    session.add_all(listings)
    await session.commit()

    print(f"  Created {len(listings)} secret hotels")
    return listings


async def main():
    """Main seed function."""
    print("=" * 60)
    print("Late Rooms - Seed Data Script")
    print("=" * 60)
    print(f"  RESET_DATA: {RESET_DATA}")
    print("=" * 60)

    async with async_session_maker() as session:
        if RESET_DATA:
            await reset_listing_data(session)

        areas = await seed_regions(session)
        customer, partner_user = await seed_users(session)
        partner, hotels = await seed_partner(session, partner_user, areas)
        rooms = await seed_room_listings(session, hotels, customer)
        secrets = await seed_secret_listings(session, partner)

    print("=" * 60)
    print("Seed data complete!")
    print(f"  Room auctions: {len(rooms)}")
    print(f"  Secret hotels: {len(secrets)}")
    print("=" * 60)

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
