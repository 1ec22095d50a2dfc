"""Reset database to empty state.

Clears all data from:
- bookings, bids
- room_listings, secret_hotel_listings
- hotels, hotel_partners
- areas, regions
- auth_sessions, users

Usage:
    python -m scripts.reset_db
"""

import asyncio

from sqlalchemy import text

from laterooms.core.database import async_session_maker, engine

# Children before parents for the foreign keys
TABLES = [
    "bookings",
    "bids",
    "room_listings",
    "secret_hotel_listings",
    "hotels",
    "hotel_partners",
    "areas",
    "regions",
    "auth_sessions",
    "users",
]


async def reset_database():
    """Clear all data from the database."""
    print("=" * 60)
    print("Resetting database to empty state...")
    print("=" * 60)

    async with async_session_maker() as session:
        for table in TABLES:
            result = await session.execute(text(f"DELETE FROM {table}"))
            print(f"  Deleted {result.rowcount} rows from {table}")

        await session.commit()
        print("\nDatabase cleared successfully!")


async def main():
    await reset_database()

    print("\n" + "=" * 60)
    print("Reset complete!")
    print("=" * 60)
    print("\nTo re-seed the database, run:")
    print("  python -m scripts.seed_data")
    print("=" * 60)

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
