"""Read-only denormalized views.

The views live in their own MetaData so ``create_all`` and autogenerate never
try to create them as tables; the migration creates them with the SQL below.
"""

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import ARRAY, UUID

view_metadata = MetaData()

room_listings_full = Table(
    "room_listings_full",
    view_metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("hotel_id", UUID(as_uuid=True)),
    Column("hotel_name", String),
    Column("star_rating", Integer),
    Column("amenities", ARRAY(Text)),
    Column("area_name", String),
    Column("region_name", String),
    Column("room_type", String),
    Column("original_price", Numeric(10, 2)),
    Column("minimum_bid", Numeric(10, 2)),
    Column("starting_bid", Numeric(10, 2)),
    Column("current_bid", Numeric(10, 2)),
    Column("bid_count", Integer),
    Column("available_date", Date),
    Column("check_in_time", String),
    Column("max_guests", Integer),
    Column("auction_ends_at", DateTime(timezone=True)),
    Column("status", String),
    Column("created_at", DateTime(timezone=True)),
)

secret_listings_full = Table(
    "secret_listings_full",
    view_metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("region_id", UUID(as_uuid=True)),
    Column("region_name", String),
    Column("radius_area", String),
    Column("radius_description", String),
    Column("star_rating", Integer),
    Column("amenities", ARRAY(Text)),
    Column("room_type", String),
    Column("review_score", Numeric(3, 1)),
    Column("review_count", Integer),
    Column("original_value", Numeric(10, 2)),
    Column("secret_price", Numeric(10, 2)),
    Column("available_date", Date),
    Column("check_in_time", String),
    Column("max_guests", Integer),
    Column("status", String),
    Column("created_at", DateTime(timezone=True)),
)

ROOM_LISTINGS_FULL_SQL = """
CREATE OR REPLACE VIEW room_listings_full AS
SELECT
    rl.id,
    rl.hotel_id,
    h.name AS hotel_name,
    h.star_rating,
    h.amenities,
    a.name AS area_name,
    r.name AS region_name,
    rl.room_type,
    rl.original_price,
    rl.minimum_bid,
    rl.starting_bid,
    b.current_bid,
    COALESCE(b.bid_count, 0)::int AS bid_count,
    rl.available_date,
    rl.check_in_time,
    rl.max_guests,
    rl.auction_ends_at,
    rl.status,
    rl.created_at
FROM room_listings rl
JOIN hotels h ON h.id = rl.hotel_id
JOIN areas a ON a.id = h.area_id
JOIN regions r ON r.id = a.region_id
LEFT JOIN (
    SELECT listing_id, MAX(amount) AS current_bid, COUNT(*) AS bid_count
    FROM bids
    GROUP BY listing_id
) b ON b.listing_id = rl.id
"""

# actual_hotel_name / actual_address stay on the base table only
SECRET_LISTINGS_FULL_SQL = """
CREATE OR REPLACE VIEW secret_listings_full AS
SELECT
    s.id,
    s.region_id,
    r.name AS region_name,
    s.radius_area,
    s.radius_description,
    s.star_rating,
    s.amenities,
    s.room_type,
    s.review_score,
    s.review_count,
    s.original_value,
    s.secret_price,
    s.available_date,
    s.check_in_time,
    s.max_guests,
    s.status,
    s.created_at
FROM secret_hotel_listings s
JOIN regions r ON r.id = s.region_id
"""
