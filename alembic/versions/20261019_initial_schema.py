"""initial_schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19

Creates the base tables plus the two read views. The room view computes the
current bid as the highest bid amount, so it is never stored on the listing.

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

from laterooms.models.views import ROOM_LISTINGS_FULL_SQL, SECRET_LISTINGS_FULL_SQL


# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True)


def _created_at() -> sa.Column:
    return sa.Column(
        'created_at',
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.func.now(),
    )


def _fk(name: str, target: str, **kwargs) -> sa.Column:
    return sa.Column(
        name,
        postgresql.UUID(as_uuid=True),
        sa.ForeignKey(target, **kwargs),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        'users',
        _id(),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(255), nullable=True),
        _created_at(),
    )
    op.create_index('idx_users_email', 'users', ['email'])

    op.create_table(
        'auth_sessions',
        _id(),
        _fk('user_id', 'users.id', ondelete='CASCADE'),
        _created_at(),
    )

    op.create_table(
        'regions',
        _id(),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
    )

    op.create_table(
        'areas',
        _id(),
        _fk('region_id', 'regions.id'),
        sa.Column('name', sa.String(100), nullable=False),
    )

    op.create_table(
        'hotel_partners',
        _id(),
        sa.Column(
            'user_id',
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey('users.id'),
            nullable=False,
            unique=True,
        ),
        sa.Column('company_name', sa.String(255), nullable=False),
        sa.Column('contact_name', sa.String(255), nullable=True),
        sa.Column('contact_email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        _created_at(),
    )

    op.create_table(
        'hotels',
        _id(),
        _fk('partner_id', 'hotel_partners.id'),
        _fk('area_id', 'areas.id'),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('star_rating', sa.Integer(), nullable=False),
        sa.Column(
            'amenities',
            postgresql.ARRAY(sa.Text()),
            nullable=False,
            server_default='{}',
        ),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        _created_at(),
    )

    op.create_table(
        'room_listings',
        _id(),
        _fk('hotel_id', 'hotels.id'),
        sa.Column('room_type', sa.String(255), nullable=False),
        sa.Column('original_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('minimum_bid', sa.Numeric(10, 2), nullable=False),
        sa.Column('starting_bid', sa.Numeric(10, 2), nullable=False),
        sa.Column('available_date', sa.Date(), nullable=False),
        sa.Column('check_in_time', sa.String(50), nullable=False),
        sa.Column('max_guests', sa.Integer(), nullable=False, server_default='2'),
        sa.Column('auction_ends_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        _created_at(),
        sa.CheckConstraint('original_price > 0', name='chk_room_original_price_positive'),
        sa.CheckConstraint('minimum_bid > 0', name='chk_room_minimum_bid_positive'),
        sa.CheckConstraint(
            "status IN ('active', 'sold', 'cancelled')", name='chk_room_listing_status'
        ),
    )
    op.create_index(
        'idx_room_listings_status_ends', 'room_listings', ['status', 'auction_ends_at']
    )
    op.create_index(
        'idx_room_listings_hotel_created', 'room_listings', ['hotel_id', 'created_at']
    )

    op.create_table(
        'secret_hotel_listings',
        _id(),
        _fk('partner_id', 'hotel_partners.id'),
        _fk('region_id', 'regions.id'),
        sa.Column('radius_area', sa.String(255), nullable=False),
        sa.Column('radius_description', sa.String(255), nullable=False),
        sa.Column('star_rating', sa.Integer(), nullable=False),
        sa.Column(
            'amenities',
            postgresql.ARRAY(sa.Text()),
            nullable=False,
            server_default='{}',
        ),
        sa.Column('room_type', sa.String(255), nullable=False),
        sa.Column('review_score', sa.Numeric(3, 1), nullable=True),
        sa.Column('review_count', sa.Integer(), nullable=True),
        sa.Column('original_value', sa.Numeric(10, 2), nullable=False),
        sa.Column('secret_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('available_date', sa.Date(), nullable=False),
        sa.Column('check_in_time', sa.String(50), nullable=False),
        sa.Column('max_guests', sa.Integer(), nullable=False, server_default='2'),
        sa.Column('actual_hotel_name', sa.String(255), nullable=False),
        sa.Column('actual_address', sa.Text(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        _created_at(),
        sa.CheckConstraint('secret_price > 0', name='chk_secret_price_positive'),
        sa.CheckConstraint(
            "status IN ('active', 'sold', 'cancelled')", name='chk_secret_listing_status'
        ),
    )
    op.create_index(
        'idx_secret_listings_partner_created',
        'secret_hotel_listings',
        ['partner_id', 'created_at'],
    )

    op.create_table(
        'bids',
        _id(),
        _fk('listing_id', 'room_listings.id'),
        _fk('customer_id', 'users.id'),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        _created_at(),
        sa.CheckConstraint('amount > 0', name='chk_bid_amount_positive'),
    )
    op.create_index('idx_bids_listing_amount', 'bids', ['listing_id', 'amount'])

    op.create_table(
        'bookings',
        _id(),
        _fk('listing_id', 'room_listings.id'),
        _fk('customer_id', 'users.id'),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        _created_at(),
    )
    op.create_index('idx_bookings_listing_created', 'bookings', ['listing_id', 'created_at'])

    op.execute(ROOM_LISTINGS_FULL_SQL)
    op.execute(SECRET_LISTINGS_FULL_SQL)


def downgrade() -> None:
    op.execute("DROP VIEW IF EXISTS secret_listings_full")
    op.execute("DROP VIEW IF EXISTS room_listings_full")

    for table in (
        'bookings',
        'bids',
        'secret_hotel_listings',
        'room_listings',
        'hotels',
        'hotel_partners',
        'areas',
        'regions',
        'auth_sessions',
        'users',
    ):
        op.drop_table(table)
