"""Pytest configuration and fixtures for testing."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from laterooms.schemas.user import AuthUser
from laterooms.services.listing_filter import local_today

CHAIN_METHODS = ("select", "join", "eq", "gt", "order", "limit")


def _make_query(
    rows: list[dict[str, Any]] | None = None,
    single: Any = None,
    count: int = 0,
    inserted: dict[str, Any] | None = None,
    updated: list[dict[str, Any]] | None = None,
) -> MagicMock:
    query = MagicMock()
    for name in CHAIN_METHODS:
        getattr(query, name).return_value = query
    query.execute = AsyncMock(return_value=rows or [])
    query.single = AsyncMock(return_value=single)
    query.count = AsyncMock(return_value=count)
    query.insert = AsyncMock(return_value=inserted)
    query.update = AsyncMock(return_value=updated or [])
    return query


# Chainable query mock factory
@pytest.fixture
def make_query() -> Callable[..., MagicMock]:
    """Return a factory for chainable table query mocks."""
    return _make_query


# Mock backend client fixture
@pytest.fixture
def mock_backend() -> MagicMock:
    """Create a mock backend client.

    ``backend.table(name)`` returns the same query mock per name; tests swap
    one in through ``backend.queries[name]``.
    """
    backend = MagicMock()
    backend.queries = {}
    backend.table.side_effect = lambda name: backend.queries.setdefault(name, _make_query())
    backend.auth = AsyncMock()
    return backend


@pytest.fixture
def now() -> datetime:
    return datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def today(now: datetime) -> date:
    return local_today(now)


# Mock user fixture
@pytest.fixture
def auth_user() -> AuthUser:
    """Create a signed-in customer."""
    return AuthUser(
        id=uuid4(),
        email="guest@test.com",
        full_name="Grace Guest",
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def partner_row(auth_user: AuthUser) -> dict[str, Any]:
    return {
        "id": uuid4(),
        "user_id": auth_user.id,
        "company_name": "Patel Hotels Group",
        "contact_name": "Priya Patel",
        "contact_email": "partner@test.com",
        "phone": None,
    }


# Room row fixture (shape of room_listings_full)
@pytest.fixture
def room_row(now: datetime, today: date) -> dict[str, Any]:
    """An active auction with one bid of 120, ending in two hours."""
    return {
        "id": uuid4(),
        "hotel_id": uuid4(),
        "hotel_name": "The Grosvenor Rooms",
        "star_rating": 5,
        "amenities": ["Spa", "Pool", "Restaurant", "Gym"],
        "area_name": "Mayfair",
        "region_name": "London",
        "room_type": "Deluxe King Room",
        "original_price": Decimal("250.00"),
        "minimum_bid": Decimal("80.00"),
        "starting_bid": Decimal("95.00"),
        "current_bid": Decimal("120.00"),
        "bid_count": 3,
        "available_date": today,
        "check_in_time": "3pm onwards",
        "max_guests": 2,
        "auction_ends_at": now + timedelta(hours=2),
        "status": "active",
        "created_at": now - timedelta(hours=1),
    }


# Secret listing row fixture (shape of secret_listings_full)
@pytest.fixture
def secret_row(now: datetime, today: date) -> dict[str, Any]:
    return {
        "id": uuid4(),
        "region_id": uuid4(),
        "region_name": "London",
        "radius_area": "Central London",
        "radius_description": "0.5 miles of Oxford Circus",
        "star_rating": 5,
        "amenities": ["Spa", "Pool", "Restaurant"],
        "room_type": "Deluxe King Room",
        "review_score": Decimal("9.2"),
        "review_count": 1500,
        "original_value": Decimal("350.00"),
        "secret_price": Decimal("149.00"),
        "available_date": today,
        "check_in_time": "3pm onwards",
        "max_guests": 2,
        "status": "active",
        "created_at": now - timedelta(hours=1),
    }


# FastAPI test client fixture
@pytest.fixture
def api(mock_backend: MagicMock, now: datetime):
    """TestClient over the app with the backend and clock replaced.

    Visitors start signed out; ``api.sign_in(user)`` switches identity.
    """
    from fastapi.testclient import TestClient

    from laterooms.api.deps import get_now, get_optional_user
    from laterooms.main import app
    from laterooms.services.countdown_ticker import CountdownTicker

    app.state.backend = mock_backend
    app.state.ticker = CountdownTicker(interval=0.01, clock=lambda: now)
    app.dependency_overrides[get_now] = lambda: now
    app.dependency_overrides[get_optional_user] = lambda: None

    client = TestClient(app, follow_redirects=False)

    def sign_in(user: AuthUser | None) -> None:
        app.dependency_overrides[get_optional_user] = lambda: user

    client.sign_in = sign_in
    yield client
    app.dependency_overrides.clear()
