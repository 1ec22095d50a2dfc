"""Tests for session tokens and the auth client.

Database paths run against a mocked session maker.
"""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError, OperationalError

from laterooms.backend import AuthClient, AuthError, BackendError
from laterooms.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from laterooms.models.user import User


class TestSecurity:
    """Test password hashing and JWT helpers."""

    def test_password_hash_round_trip(self):
        hashed = get_password_hash("password123")

        assert hashed != "password123"
        assert verify_password("password123", hashed)
        assert not verify_password("password124", hashed)

    def test_token_carries_claims(self):
        token = create_access_token({"sub": "user-1", "sid": "session-1"})

        payload = decode_access_token(token)

        assert payload["sub"] == "user-1"
        assert payload["sid"] == "session-1"
        assert "exp" in payload

    def test_expired_token(self):
        token = create_access_token({"sub": "user-1"}, expires_delta=timedelta(seconds=-1))
        assert decode_access_token(token) is None

    def test_tampered_token(self):
        token = create_access_token({"sub": "user-1"})
        assert decode_access_token(token[:-2] + "xx") is None


class TestAuthClientWithoutDatabase:
    """Test auth client rejections that happen before any query."""

    @pytest.fixture
    def session_maker(self) -> MagicMock:
        return MagicMock()

    @pytest.mark.asyncio
    async def test_short_password(self, session_maker):
        client = AuthClient(session_maker)

        with pytest.raises(AuthError, match="Password should be at least 6 characters"):
            await client.sign_up("guest@test.com", "12345")

        session_maker.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_user_without_token(self, session_maker):
        client = AuthClient(session_maker)

        assert await client.get_user(None) is None
        assert await client.get_user("not-a-jwt") is None
        session_maker.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_user_token_without_session_id(self, session_maker):
        client = AuthClient(session_maker)
        token = create_access_token({"sub": str(uuid4())})

        assert await client.get_user(token) is None
        session_maker.assert_not_called()

    @pytest.mark.asyncio
    async def test_sign_out_ignores_unknown_tokens(self, session_maker):
        client = AuthClient(session_maker)

        await client.sign_out("not-a-jwt")
        await client.sign_out(None)

        session_maker.assert_not_called()


def session_maker_for(db: AsyncMock) -> MagicMock:
    maker = MagicMock()
    maker.return_value.__aenter__.return_value = db
    maker.return_value.__aexit__.return_value = False
    return maker


def user_result(user: User | None) -> MagicMock:
    result = MagicMock()
    result.scalar_one_or_none.return_value = user
    return result


@pytest.fixture
def stored_user(now) -> User:
    return User(
        id=uuid4(),
        email="guest@test.com",
        password_hash=get_password_hash("password123"),
        full_name="Grace Guest",
        created_at=now,
    )


@pytest.fixture
def db(now) -> AsyncMock:
    """Session whose refresh fills in server defaults like a real flush."""
    session = AsyncMock()
    session.add = MagicMock()

    async def refresh(obj):
        if obj.id is None:
            obj.id = uuid4()
        if obj.created_at is None:
            obj.created_at = now

    session.refresh.side_effect = refresh
    session.execute.return_value = user_result(None)
    return session


def live_token(user: User, session_id=None) -> str:
    return create_access_token({"sub": str(user.id), "sid": str(session_id or uuid4())})


class TestSignIn:
    """Test AuthClient.sign_in_with_password."""

    @pytest.mark.asyncio
    async def test_valid_credentials_open_session(self, db, stored_user):
        db.execute.return_value = user_result(stored_user)
        client = AuthClient(session_maker_for(db))

        session = await client.sign_in_with_password("guest@test.com", "password123")

        assert session.user.id == stored_user.id
        payload = decode_access_token(session.access_token)
        assert payload["sub"] == str(stored_user.id)
        assert payload["sid"]
        db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_wrong_password(self, db, stored_user):
        db.execute.return_value = user_result(stored_user)
        client = AuthClient(session_maker_for(db))

        with pytest.raises(AuthError) as exc_info:
            await client.sign_in_with_password("guest@test.com", "wrong-password")

        assert exc_info.value.message == "Invalid login credentials"
        db.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_email(self, db):
        client = AuthClient(session_maker_for(db))

        with pytest.raises(AuthError) as exc_info:
            await client.sign_in_with_password("nobody@test.com", "password123")

        assert exc_info.value.message == "Invalid login credentials"

    @pytest.mark.asyncio
    async def test_session_write_failure_is_backend_error(self, db, stored_user):
        db.execute.return_value = user_result(stored_user)
        db.commit.side_effect = OperationalError("INSERT", {}, Exception("connection refused"))
        client = AuthClient(session_maker_for(db))

        with pytest.raises(BackendError) as exc_info:
            await client.sign_in_with_password("guest@test.com", "password123")

        assert exc_info.value.message == "connection refused"
        db.rollback.assert_awaited_once()


class TestSignUp:
    """Test AuthClient.sign_up."""

    @pytest.mark.asyncio
    async def test_new_account_is_signed_in(self, db):
        client = AuthClient(session_maker_for(db))

        session = await client.sign_up("new@test.com", "password123", full_name="New Guest")

        assert session.user.email == "new@test.com"
        assert session.user.full_name == "New Guest"
        created = db.add.call_args_list[0].args[0]
        assert verify_password("password123", created.password_hash)
        assert db.commit.await_count == 2

    @pytest.mark.asyncio
    async def test_existing_email(self, db, stored_user):
        db.execute.return_value = user_result(stored_user)
        client = AuthClient(session_maker_for(db))

        with pytest.raises(AuthError) as exc_info:
            await client.sign_up("guest@test.com", "password123")

        assert exc_info.value.message == "User already registered"
        db.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_hits_unique_constraint(self, db):
        db.commit.side_effect = IntegrityError(
            "INSERT", {}, Exception('duplicate key value violates unique constraint "users_email_key"')
        )
        client = AuthClient(session_maker_for(db))

        with pytest.raises(AuthError) as exc_info:
            await client.sign_up("guest@test.com", "password123")

        assert exc_info.value.message == "User already registered"
        db.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_lookup_failure_is_backend_error(self, db):
        db.execute.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))
        client = AuthClient(session_maker_for(db))

        with pytest.raises(BackendError) as exc_info:
            await client.sign_up("guest@test.com", "password123")

        assert exc_info.value.message == "connection refused"


class TestGetUser:
    """Test AuthClient.get_user against stored sessions."""

    @pytest.mark.asyncio
    async def test_live_session_returns_user(self, db, stored_user):
        db.execute.return_value = user_result(stored_user)
        client = AuthClient(session_maker_for(db))

        user = await client.get_user(live_token(stored_user))

        assert user.id == stored_user.id
        assert user.email == "guest@test.com"

    @pytest.mark.asyncio
    async def test_revoked_session_returns_none(self, db, stored_user):
        # Signed-out sessions have no auth_sessions row, so the join finds nothing
        client = AuthClient(session_maker_for(db))

        assert await client.get_user(live_token(stored_user)) is None
        db.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_lookup_failure_is_backend_error(self, db, stored_user):
        db.execute.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))
        client = AuthClient(session_maker_for(db))

        with pytest.raises(BackendError) as exc_info:
            await client.get_user(live_token(stored_user))

        assert exc_info.value.message == "connection refused"


class TestSignOut:
    """Test AuthClient.sign_out against stored sessions."""

    @pytest.mark.asyncio
    async def test_deletes_session_row(self, db, stored_user):
        session_id = uuid4()
        client = AuthClient(session_maker_for(db))

        await client.sign_out(live_token(stored_user, session_id))

        stmt = db.execute.await_args.args[0]
        assert stmt.table.name == "auth_sessions"
        assert session_id in stmt.compile(dialect=postgresql.dialect()).params.values()
        db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_failure_is_backend_error(self, db, stored_user):
        db.execute.side_effect = OperationalError("DELETE", {}, Exception("connection refused"))
        client = AuthClient(session_maker_for(db))

        with pytest.raises(BackendError) as exc_info:
            await client.sign_out(live_token(stored_user))

        assert exc_info.value.message == "connection refused"
        db.rollback.assert_awaited_once()
