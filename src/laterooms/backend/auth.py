"""Authentication half of the backend client."""

import logging
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from laterooms.backend.errors import AuthError, BackendError
from laterooms.core.config import settings
from laterooms.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from laterooms.models.user import AuthSession, User
from laterooms.schemas.user import AuthSessionResponse, AuthUser

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class AuthClient:
    """Email/password accounts with revocable JWT sessions."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    async def _open_session(self, db: AsyncSession, user: User) -> AuthSessionResponse:
        auth_session = AuthSession(user_id=user.id)
        try:
            db.add(auth_session)
            await db.commit()
            await db.refresh(auth_session)
        except SQLAlchemyError as e:
            await db.rollback()
            raise BackendError.from_exc(e) from e

        token = create_access_token(
            {"sub": str(user.id), "sid": str(auth_session.id), "email": user.email}
        )
        return AuthSessionResponse(
            access_token=token,
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            user=AuthUser.model_validate(user),
        )

    async def sign_up(
        self, email: str, password: str, full_name: str | None = None
    ) -> AuthSessionResponse:
        """Create an account and sign it in.

        Raises:
            AuthError: Weak password or email already registered
        """
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AuthError(
                f"Password should be at least {MIN_PASSWORD_LENGTH} characters"
            )

        async with self._session_maker() as db:
            try:
                existing = await db.execute(select(User).where(User.email == email))
            except SQLAlchemyError as e:
                raise BackendError.from_exc(e) from e
            if existing.scalar_one_or_none():
                raise AuthError("User already registered")

            user = User(
                email=email,
                password_hash=get_password_hash(password),
                full_name=full_name,
            )
            try:
                db.add(user)
                await db.commit()
                await db.refresh(user)
            except IntegrityError:
                await db.rollback()
                raise AuthError("User already registered")
            except SQLAlchemyError as e:
                await db.rollback()
                raise BackendError.from_exc(e) from e

            logger.info(f"User signed up: {user.id}")
            return await self._open_session(db, user)

    async def sign_in_with_password(self, email: str, password: str) -> AuthSessionResponse:
        """Sign in with email and password.

        Raises:
            AuthError: Unknown email or wrong password
        """
        async with self._session_maker() as db:
            try:
                result = await db.execute(select(User).where(User.email == email))
            except SQLAlchemyError as e:
                raise BackendError.from_exc(e) from e
            user = result.scalar_one_or_none()
            if user is None or not verify_password(password, user.password_hash):
                raise AuthError("Invalid login credentials")

            return await self._open_session(db, user)

    async def get_user(self, token: str | None) -> AuthUser | None:
        """Resolve a token to its user; None for missing, invalid or revoked tokens.

        Raises:
            BackendError: The session lookup failed
        """
        if not token:
            return None
        payload = decode_access_token(token)
        if payload is None:
            return None

        try:
            user_id = UUID(payload["sub"])
            session_id = UUID(payload["sid"])
        except (KeyError, ValueError):
            return None

        async with self._session_maker() as db:
            try:
                result = await db.execute(
                    select(User)
                    .join(AuthSession, AuthSession.user_id == User.id)
                    .where(AuthSession.id == session_id, User.id == user_id)
                )
            except SQLAlchemyError as e:
                raise BackendError.from_exc(e) from e
            user = result.scalar_one_or_none()
            if user is None:
                return None
            return AuthUser.model_validate(user)

    async def sign_out(self, token: str | None) -> None:
        """Revoke the session behind ``token``. Unknown tokens are ignored."""
        if not token:
            return
        payload = decode_access_token(token)
        if payload is None or "sid" not in payload:
            return

        try:
            session_id = UUID(payload["sid"])
        except ValueError:
            return

        async with self._session_maker() as db:
            try:
                await db.execute(delete(AuthSession).where(AuthSession.id == session_id))
                await db.commit()
            except SQLAlchemyError as e:
                await db.rollback()
                raise BackendError.from_exc(e) from e
        logger.info(f"Session signed out: {session_id}")
