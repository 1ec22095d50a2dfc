"""Customer authentication endpoints."""

import logging

from fastapi import APIRouter, HTTPException, Response, status

from laterooms.api.deps import HOME_PATH, Backend, OptionalUser, SessionToken, redirect
from laterooms.backend import BackendError
from laterooms.core.config import settings
from laterooms.schemas.layout import HeaderView
from laterooms.schemas.user import AuthResult, AuthSessionResponse, UserLogin, UserSignup

logger = logging.getLogger(__name__)

router = APIRouter()


def set_session_cookie(response: Response, session: AuthSessionResponse) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=session.access_token,
        max_age=session.expires_in,
        httponly=True,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME)


@router.post("/signup", response_model=AuthResult, status_code=status.HTTP_201_CREATED)
async def signup(user_data: UserSignup, response: Response, backend: Backend, user: OptionalUser):
    """Create a customer account and sign it in.

    Raises:
        303: Already signed in
        400: Weak password, duplicate email, or backend failure
    """
    if user is not None:
        raise redirect(HOME_PATH)

    try:
        session = await backend.auth.sign_up(
            user_data.email, user_data.password, full_name=user_data.full_name
        )
    except BackendError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        )

    set_session_cookie(response, session)
    return AuthResult(session=session, redirect_to=HOME_PATH)


@router.post("/login", response_model=AuthResult)
async def login(user_data: UserLogin, response: Response, backend: Backend, user: OptionalUser):
    """Sign in with email and password.

    Raises:
        303: Already signed in
        400: Invalid login credentials
    """
    if user is not None:
        raise redirect(HOME_PATH)

    try:
        session = await backend.auth.sign_in_with_password(user_data.email, user_data.password)
    except BackendError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        )

    set_session_cookie(response, session)
    return AuthResult(session=session, redirect_to=HOME_PATH)


@router.post("/logout", response_model=AuthResult)
async def logout(response: Response, backend: Backend, token: SessionToken):
    """Revoke the current session and clear the cookie.

    Raises:
        400: Backend failure while revoking the session
    """
    try:
        await backend.auth.sign_out(token)
    except BackendError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        )
    clear_session_cookie(response)
    return AuthResult(redirect_to=HOME_PATH)


@router.get("/me", response_model=HeaderView)
async def get_me(user: OptionalUser):
    """Header state for the current visitor."""
    return HeaderView.for_user(user)
