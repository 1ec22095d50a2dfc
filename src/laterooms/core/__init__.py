from laterooms.core.config import settings
from laterooms.core.database import Base, async_session_maker, engine
from laterooms.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)

__all__ = [
    "settings",
    "Base",
    "engine",
    "async_session_maker",
    "verify_password",
    "get_password_hash",
    "create_access_token",
    "decode_access_token",
]
