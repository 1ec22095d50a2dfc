"""Errors raised by the backend client."""

from sqlalchemy.exc import SQLAlchemyError

NO_SINGLE_ROW_MESSAGE = "JSON object requested, multiple (or no) rows returned"


class BackendError(Exception):
    """A failed backend call; ``message`` is the backend's raw text."""

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code

    @classmethod
    def from_exc(cls, exc: SQLAlchemyError) -> "BackendError":
        """Unwrap a SQLAlchemy error down to the driver's own message."""
        orig = getattr(exc, "orig", None)
        cause = getattr(orig, "__cause__", None)
        source = cause or orig or exc
        return cls(str(source), code=getattr(source, "sqlstate", None))


class AuthError(BackendError):
    """Authentication failure (bad credentials, duplicate sign up, ...)."""
