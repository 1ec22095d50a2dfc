"""Data-access client over the relational backend."""

from laterooms.backend.auth import AuthClient
from laterooms.backend.client import BackendClient
from laterooms.backend.errors import AuthError, BackendError
from laterooms.backend.query import TableQuery

__all__ = [
    "AuthClient",
    "AuthError",
    "BackendClient",
    "BackendError",
    "TableQuery",
]
