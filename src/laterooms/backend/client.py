"""The shared backend client: auth plus table queries."""

from typing import Mapping

from sqlalchemy import Table
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from laterooms.backend.auth import AuthClient
from laterooms.backend.errors import BackendError
from laterooms.backend.query import TableQuery
import laterooms.models  # noqa: F401  (registers tables on Base.metadata)
from laterooms.core.database import Base
from laterooms.models.views import view_metadata


class BackendClient:
    """Single handle to the relational backend, built once per process."""

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        tables: Mapping[str, Table] | None = None,
        views: Mapping[str, Table] | None = None,
    ):
        self._session_maker = session_maker
        self._tables = dict(tables if tables is not None else Base.metadata.tables)
        self._views = dict(views if views is not None else view_metadata.tables)
        self._relations = {**self._tables, **self._views}
        self.auth = AuthClient(session_maker)

    def table(self, name: str) -> TableQuery:
        """Start a query against a table or read-only view.

        Raises:
            BackendError: Unknown relation name
        """
        if name in self._views:
            return TableQuery(
                self._session_maker, self._views[name], self._relations, read_only=True
            )
        if name in self._tables:
            return TableQuery(self._session_maker, self._tables[name], self._relations)
        raise BackendError(f'relation "{name}" does not exist', code="42P01")
