"""Chainable table query builder.

Mirrors the small subset of a hosted-Postgres REST client that the pages use::

    rows = await (
        backend.table("room_listings")
        .select("*", "hotel_name:hotels.name")
        .join("hotels")
        .eq("hotels.partner_id", partner_id)
        .order("created_at", ascending=False)
        .execute()
    )

Joins infer their ON clause from foreign keys. Filter and column references
are either bare column names of the base table or ``table.column``.
"""

import operator
from typing import Any, Callable, Mapping

from sqlalchemy import ColumnElement, Table, func, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from laterooms.backend.errors import NO_SINGLE_ROW_MESSAGE, BackendError


class TableQuery:
    """A query against one table or view, built by chaining and run by a terminal call."""

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        table: Table,
        tables: Mapping[str, Table],
        read_only: bool = False,
    ):
        self._session_maker = session_maker
        self._table = table
        self._tables = tables
        self._read_only = read_only
        self._joins: list[tuple[Table, bool]] = []
        self._columns: list[str] = []
        self._filters: list[tuple[str, Callable[[Any, Any], Any], Any]] = []
        self._order: list[tuple[str, bool]] = []
        self._limit: int | None = None

    @property
    def name(self) -> str:
        return self._table.name

    # ------------------------------------------------------------------
    # Chaining
    # ------------------------------------------------------------------

    def select(self, *columns: str) -> "TableQuery":
        """Choose output columns; ``"*"`` is every base-table column.

        ``"alias:table.column"`` projects a joined column under ``alias``.
        """
        self._columns.extend(columns)
        return self

    def join(self, table_name: str, inner: bool = True) -> "TableQuery":
        self._joins.append((self._lookup_table(table_name), inner))
        return self

    def eq(self, column: str, value: Any) -> "TableQuery":
        self._filters.append((column, operator.eq, value))
        return self

    def gt(self, column: str, value: Any) -> "TableQuery":
        self._filters.append((column, operator.gt, value))
        return self

    def order(self, column: str, ascending: bool = True) -> "TableQuery":
        self._order.append((column, ascending))
        return self

    def limit(self, count: int) -> "TableQuery":
        self._limit = count
        return self

    # ------------------------------------------------------------------
    # Statement building
    # ------------------------------------------------------------------

    def _lookup_table(self, name: str) -> Table:
        table = self._tables.get(name)
        if table is None:
            raise BackendError(f'relation "{name}" does not exist', code="42P01")
        return table

    def _resolve(self, ref: str) -> ColumnElement[Any]:
        if "." in ref:
            table_name, column_name = ref.split(".", 1)
            if table_name != self._table.name and table_name not in {
                t.name for t, _ in self._joins
            }:
                raise BackendError(
                    f'missing FROM-clause entry for table "{table_name}"', code="42P01"
                )
            table = self._lookup_table(table_name)
        else:
            table, column_name = self._table, ref

        if column_name not in table.c:
            raise BackendError(f'column {table.name}.{column_name} does not exist', code="42703")
        return table.c[column_name]

    def _from_clause(self):
        from_clause = self._table
        for table, inner in self._joins:
            from_clause = from_clause.join(table, isouter=not inner)
        return from_clause

    def _projection(self) -> list[ColumnElement[Any]]:
        refs = self._columns or ["*"]
        columns: list[ColumnElement[Any]] = []
        for ref in refs:
            if ref == "*":
                columns.extend(self._table.c)
                continue
            alias, _, target = ref.rpartition(":")
            column = self._resolve(target)
            columns.append(column.label(alias or column.name))
        return columns

    def _conditions(self) -> list[ColumnElement[bool]]:
        return [op(self._resolve(ref), value) for ref, op, value in self._filters]

    def build_select(self):
        stmt = select(*self._projection()).select_from(self._from_clause())
        if self._filters:
            stmt = stmt.where(*self._conditions())
        for ref, ascending in self._order:
            column = self._resolve(ref)
            stmt = stmt.order_by(column.asc() if ascending else column.desc())
        if self._limit is not None:
            stmt = stmt.limit(self._limit)
        return stmt

    def build_count(self):
        stmt = select(func.count()).select_from(self._from_clause())
        if self._filters:
            stmt = stmt.where(*self._conditions())
        return stmt

    def _ensure_writable(self, operation: str) -> None:
        if self._read_only:
            raise BackendError(
                f'cannot {operation} view "{self._table.name}"', code="55000"
            )
        if self._joins:
            raise BackendError(f"{operation} does not support joined tables")

    # ------------------------------------------------------------------
    # Terminal calls
    # ------------------------------------------------------------------

    async def execute(self) -> list[dict[str, Any]]:
        """Run the select and return rows as plain dicts."""
        stmt = self.build_select()
        async with self._session_maker() as session:
            try:
                result = await session.execute(stmt)
            except SQLAlchemyError as e:
                raise BackendError.from_exc(e) from e
            return [dict(row) for row in result.mappings().all()]

    async def single(self) -> dict[str, Any]:
        """Return exactly one row; zero or several rows is an error."""
        if self._limit is None:
            self._limit = 2
        rows = await self.execute()
        if len(rows) != 1:
            raise BackendError(NO_SINGLE_ROW_MESSAGE, code="PGRST116")
        return rows[0]

    async def count(self) -> int:
        stmt = self.build_count()
        async with self._session_maker() as session:
            try:
                result = await session.execute(stmt)
            except SQLAlchemyError as e:
                raise BackendError.from_exc(e) from e
            return result.scalar_one()

    async def insert(self, values: dict[str, Any]) -> dict[str, Any]:
        """Insert one row and return it as stored."""
        self._ensure_writable("insert into")
        stmt = insert(self._table).values(**values).returning(*self._table.c)
        async with self._session_maker() as session:
            try:
                result = await session.execute(stmt)
                row = result.mappings().one()
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise BackendError.from_exc(e) from e
            return dict(row)

    async def update(self, values: dict[str, Any]) -> list[dict[str, Any]]:
        """Update the rows matched by the filters and return them."""
        self._ensure_writable("update")
        if not self._filters:
            raise BackendError("UPDATE requires a WHERE clause", code="21000")
        stmt = (
            update(self._table)
            .where(*self._conditions())
            .values(**values)
            .returning(*self._table.c)
        )
        async with self._session_maker() as session:
            try:
                result = await session.execute(stmt)
                rows = [dict(row) for row in result.mappings().all()]
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise BackendError.from_exc(e) from e
            return rows
