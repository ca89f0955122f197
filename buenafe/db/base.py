"""
Record store adapter — one query interface over two relational backends.

Callers always write SQL with `?` positional placeholders and receive rows
keyed by canonical field names.  Each concrete store decides how to talk to
its backend; nothing outside this package branches on the backend type.

Every statement runs in its own implicit transaction.  Driver errors are
re-raised as StoreError; there are no retries.
"""
from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Optional, Sequence

from sqlalchemy.engine import CursorResult
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from buenafe.errors import StoreError
from buenafe.models.models import OPTIONAL_COLUMNS, PLAYERS_TABLE

logger = logging.getLogger(__name__)

Row = dict[str, Any]


@dataclass(frozen=True)
class ExecuteResult:
    """Outcome of a write statement."""
    inserted_id: Optional[int]   # None unless the statement was an INSERT
    rowcount:    int = 0


def is_insert(sql: str) -> bool:
    return sql.lstrip().lower().startswith("insert")


class RecordStore(ABC):
    """
    Uniform execute / query_all / query_one over the `players` relation.

    The schema is bootstrapped lazily on first use (and may be forced early
    with `ensure_schema()` at startup); it runs at most once per instance.
    """

    backend: str = ""

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine       = engine
        self._schema_ready = False
        self._schema_lock  = asyncio.Lock()

    # ── Public API ────────────────────────────────────────────────────────────

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> ExecuteResult:
        await self.ensure_schema()
        insert = is_insert(sql)
        statement = self._prepare(sql, returning=insert)
        async with self._connection() as conn:
            result = await self._dispatch(conn, statement, params)
            inserted_id = self._inserted_id(result) if insert else None
            return ExecuteResult(inserted_id=inserted_id, rowcount=max(result.rowcount, 0))

    async def query_all(self, sql: str, params: Sequence[Any] = ()) -> list[Row]:
        await self.ensure_schema()
        statement = self._prepare(sql, returning=False)
        async with self._connection() as conn:
            result = await self._dispatch(conn, statement, params)
            return [self._convert(dict(row._mapping)) for row in result]

    async def query_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[Row]:
        await self.ensure_schema()
        statement = self._prepare(sql, returning=False)
        async with self._connection() as conn:
            result = await self._dispatch(conn, statement, params)
            row = result.first()
            return self._convert(dict(row._mapping)) if row is not None else None

    async def ensure_schema(self) -> None:
        """Create the players table and apply additive column migrations."""
        if self._schema_ready:
            return
        async with self._schema_lock:
            if self._schema_ready:
                return
            async with self._connection() as conn:
                await conn.exec_driver_sql(self.create_table_sql)
            for column in OPTIONAL_COLUMNS:
                await self._add_column(column)
            self._schema_ready = True
            logger.info("📦 Tabla %s lista (%s)", PLAYERS_TABLE, self.backend)

    async def dispose(self) -> None:
        await self._engine.dispose()

    # ── Backend hooks ─────────────────────────────────────────────────────────

    @property
    @abstractmethod
    def create_table_sql(self) -> str:
        """Idempotent CREATE TABLE for the players relation."""

    @abstractmethod
    def _add_column_sql(self, column: str) -> str:
        ...

    @abstractmethod
    def _inserted_id(self, result: CursorResult) -> int:
        ...

    def _prepare(self, sql: str, returning: bool) -> str:
        """Translate `?` SQL into the backend's dialect."""
        return sql

    def _convert(self, row: Row) -> Row:
        """Map a raw backend row onto canonical field names."""
        return row

    def _is_duplicate_column(self, exc: DBAPIError) -> bool:
        return False

    # ── Internals ─────────────────────────────────────────────────────────────

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[AsyncConnection]:
        try:
            async with self._engine.begin() as conn:
                yield conn
        except (SQLAlchemyError, OSError) as exc:
            raise StoreError(f"{self.backend}: {exc}") from exc

    @staticmethod
    async def _dispatch(
        conn: AsyncConnection,
        sql: str,
        params: Sequence[Any],
    ) -> CursorResult:
        if params:
            return await conn.exec_driver_sql(sql, tuple(params))
        return await conn.exec_driver_sql(sql)

    async def _add_column(self, column: str) -> None:
        try:
            async with self._engine.begin() as conn:
                await conn.exec_driver_sql(self._add_column_sql(column))
        except (SQLAlchemyError, OSError) as exc:
            if isinstance(exc, DBAPIError) and self._is_duplicate_column(exc):
                logger.debug("Columna %s ya existe", column)
                return
            raise StoreError(f"{self.backend}: {exc}") from exc
