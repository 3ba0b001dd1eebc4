"""Async executor implementation for the core async executor port."""

from __future__ import annotations

import inspect
from typing import Any, Callable, List, Optional, TypeVar

from loguru import logger

from ...core.types import QueryParams, RowMapping
from ._rows import first_value, param_count, row_to_mapping
from .dialects import Dialect

T = TypeVar("T")


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class AsyncSqlExecutor:
    """Async executor over async drivers, or sync DB-API connections.

    Driver methods may return awaitables or plain values; both are handled.
    Commit and rollback behave as in `SqlExecutor`.
    """

    def __init__(
        self,
        conn: Any,
        dialect: Optional[Dialect] = None,
        *,
        autocommit: bool = True,
    ):
        """Create async executor.

        Args:
            conn: Async (or sync) DB connection object.
            dialect: Concrete SQL dialect instance; ANSI when omitted.
            autocommit: Commit after every write statement.
        """

        self._closed = False
        self.conn = conn
        self.dialect = dialect if dialect is not None else Dialect()
        self.autocommit = autocommit

    async def _run(self, sql: str, params: QueryParams) -> Any:
        if self._closed:
            raise RuntimeError("connection is closed")
        logger.debug("Executing SQL: {} ({} params)", sql, param_count(params))
        cur = await _maybe_await(self.conn.cursor())
        try:
            if params is None:
                await _maybe_await(cur.execute(sql))
            else:
                await _maybe_await(cur.execute(sql, list(params)))
        except BaseException:
            await _close_cursor(cur)
            await self._rollback()
            raise
        return cur

    async def _commit(self) -> None:
        if not self.autocommit:
            return
        commit = getattr(self.conn, "commit", None)
        if callable(commit):
            await _maybe_await(commit())

    async def _rollback(self) -> None:
        # Only the statement that just failed is pending under autocommit.
        if not self.autocommit:
            return
        rollback = getattr(self.conn, "rollback", None)
        if callable(rollback):
            await _maybe_await(rollback())

    async def execute(self, sql: str, params: QueryParams = None) -> int:
        """Execute a write statement and return the affected row count."""

        cur = await self._run(sql, params)
        try:
            rowcount = getattr(cur, "rowcount", -1)
        finally:
            await _close_cursor(cur)
        await self._commit()
        return rowcount

    async def execute_returning_key(
        self, sql: str, params: QueryParams, id_column: str
    ) -> Any:
        """Execute an insert and return the key generated for `id_column`."""

        returning = self.dialect.returning_clause(id_column)
        cur = await self._run(sql + returning, params)
        try:
            if returning:
                rows = await _maybe_await(cur.fetchall())
                key = first_value(cur, rows[0]) if rows else None
            else:
                key = self.dialect.get_lastrowid(cur)
        except BaseException:
            await self._rollback()
            raise
        finally:
            await _close_cursor(cur)
        await self._commit()
        return key

    async def query(
        self,
        sql: str,
        params: QueryParams,
        row_mapper: Callable[[RowMapping], T],
    ) -> List[T]:
        """Execute a select and map every row through `row_mapper`."""

        cur = await self._run(sql, params)
        try:
            rows = await _maybe_await(cur.fetchall())
            return [row_mapper(row_to_mapping(cur, row)) for row in rows]
        finally:
            await _close_cursor(cur)

    async def query_scalar(self, sql: str, params: QueryParams = None) -> int:
        """Execute a select returning one number; `0` when no row comes back."""

        cur = await self._run(sql, params)
        try:
            row = await _maybe_await(cur.fetchone())
            if row is None:
                return 0
            value = first_value(cur, row)
        finally:
            await _close_cursor(cur)
        return int(value) if value is not None else 0

    async def aclose(self) -> None:
        """Async close underlying connection."""

        if self._closed:
            return
        self._closed = True
        close = getattr(self.conn, "close", None)
        if callable(close):
            await _maybe_await(close())

    def close(self) -> None:
        """Close underlying connection when its `close()` is synchronous.

        Raises:
            RuntimeError: If the driver closes asynchronously; use `aclose()`.
        """

        if self._closed:
            return
        close = getattr(self.conn, "close", None)
        if callable(close):
            close_method = getattr(type(self.conn), "close", None)
            if inspect.iscoroutinefunction(close_method):
                raise RuntimeError(
                    "connection closes asynchronously; await aclose() instead."
                )
            close()
        self._closed = True

    async def __aenter__(self) -> AsyncSqlExecutor:
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        await self.aclose()


async def _close_cursor(cur: Any) -> None:
    close = getattr(cur, "close", None)
    if callable(close):
        await _maybe_await(close())
