"""DB-API executor implementation for the core executor port."""

from __future__ import annotations

from typing import Any, Callable, List, Optional, TypeVar

from loguru import logger

from ...core.types import QueryParams, RowMapping
from ._rows import first_value, param_count, row_to_mapping
from .dialects import Dialect

T = TypeVar("T")


class SqlExecutor:
    """Thin DB-API wrapper running one statement per call.

    Every call opens a cursor, runs the statement, and closes the cursor.
    With `autocommit=True` each write is committed immediately and a failed
    statement is rolled back before its error propagates; otherwise the caller
    commits or rolls back on `conn`.
    """

    def __init__(
        self,
        conn: Any,
        dialect: Optional[Dialect] = None,
        *,
        autocommit: bool = True,
    ):
        """Create executor.

        Args:
            conn: DB-API connection object.
            dialect: Concrete SQL dialect instance; ANSI when omitted.
            autocommit: Commit after every write statement.
        """

        self._closed = False
        self.conn: Any | None = conn
        self.dialect = dialect if dialect is not None else Dialect()
        self.autocommit = autocommit

    def _require_open_connection(self) -> Any:
        if self._closed or self.conn is None:
            raise RuntimeError("connection is closed")
        return self.conn

    def _run(self, sql: str, params: QueryParams) -> Any:
        conn = self._require_open_connection()
        logger.debug("Executing SQL: {} ({} params)", sql, param_count(params))
        cur = conn.cursor()
        try:
            if params is None:
                cur.execute(sql)
            else:
                cur.execute(sql, list(params))
        except BaseException:
            _close_cursor(cur)
            self._rollback()
            raise
        return cur

    def _commit(self) -> None:
        if not self.autocommit:
            return
        commit = getattr(self.conn, "commit", None)
        if callable(commit):
            commit()

    def _rollback(self) -> None:
        # Only the statement that just failed is pending under autocommit.
        if not self.autocommit:
            return
        rollback = getattr(self.conn, "rollback", None)
        if callable(rollback):
            rollback()

    def execute(self, sql: str, params: QueryParams = None) -> int:
        """Execute a write statement and return the affected row count."""

        cur = self._run(sql, params)
        try:
            rowcount = getattr(cur, "rowcount", -1)
        finally:
            _close_cursor(cur)
        self._commit()
        return rowcount

    def execute_returning_key(
        self, sql: str, params: QueryParams, id_column: str
    ) -> Any:
        """Execute an insert and return the key generated for `id_column`.

        Uses the dialect `RETURNING` clause when supported and the cursor
        `lastrowid` otherwise. Returns `None` when the driver reports no key.
        """

        returning = self.dialect.returning_clause(id_column)
        cur = self._run(sql + returning, params)
        try:
            if returning:
                rows = cur.fetchall()
                key = first_value(cur, rows[0]) if rows else None
            else:
                key = self.dialect.get_lastrowid(cur)
        except BaseException:
            self._rollback()
            raise
        finally:
            _close_cursor(cur)
        self._commit()
        return key

    def query(
        self,
        sql: str,
        params: QueryParams,
        row_mapper: Callable[[RowMapping], T],
    ) -> List[T]:
        """Execute a select and map every row through `row_mapper`."""

        cur = self._run(sql, params)
        try:
            rows = cur.fetchall()
            return [row_mapper(row_to_mapping(cur, row)) for row in rows]
        finally:
            _close_cursor(cur)

    def query_scalar(self, sql: str, params: QueryParams = None) -> int:
        """Execute a select returning one number; `0` when no row comes back."""

        cur = self._run(sql, params)
        try:
            row = cur.fetchone()
            if row is None:
                return 0
            value = first_value(cur, row)
        finally:
            _close_cursor(cur)
        return int(value) if value is not None else 0

    def close(self) -> None:
        """Close underlying connection."""

        if self._closed:
            return
        conn = self.conn
        self._closed = True
        self.conn = None
        close = getattr(conn, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> SqlExecutor:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()


def _close_cursor(cur: Any) -> None:
    close = getattr(cur, "close", None)
    if callable(close):
        close()
