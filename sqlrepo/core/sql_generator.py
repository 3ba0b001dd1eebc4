"""SQL statement generation for repository operations.

This module centralizes SQL string compilation from table metadata. It keeps
`Repository` focused on orchestration while letting callers substitute a
dialect-specific generator per repository or process-wide.
"""

from __future__ import annotations

import threading
from typing import Any, Mapping, Optional

from .contracts import DialectPort, SqlGeneratorPort
from .paging import PageRequest, Sort
from .table import TableDescription


class SqlGenerator:
    """Stateless generator producing positional-placeholder SQL.

    Every placeholder in the returned text corresponds, in order, to one value
    the caller binds: column values in mapping iteration order, then the
    identity value for statements filtered by id.
    """

    def __init__(self, dialect: Optional[DialectPort] = None):
        """Create generator.

        Args:
            dialect: Quoting, placeholder and paging rules. Defaults to the
                ANSI dialect (bare identifiers, `?`, `OFFSET .. FETCH`).
        """

        if dialect is None:
            from ..ports.db_api.dialects import Dialect

            dialect = Dialect()
        self.dialect = dialect

    def count(self, table: TableDescription) -> str:
        return f"SELECT COUNT(*) {self._from(table)}"

    def count_by_id(self, table: TableDescription) -> str:
        return (
            f"SELECT COUNT({self.dialect.q(table.id_column)}) "
            f"{self._from(table)}{self._where_id(table)}"
        )

    def select_all(
        self,
        table: TableDescription,
        sort: Optional[Sort] = None,
        page: Optional[PageRequest] = None,
    ) -> str:
        """Compile a full-table select with optional ordering and paging.

        When `page` carries its own sort and `sort` is not given, the page's
        sort is used.
        """

        sql = f"SELECT {table.select_clause} {self._from(table)}"
        if sort is None and page is not None:
            sort = page.sort
        sql += self.order_by(sort)
        if page is not None:
            sql += self.dialect.paging_clause(page.offset, page.size)
        return sql

    def select_by_id(self, table: TableDescription) -> str:
        return f"SELECT {table.select_clause} {self._from(table)}{self._where_id(table)}"

    def select_by_ids(self, table: TableDescription, count: int) -> str:
        """Compile a select for `count` identity values bound in order."""

        if count < 1:
            raise ValueError("select_by_ids() requires at least one id.")
        placeholders = ", ".join(self.dialect.placeholder() for _ in range(count))
        return (
            f"SELECT {table.select_clause} {self._from(table)} "
            f"WHERE {self.dialect.q(table.id_column)} IN ({placeholders})"
        )

    def create(self, table: TableDescription, columns: Mapping[str, Any]) -> str:
        """Compile an insert for exactly the given columns, in order."""

        table_sql = self.dialect.q(table.name)
        if not columns:
            return f"INSERT INTO {table_sql}{self.dialect.default_values_clause()}"
        column_sql = ", ".join(self.dialect.q(name) for name in columns)
        placeholders = ", ".join(self.dialect.placeholder() for _ in columns)
        return f"INSERT INTO {table_sql} ({column_sql}) VALUES ({placeholders})"

    def update(self, table: TableDescription, columns: Mapping[str, Any]) -> str:
        """Compile an update setting `columns`; the id placeholder comes last.

        Raises:
            ValueError: If there is nothing to set.
        """

        if not columns:
            raise ValueError(
                f"Cannot UPDATE {table.name!r} with no columns besides the identity."
            )
        set_clause = ", ".join(
            f"{self.dialect.q(name)} = {self.dialect.placeholder()}" for name in columns
        )
        return f"UPDATE {self.dialect.q(table.name)} SET {set_clause}{self._where_id(table)}"

    def delete_by_id(self, table: TableDescription) -> str:
        return f"DELETE FROM {self.dialect.q(table.name)}{self._where_id(table)}"

    def delete_all(self, table: TableDescription) -> str:
        return f"DELETE FROM {self.dialect.q(table.name)}"

    def order_by(self, sort: Optional[Sort]) -> str:
        """Compile `ORDER BY` clause, or an empty string when unsorted."""

        if not sort:
            return ""
        ordered_cols = ", ".join(
            f"{self.dialect.q(order.property)} {order.direction.value}" for order in sort
        )
        return f" ORDER BY {ordered_cols}"

    def _from(self, table: TableDescription) -> str:
        if table.from_clause is not None:
            return f"FROM {table.from_clause}"
        return f"FROM {self.dialect.q(table.name)}"

    def _where_id(self, table: TableDescription) -> str:
        return f" WHERE {self.dialect.q(table.id_column)} = {self.dialect.placeholder()}"


_default_lock = threading.Lock()
_default_generator: Optional[SqlGeneratorPort] = None


def set_default_sql_generator(generator: Optional[SqlGeneratorPort]) -> None:
    """Install the generator used by repositories created without one.

    Pass `None` to restore per-executor defaults.
    """

    global _default_generator
    with _default_lock:
        _default_generator = generator


def get_default_sql_generator() -> Optional[SqlGeneratorPort]:
    """Return the process-wide generator, or `None` when not installed."""

    return _default_generator


def resolve_sql_generator(
    generator: Optional[SqlGeneratorPort], dialect: Optional[DialectPort]
) -> SqlGeneratorPort:
    """Pick explicit generator, then process-wide default, then one for `dialect`."""

    if generator is not None:
        return generator
    default = get_default_sql_generator()
    if default is not None:
        return default
    return SqlGenerator(dialect)
