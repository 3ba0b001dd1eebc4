"""Table metadata used by SQL generation and repository operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TableDescription:
    """Immutable description of the table a repository is bound to.

    Attributes:
        name: Table name.
        id_column: Identity column used by lookups, updates, and deletes.
        select_clause: Column list used by `SELECT` statements.
        from_clause: Source used by `SELECT` statements; defaults to `name`.
            Useful for views or joins that still expose `id_column`.
    """

    name: str
    id_column: str = "id"
    select_clause: str = "*"
    from_clause: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("Table name must be a non-empty string.")
        if not isinstance(self.id_column, str) or not self.id_column.strip():
            raise ValueError("Identity column must be a non-empty string.")
        if not isinstance(self.select_clause, str) or not self.select_clause.strip():
            raise ValueError("select_clause must be a non-empty string.")
        if self.from_clause is not None and (
            not isinstance(self.from_clause, str) or not self.from_clause.strip()
        ):
            raise ValueError("from_clause must be a non-empty string when provided.")


def as_table_description(table: TableDescription | str) -> TableDescription:
    """Normalize a table name or description into `TableDescription`."""

    if isinstance(table, TableDescription):
        return table
    if isinstance(table, str):
        return TableDescription(table)
    raise TypeError(
        f"table must be TableDescription or str, got {type(table).__name__}."
    )
