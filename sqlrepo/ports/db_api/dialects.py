"""Concrete SQL dialect implementations for DB-API executors."""

from __future__ import annotations

from typing import Any, Dict, Optional, Type


class Dialect:
    """Base ANSI dialect: bare identifiers, `?` placeholders, `FETCH` paging."""

    name: str = "ansi"
    paramstyle: str = "qmark"
    quote_char: str = ""
    supports_returning: bool = False

    def q(self, ident: str) -> str:
        """Quote SQL identifier, part by part for qualified names."""

        if not self.quote_char:
            return ident
        return ".".join(
            f"{self.quote_char}{part}{self.quote_char}" for part in ident.split(".")
        )

    def placeholder(self) -> str:
        """Return the positional parameter placeholder for current param style."""

        if self.paramstyle == "qmark":
            return "?"
        if self.paramstyle == "format":
            return "%s"
        raise ValueError(f"Unsupported positional paramstyle: {self.paramstyle}")

    def paging_clause(self, offset: int, limit: int) -> str:
        """Return SQL fragment selecting `limit` rows starting at `offset`."""

        return f" OFFSET {offset} ROWS FETCH NEXT {limit} ROWS ONLY"

    def default_values_clause(self) -> str:
        """Return the insert tail used when no column is written."""

        return " DEFAULT VALUES"

    def returning_clause(self, pk_name: str) -> str:
        """Return `RETURNING` clause when dialect supports it."""

        if self.supports_returning:
            return f" RETURNING {self.q(pk_name)}"
        return ""

    def get_lastrowid(self, cursor: Any) -> Optional[int]:
        """Extract `lastrowid` from DB-API cursor when available."""

        return getattr(cursor, "lastrowid", None)


class _LimitOffsetDialect(Dialect):
    def paging_clause(self, offset: int, limit: int) -> str:
        return f" LIMIT {limit} OFFSET {offset}"


class SQLiteDialect(_LimitOffsetDialect):
    """SQLite dialect (`?` parameters, supports `RETURNING`)."""

    name = "sqlite"
    paramstyle = "qmark"
    quote_char = '"'
    supports_returning = True


class PostgresDialect(_LimitOffsetDialect):
    """PostgreSQL dialect (`%s` positional parameters)."""

    name = "postgres"
    paramstyle = "format"
    quote_char = '"'
    supports_returning = True


class MySQLDialect(_LimitOffsetDialect):
    """MySQL dialect (`%s` positional parameters, no `RETURNING`)."""

    name = "mysql"
    paramstyle = "format"
    quote_char = "`"
    supports_returning = False

    def default_values_clause(self) -> str:
        return " () VALUES ()"


_DIALECTS: Dict[str, Type[Dialect]] = {
    "ansi": Dialect,
    "sqlite": SQLiteDialect,
    "postgres": PostgresDialect,
    "postgresql": PostgresDialect,
    "mysql": MySQLDialect,
}


def dialect_for(name: str) -> Dialect:
    """Return a dialect instance by name (`ansi`, `sqlite`, `postgres`, `mysql`)."""

    try:
        return _DIALECTS[name.lower()]()
    except KeyError as exc:
        raise ValueError(
            f"Unknown dialect {name!r}. Use one of: {', '.join(sorted(_DIALECTS))}."
        ) from exc
