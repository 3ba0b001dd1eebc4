"""Public port exports for concrete adapter implementations."""

from .db_api import (
    AsyncSqlExecutor,
    Dialect,
    MySQLDialect,
    PostgresDialect,
    SQLiteDialect,
    SqlExecutor,
    dialect_for,
)

__all__ = [
    "SqlExecutor",
    "AsyncSqlExecutor",
    "Dialect",
    "SQLiteDialect",
    "PostgresDialect",
    "MySQLDialect",
    "dialect_for",
]
