"""DB-API executor and dialect exports."""

from .async_executor import AsyncSqlExecutor
from .dialects import Dialect, MySQLDialect, PostgresDialect, SQLiteDialect, dialect_for
from .executor import SqlExecutor

__all__ = [
    "AsyncSqlExecutor",
    "SqlExecutor",
    "Dialect",
    "MySQLDialect",
    "PostgresDialect",
    "SQLiteDialect",
    "dialect_for",
]
