"""Table-bound repositories with pluggable SQL generation.

Logging goes through loguru and is disabled for this package by default;
call `logger.enable("sqlrepo")` to see executed statements.
"""

from loguru import logger

from .core import (
    AsyncRepository,
    DataclassRowMapper,
    DataclassRowUnmapper,
    Direction,
    MappingError,
    MissingRowUnmapper,
    Order,
    Page,
    PageRequest,
    Persistable,
    Repository,
    RepositoryError,
    RepositoryHooks,
    RowMapper,
    RowUnmapper,
    Sort,
    SqlGenerator,
    TableDescription,
    UnsupportedOperationError,
    get_default_sql_generator,
    set_default_sql_generator,
    stamp_generated_key,
)
from .ports import (
    AsyncSqlExecutor,
    Dialect,
    MySQLDialect,
    PostgresDialect,
    SQLiteDialect,
    SqlExecutor,
    dialect_for,
)

logger.disable("sqlrepo")

__all__ = [
    "AsyncRepository",
    "AsyncSqlExecutor",
    "DataclassRowMapper",
    "DataclassRowUnmapper",
    "Dialect",
    "Direction",
    "MappingError",
    "MissingRowUnmapper",
    "MySQLDialect",
    "Order",
    "Page",
    "PageRequest",
    "Persistable",
    "PostgresDialect",
    "Repository",
    "RepositoryError",
    "RepositoryHooks",
    "RowMapper",
    "RowUnmapper",
    "SQLiteDialect",
    "Sort",
    "SqlExecutor",
    "SqlGenerator",
    "TableDescription",
    "UnsupportedOperationError",
    "dialect_for",
    "get_default_sql_generator",
    "set_default_sql_generator",
    "stamp_generated_key",
]
