"""Public core API for table mapping, SQL generation, and repositories."""

from .errors import MappingError, RepositoryError, UnsupportedOperationError
from .hooks import RepositoryHooks, stamp_generated_key
from .mapping import (
    DataclassRowMapper,
    DataclassRowUnmapper,
    MissingRowUnmapper,
    Persistable,
    RowMapper,
    RowUnmapper,
)
from .paging import Direction, Order, Page, PageRequest, Sort
from .repository import Repository
from .repository_async import AsyncRepository
from .sql_generator import (
    SqlGenerator,
    get_default_sql_generator,
    set_default_sql_generator,
)
from .table import TableDescription

__all__ = [
    "AsyncRepository",
    "DataclassRowMapper",
    "DataclassRowUnmapper",
    "Direction",
    "MappingError",
    "MissingRowUnmapper",
    "Order",
    "Page",
    "PageRequest",
    "Persistable",
    "Repository",
    "RepositoryError",
    "RepositoryHooks",
    "RowMapper",
    "RowUnmapper",
    "Sort",
    "SqlGenerator",
    "TableDescription",
    "UnsupportedOperationError",
    "get_default_sql_generator",
    "set_default_sql_generator",
    "stamp_generated_key",
]
