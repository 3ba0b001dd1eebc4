"""Statement planning shared by `Repository` and `AsyncRepository`.

Nothing here touches the executor: each helper turns an entity or id into the
SQL text and the positional parameters to bind, so the sync and async
repositories emit identical statements.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Iterable, List, Optional, TypeVar

from loguru import logger

from .contracts import SqlGeneratorPort
from .errors import MappingError
from .hooks import RepositoryHooks
from .mapping import RowMapperInput, RowUnmapperInput, as_row_mapper, as_row_unmapper
from .sql_generator import resolve_sql_generator
from .table import TableDescription, as_table_description
from .types import ColumnMap, PositionalParams, RowMapping

T = TypeVar("T")


@dataclass(frozen=True)
class Statement:
    """SQL text and the positional parameters bound to it, in order."""

    sql: str
    params: PositionalParams


@dataclass(frozen=True)
class InsertStatement(Statement):
    """Insert statement; `returns_key` is set when the database assigns the id."""

    returns_key: bool = False


class RepositoryCore(Generic[T]):
    """Collaborator wiring and statement planning for one table."""

    def __init__(
        self,
        executor: Any,
        row_mapper: RowMapperInput[T],
        table: TableDescription | str,
        *,
        row_unmapper: Optional[RowUnmapperInput[T]] = None,
        sql_generator: Optional[SqlGeneratorPort] = None,
        hooks: Optional[RepositoryHooks[T]] = None,
    ):
        """Create repository for one table.

        Args:
            executor: Statement executor; its `dialect` drives the default
                generator's quoting and placeholders.
            row_mapper: `RowMapper` or `row -> entity` callable.
            table: Table description, or a table name with identity `id`.
            row_unmapper: `RowUnmapper` or `entity -> columns` callable.
                Omit for a read-only repository.
            sql_generator: Generator override. Falls back to the process-wide
                default, then to `SqlGenerator(executor.dialect)`.
            hooks: Create/update callbacks; identity callbacks by default.
        """

        if executor is None:
            raise TypeError("executor is required.")
        self.executor = executor
        self.table = as_table_description(table)
        self.row_mapper = as_row_mapper(row_mapper)
        self.row_unmapper = as_row_unmapper(row_unmapper)
        self.sql = resolve_sql_generator(sql_generator, getattr(executor, "dialect", None))
        self.hooks: RepositoryHooks[T] = hooks if hooks is not None else RepositoryHooks()

    def _columns(self, entity: T) -> ColumnMap:
        return dict(self.row_unmapper.map_columns(entity))

    def _map_row(self, row: RowMapping) -> T:
        try:
            return self.row_mapper.map_row(row)
        except MappingError:
            raise
        except (TypeError, ValueError, KeyError, AttributeError) as exc:
            raise MappingError(
                f"Cannot map row from {self.table.name!r}: {exc}", row=row
            ) from exc

    def _plan_insert(self, entity: T) -> InsertStatement:
        columns = self.hooks.pre_create(self._columns(entity), entity)
        id_column = self.table.id_column
        if getattr(entity, "id", None) is None:
            columns.pop(id_column, None)
            logger.debug("Creating {} row with generated key", self.table.name)
            return InsertStatement(
                self.sql.create(self.table, columns),
                list(columns.values()),
                returns_key=True,
            )

        logger.debug("Creating {} row with assigned key", self.table.name)
        return InsertStatement(self.sql.create(self.table, columns), list(columns.values()))

    def _plan_update(self, entity: T) -> Statement:
        columns = self.hooks.pre_update(entity, self._columns(entity))
        id_column = self.table.id_column
        if id_column not in columns:
            raise ValueError(
                f"Column map of {type(entity).__name__} lacks identity column {id_column!r}."
            )
        id_value = columns.pop(id_column)
        sql = self.sql.update(self.table, columns)
        logger.debug("Updating {} row {!r}", self.table.name, id_value)
        return Statement(sql, [*columns.values(), id_value])

    def _plan_select_by_ids(self, ids: Iterable[Any]) -> Optional[Statement]:
        id_values: List[Any] = list(ids)
        if not id_values:
            return None
        return Statement(self.sql.select_by_ids(self.table, len(id_values)), id_values)

    def _entity_id(self, entity: T) -> Any:
        return getattr(entity, "id")
