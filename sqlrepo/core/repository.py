"""Repository implementation over a synchronous SQL executor."""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, TypeVar

from loguru import logger

from .contracts import SqlExecutorPort
from .paging import Page, PageRequest, SortInput, as_sort
from .repository_core import RepositoryCore

T = TypeVar("T")


class Repository(RepositoryCore[T]):
    """CRUD and paging repository bound to one table.

    Each call is one request/response against the executor, except
    `find_page()` (select + count) and the batch helpers (one round-trip per
    element). None of them opens a transaction: a failure part-way through a
    batch leaves earlier elements persisted.
    """

    executor: SqlExecutorPort

    def count(self) -> int:
        """Return the number of rows in the table."""

        return int(self.executor.query_scalar(self.sql.count(self.table)))

    def exists(self, id_value: Any) -> bool:
        """Return whether a row with the given identity exists."""

        return self.executor.query_scalar(self.sql.count_by_id(self.table), [id_value]) > 0

    def find_one(self, id_value: Any) -> Optional[T]:
        """Fetch one entity by identity; `None` when absent."""

        rows = self.executor.query(
            self.sql.select_by_id(self.table), [id_value], self._map_row
        )
        return rows[0] if rows else None

    def find_all(self, sort: SortInput = None) -> List[T]:
        """Fetch every row, optionally ordered."""

        sql = self.sql.select_all(self.table, sort=as_sort(sort))
        entities = self.executor.query(sql, None, self._map_row)
        logger.trace("Mapped {} rows from {}", len(entities), self.table.name)
        return entities

    def find_all_by_id(self, ids: Iterable[Any]) -> List[T]:
        """Fetch the rows whose identity is in `ids`; no query for empty input."""

        statement = self._plan_select_by_ids(ids)
        if statement is None:
            return []
        return self.executor.query(statement.sql, statement.params, self._map_row)

    def find_page(self, page: PageRequest) -> Page[T]:
        """Fetch one page of rows plus the table's total row count."""

        sql = self.sql.select_all(self.table, page=page)
        content = self.executor.query(sql, None, self._map_row)
        return Page(content=content, pageable=page, total=self.count())

    def save(self, entity: T) -> T:
        """Insert new entities and update existing ones, decided by `is_new()`."""

        if entity.is_new():  # type: ignore[attr-defined]
            return self.create(entity)
        return self.update(entity)

    def save_all(self, entities: Iterable[T]) -> List[T]:
        """Save entities one by one; the first failure stops the batch."""

        return [self.save(entity) for entity in entities]

    def create(self, entity: T) -> T:
        """Insert an entity and run the `post_create` hook.

        Without an id the identity column is left out of the insert and the
        database-generated key is passed to `post_create`.

        Raises:
            UnsupportedOperationError: If the repository is read-only.
        """

        statement = self._plan_insert(entity)
        if statement.returns_key:
            key = self.executor.execute_returning_key(
                statement.sql, statement.params, self.table.id_column
            )
            return self.hooks.post_create(entity, key)

        self.executor.execute(statement.sql, statement.params)
        return self.hooks.post_create(entity, None)

    def update(self, entity: T) -> T:
        """Update the row identified by the entity's identity column.

        Raises:
            UnsupportedOperationError: If the repository is read-only.
        """

        statement = self._plan_update(entity)
        self.executor.execute(statement.sql, statement.params)
        return self.hooks.post_update(entity)

    def delete_by_id(self, id_value: Any) -> int:
        """Delete one row by identity and return the affected row count."""

        return self.executor.execute(self.sql.delete_by_id(self.table), [id_value])

    def delete(self, entity: T) -> int:
        """Delete the row of one entity and return the affected row count."""

        return self.delete_by_id(self._entity_id(entity))

    def delete_many(self, entities: Iterable[T]) -> int:
        """Delete entities one by one; the first failure stops the batch."""

        deleted = 0
        for entity in entities:
            deleted += self.delete(entity)
        return deleted

    def delete_all(self) -> int:
        """Delete every row of the table."""

        return self.executor.execute(self.sql.delete_all(self.table))
