"""Async repository mirroring `Repository` over an async SQL executor."""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, TypeVar

from loguru import logger

from .contracts import AsyncSqlExecutorPort
from .paging import Page, PageRequest, SortInput, as_sort
from .repository_core import RepositoryCore

T = TypeVar("T")


class AsyncRepository(RepositoryCore[T]):
    """Async CRUD and paging repository bound to one table."""

    executor: AsyncSqlExecutorPort

    async def count(self) -> int:
        return int(await self.executor.query_scalar(self.sql.count(self.table)))

    async def exists(self, id_value: Any) -> bool:
        count = await self.executor.query_scalar(
            self.sql.count_by_id(self.table), [id_value]
        )
        return count > 0

    async def find_one(self, id_value: Any) -> Optional[T]:
        rows = await self.executor.query(
            self.sql.select_by_id(self.table), [id_value], self._map_row
        )
        return rows[0] if rows else None

    async def find_all(self, sort: SortInput = None) -> List[T]:
        sql = self.sql.select_all(self.table, sort=as_sort(sort))
        entities = await self.executor.query(sql, None, self._map_row)
        logger.trace("Mapped {} rows from {}", len(entities), self.table.name)
        return entities

    async def find_all_by_id(self, ids: Iterable[Any]) -> List[T]:
        statement = self._plan_select_by_ids(ids)
        if statement is None:
            return []
        return await self.executor.query(statement.sql, statement.params, self._map_row)

    async def find_page(self, page: PageRequest) -> Page[T]:
        sql = self.sql.select_all(self.table, page=page)
        content = await self.executor.query(sql, None, self._map_row)
        return Page(content=content, pageable=page, total=await self.count())

    async def save(self, entity: T) -> T:
        if entity.is_new():  # type: ignore[attr-defined]
            return await self.create(entity)
        return await self.update(entity)

    async def save_all(self, entities: Iterable[T]) -> List[T]:
        saved: List[T] = []
        for entity in entities:
            saved.append(await self.save(entity))
        return saved

    async def create(self, entity: T) -> T:
        statement = self._plan_insert(entity)
        if statement.returns_key:
            key = await self.executor.execute_returning_key(
                statement.sql, statement.params, self.table.id_column
            )
            return self.hooks.post_create(entity, key)

        await self.executor.execute(statement.sql, statement.params)
        return self.hooks.post_create(entity, None)

    async def update(self, entity: T) -> T:
        statement = self._plan_update(entity)
        await self.executor.execute(statement.sql, statement.params)
        return self.hooks.post_update(entity)

    async def delete_by_id(self, id_value: Any) -> int:
        return await self.executor.execute(self.sql.delete_by_id(self.table), [id_value])

    async def delete(self, entity: T) -> int:
        return await self.delete_by_id(self._entity_id(entity))

    async def delete_many(self, entities: Iterable[T]) -> int:
        deleted = 0
        for entity in entities:
            deleted += await self.delete(entity)
        return deleted

    async def delete_all(self) -> int:
        return await self.executor.execute(self.sql.delete_all(self.table))
