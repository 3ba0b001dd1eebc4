"""Core port contracts used by executors, generators, and repositories."""

from __future__ import annotations

from typing import Any, Callable, List, Mapping, Optional, Protocol, TypeVar

from .paging import PageRequest, Sort
from .table import TableDescription
from .types import QueryParams, RowMapping

T = TypeVar("T")


class DialectPort(Protocol):
    """Dialect behavior required by SQL generation and key retrieval."""

    name: str
    paramstyle: str
    supports_returning: bool

    def q(self, ident: str) -> str: ...

    def placeholder(self) -> str: ...

    def paging_clause(self, offset: int, limit: int) -> str: ...

    def default_values_clause(self) -> str: ...

    def returning_clause(self, pk_name: str) -> str: ...

    def get_lastrowid(self, cursor: Any) -> Optional[int]: ...


class SqlExecutorPort(Protocol):
    """Statement execution behavior required by `Repository`."""

    dialect: DialectPort

    def execute(self, sql: str, params: QueryParams = None) -> int: ...

    def execute_returning_key(
        self, sql: str, params: QueryParams, id_column: str
    ) -> Any: ...

    def query(
        self,
        sql: str,
        params: QueryParams,
        row_mapper: Callable[[RowMapping], T],
    ) -> List[T]: ...

    def query_scalar(self, sql: str, params: QueryParams = None) -> int: ...


class AsyncSqlExecutorPort(Protocol):
    """Statement execution behavior required by `AsyncRepository`."""

    dialect: DialectPort

    async def execute(self, sql: str, params: QueryParams = None) -> int: ...

    async def execute_returning_key(
        self, sql: str, params: QueryParams, id_column: str
    ) -> Any: ...

    async def query(
        self,
        sql: str,
        params: QueryParams,
        row_mapper: Callable[[RowMapping], T],
    ) -> List[T]: ...

    async def query_scalar(self, sql: str, params: QueryParams = None) -> int: ...


class SqlGeneratorPort(Protocol):
    """SQL text generation keyed by table metadata."""

    def count(self, table: TableDescription) -> str: ...

    def count_by_id(self, table: TableDescription) -> str: ...

    def select_all(
        self,
        table: TableDescription,
        sort: Optional[Sort] = None,
        page: Optional[PageRequest] = None,
    ) -> str: ...

    def select_by_id(self, table: TableDescription) -> str: ...

    def select_by_ids(self, table: TableDescription, count: int) -> str: ...

    def create(self, table: TableDescription, columns: Mapping[str, Any]) -> str: ...

    def update(self, table: TableDescription, columns: Mapping[str, Any]) -> str: ...

    def delete_by_id(self, table: TableDescription) -> str: ...

    def delete_all(self, table: TableDescription) -> str: ...
