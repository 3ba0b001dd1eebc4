from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from sqlrepo import Dialect


@dataclass
class User:
    id: Optional[int] = None
    name: str = ""

    def is_new(self) -> bool:
        return self.id is None


@dataclass
class Tag:
    """Entity with a caller-assigned key and an explicit "new" flag."""

    id: Optional[str] = None
    label: str = ""
    persisted: bool = field(default=False, metadata={"transient": True})

    def is_new(self) -> bool:
        return not self.persisted


def tag_from_row(row: Any) -> Tag:
    return Tag(id=row["id"], label=row["label"], persisted=True)


class RecordingExecutor:
    """Executor double recording every call in order."""

    def __init__(
        self,
        *,
        rows: Optional[list[dict[str, Any]]] = None,
        scalar: int = 0,
        generated_key: Any = None,
        dialect: Optional[Dialect] = None,
        fail_on_execute: Optional[int] = None,
    ) -> None:
        self.dialect = dialect if dialect is not None else Dialect()
        self.rows = rows or []
        self.scalar = scalar
        self.generated_key = generated_key
        self.fail_on_execute = fail_on_execute
        self.calls: list[tuple[Any, ...]] = []
        self._execute_count = 0

    def execute(self, sql, params=None):  # noqa: ANN001,ANN201
        self._execute_count += 1
        self.calls.append(("execute", sql, None if params is None else list(params)))
        if self._execute_count == self.fail_on_execute:
            raise RuntimeError(f"execute #{self._execute_count} failed")
        return 1

    def execute_returning_key(self, sql, params, id_column):  # noqa: ANN001,ANN201
        self.calls.append(("execute_returning_key", sql, list(params), id_column))
        return self.generated_key

    def query(self, sql, params, row_mapper):  # noqa: ANN001,ANN201
        self.calls.append(("query", sql, None if params is None else list(params)))
        return [row_mapper(row) for row in self.rows]

    def query_scalar(self, sql, params=None):  # noqa: ANN001,ANN201
        self.calls.append(("query_scalar", sql, None if params is None else list(params)))
        return self.scalar

    def kinds(self) -> list[str]:
        return [call[0] for call in self.calls]


class AsyncRecordingExecutor(RecordingExecutor):
    async def execute(self, sql, params=None):  # noqa: ANN001,ANN201
        return RecordingExecutor.execute(self, sql, params)

    async def execute_returning_key(self, sql, params, id_column):  # noqa: ANN001,ANN201
        return RecordingExecutor.execute_returning_key(self, sql, params, id_column)

    async def query(self, sql, params, row_mapper):  # noqa: ANN001,ANN201
        return RecordingExecutor.query(self, sql, params, row_mapper)

    async def query_scalar(self, sql, params=None):  # noqa: ANN001,ANN201
        return RecordingExecutor.query_scalar(self, sql, params)
