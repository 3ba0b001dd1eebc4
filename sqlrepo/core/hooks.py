"""Injectable create/update callbacks for repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from .types import ColumnMap

T = TypeVar("T")

PreCreate = Callable[[ColumnMap, Any], ColumnMap]
PostCreate = Callable[[Any, Optional[Any]], Any]
PreUpdate = Callable[[Any, ColumnMap], ColumnMap]
PostUpdate = Callable[[Any], Any]


def _keep_columns(columns: ColumnMap, entity: Any) -> ColumnMap:
    return columns


def _keep_entity_after_create(entity: Any, generated_key: Optional[Any]) -> Any:
    return entity


def _keep_update_columns(entity: Any, columns: ColumnMap) -> ColumnMap:
    return columns


def _keep_entity(entity: Any) -> Any:
    return entity


@dataclass(frozen=True)
class RepositoryHooks(Generic[T]):
    """Callbacks run around inserts and updates.

    Attributes:
        pre_create: `(columns, entity) -> columns` before an insert is built.
        post_create: `(entity, generated_key) -> entity` after the insert.
            `generated_key` is `None` for manually assigned keys.
        pre_update: `(entity, columns) -> columns` before an update is built.
        post_update: `entity -> entity` after the update.
    """

    pre_create: PreCreate = _keep_columns
    post_create: PostCreate = _keep_entity_after_create
    pre_update: PreUpdate = _keep_update_columns
    post_update: PostUpdate = _keep_entity


def stamp_generated_key(attribute: str = "id") -> PostCreate:
    """Build a `post_create` hook that stores the generated key on the entity.

    Entities created with a manually assigned key are returned untouched.
    """

    def post_create(entity: Any, generated_key: Optional[Any]) -> Any:
        if generated_key is not None:
            setattr(entity, attribute, generated_key)
        return entity

    return post_create
