"""Entity and row conversion contracts with dataclass implementations."""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from typing import Any, Callable, Dict, Generic, Mapping, Protocol, Type, TypeVar

from .errors import UnsupportedOperationError
from .types import ColumnMap, RowMapping

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)
T_contra = TypeVar("T_contra", contravariant=True)


class Persistable(Protocol):
    """Entity shape required by the repository.

    `id` is `None` until the row exists, unless the caller assigns keys.
    `is_new()` decides between insert and update in `save()`.
    """

    id: Any

    def is_new(self) -> bool: ...


class RowMapper(Protocol[T_co]):
    """Convert one fetched row into an entity without touching the database."""

    def map_row(self, row: RowMapping) -> T_co: ...


class RowUnmapper(Protocol[T_contra]):
    """Convert an entity into the ordered columns to persist."""

    def map_columns(self, entity: T_contra) -> Mapping[str, Any]: ...


RowMapperInput = RowMapper[T] | Callable[[RowMapping], T]
RowUnmapperInput = RowUnmapper[T] | Callable[[T], Mapping[str, Any]]


class MissingRowUnmapper:
    """Unmapper for read-only repositories; every write is rejected."""

    def map_columns(self, entity: Any) -> Mapping[str, Any]:
        raise UnsupportedOperationError(
            "This repository is read-only: no RowUnmapper was configured, "
            f"cannot persist {type(entity).__name__}."
        )


class _CallableRowMapper(Generic[T]):
    def __init__(self, func: Callable[[RowMapping], T]):
        self._func = func

    def map_row(self, row: RowMapping) -> T:
        return self._func(row)


class _CallableRowUnmapper(Generic[T]):
    def __init__(self, func: Callable[[T], Mapping[str, Any]]):
        self._func = func

    def map_columns(self, entity: T) -> Mapping[str, Any]:
        return self._func(entity)


def as_row_mapper(mapper: RowMapperInput[T]) -> RowMapper[T]:
    """Accept a `RowMapper` object or a plain `row -> entity` callable."""

    if callable(getattr(mapper, "map_row", None)):
        return mapper  # type: ignore[return-value]
    if callable(mapper):
        return _CallableRowMapper(mapper)
    raise TypeError("row_mapper must define map_row() or be callable.")


def as_row_unmapper(unmapper: RowUnmapperInput[T] | None) -> RowUnmapper[T]:
    """Accept a `RowUnmapper`, a plain callable, or `None` (read-only)."""

    if unmapper is None:
        return MissingRowUnmapper()
    if callable(getattr(unmapper, "map_columns", None)):
        return unmapper  # type: ignore[return-value]
    if callable(unmapper):
        return _CallableRowUnmapper(unmapper)
    raise TypeError("row_unmapper must define map_columns() or be callable.")


def require_dataclass_model(cls: Type[Any]) -> None:
    """Validate that a class is a dataclass model."""

    if not isinstance(cls, type) or not is_dataclass(cls):
        name = getattr(cls, "__name__", type(cls).__name__)
        raise TypeError(f"{name} must be a dataclass.")


def _column_name(field: Any) -> str:
    column = field.metadata.get("column")
    if column is None:
        return field.name
    if not isinstance(column, str) or not column:
        raise TypeError(f"Field {field.name!r} metadata 'column' must be a non-empty string.")
    return column


def _persistent_fields(cls: Type[Any]) -> list[Any]:
    return [f for f in fields(cls) if not f.metadata.get("transient")]


class DataclassRowMapper(Generic[T]):
    """Build dataclass instances from rows.

    Columns are matched to fields by `metadata={"column": ...}` or by field
    name. Row columns without a matching field are ignored; fields without a
    matching column keep their dataclass default.
    """

    def __init__(self, model: Type[T]):
        require_dataclass_model(model)
        self.model = model
        self._field_by_column: Dict[str, str] = {
            _column_name(f): f.name for f in _persistent_fields(model) if f.init
        }

    def map_row(self, row: RowMapping) -> T:
        kwargs = {
            self._field_by_column[column]: value
            for column, value in row.items()
            if column in self._field_by_column
        }
        return self.model(**kwargs)


class DataclassRowUnmapper:
    """Produce the column map of a dataclass entity in field order.

    Fields marked `metadata={"transient": True}` are not persisted.
    """

    def map_columns(self, entity: Any) -> ColumnMap:
        if not is_dataclass(entity) or isinstance(entity, type):
            raise TypeError(f"{type(entity).__name__} must be a dataclass instance.")
        return {
            _column_name(f): getattr(entity, f.name)
            for f in _persistent_fields(type(entity))
        }
