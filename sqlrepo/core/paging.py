"""Sorting and paging descriptors passed through to SQL generation."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Iterator, List, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")

_PROPERTY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_$]*(\.[A-Za-z_][A-Za-z0-9_$]*)*$")


class Direction(str, Enum):
    """Sort direction."""

    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(cls, value: "Direction | str") -> "Direction":
        if isinstance(value, Direction):
            return value
        try:
            return cls(str(value).upper())
        except ValueError as exc:
            raise ValueError(f"Unsupported sort direction {value!r}.") from exc


@dataclass(frozen=True)
class Order:
    """One ordering expression.

    Attributes:
        property: Column name, optionally table-qualified (`u.name`).
        direction: `Direction.ASC` or `Direction.DESC`.
    """

    property: str
    direction: Direction = Direction.ASC

    def __post_init__(self) -> None:
        if not isinstance(self.property, str) or not _PROPERTY_RE.match(self.property):
            raise ValueError(f"Invalid sort property {self.property!r}.")
        object.__setattr__(self, "direction", Direction.parse(self.direction))

    @property
    def is_ascending(self) -> bool:
        return self.direction is Direction.ASC

    @classmethod
    def asc(cls, prop: str) -> "Order":
        return cls(prop, Direction.ASC)

    @classmethod
    def desc(cls, prop: str) -> "Order":
        return cls(prop, Direction.DESC)


@dataclass(frozen=True)
class Sort:
    """Ordered collection of `Order` expressions."""

    orders: Tuple[Order, ...] = ()

    def __post_init__(self) -> None:
        orders = tuple(self.orders)
        for item in orders:
            if not isinstance(item, Order):
                raise TypeError("Sort orders must be Order instances.")
        object.__setattr__(self, "orders", orders)

    @classmethod
    def by(cls, *properties: str, direction: Direction | str = Direction.ASC) -> "Sort":
        """Sort by one or more properties sharing one direction."""

        return cls(tuple(Order(prop, Direction.parse(direction)) for prop in properties))

    @classmethod
    def unsorted(cls) -> "Sort":
        return cls()

    def and_(self, other: "Sort") -> "Sort":
        """Return a new sort with `other` orders appended."""

        return Sort(self.orders + other.orders)

    def ascending(self) -> "Sort":
        return Sort(tuple(Order(o.property, Direction.ASC) for o in self.orders))

    def descending(self) -> "Sort":
        return Sort(tuple(Order(o.property, Direction.DESC) for o in self.orders))

    @property
    def is_sorted(self) -> bool:
        return bool(self.orders)

    def __iter__(self) -> Iterator[Order]:
        return iter(self.orders)

    def __bool__(self) -> bool:
        return self.is_sorted


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page window with optional sorting."""

    page: int
    size: int
    sort: Sort = field(default_factory=Sort)

    def __post_init__(self) -> None:
        if isinstance(self.page, bool) or not isinstance(self.page, int):
            raise TypeError("page must be an int.")
        if isinstance(self.size, bool) or not isinstance(self.size, int):
            raise TypeError("size must be an int.")
        if self.page < 0:
            raise ValueError("page must be >= 0.")
        if self.size < 1:
            raise ValueError("size must be >= 1.")
        if self.sort is None:
            object.__setattr__(self, "sort", Sort())

    @classmethod
    def of(cls, page: int, size: int, sort: Optional[Sort] = None) -> "PageRequest":
        return cls(page, size, sort or Sort())

    @property
    def offset(self) -> int:
        return self.page * self.size

    def next(self) -> "PageRequest":
        return PageRequest(self.page + 1, self.size, self.sort)

    def previous_or_first(self) -> "PageRequest":
        return PageRequest(max(self.page - 1, 0), self.size, self.sort)

    def first(self) -> "PageRequest":
        return PageRequest(0, self.size, self.sort)


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the total row count of the table."""

    content: List[T]
    pageable: PageRequest
    total: int

    @property
    def number(self) -> int:
        return self.pageable.page

    @property
    def size(self) -> int:
        return self.pageable.size

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def total_pages(self) -> int:
        return -(-self.total // self.pageable.size)

    @property
    def has_content(self) -> bool:
        return bool(self.content)

    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.number > 0

    @property
    def is_first(self) -> bool:
        return not self.has_previous

    @property
    def is_last(self) -> bool:
        return not self.has_next

    def __iter__(self) -> Iterator[T]:
        return iter(self.content)

    def __len__(self) -> int:
        return len(self.content)


SortInput = Optional[Sort | Sequence[Order]]


def as_sort(sort: SortInput) -> Sort:
    """Normalize `None`, a `Sort`, or a sequence of `Order` into `Sort`."""

    if sort is None:
        return Sort()
    if isinstance(sort, Sort):
        return sort
    if isinstance(sort, Order):
        return Sort((sort,))
    return Sort(tuple(sort))
