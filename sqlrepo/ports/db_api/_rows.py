"""Row normalization shared by the sync and async executors."""

from __future__ import annotations

from typing import Any, Mapping

from ...core.types import RowMapping


def row_to_mapping(cursor: Any, row: Any) -> RowMapping:
    """Normalize row object to mapping.

    Supports mapping rows directly and tuple/list rows via
    `cursor.description`.
    """

    if isinstance(row, Mapping):
        return row

    if isinstance(row, (tuple, list)):
        desc = getattr(cursor, "description", None)
        if not desc:
            raise TypeError(
                "Cursor has no description; cannot map tuple rows to dict."
            )
        cols = [d[0] for d in desc]
        return dict(zip(cols, row, strict=True))

    keys = getattr(row, "keys", None)
    if callable(keys):
        return {key: row[key] for key in keys()}

    raise TypeError(f"Unsupported row type: {type(row)}")


def first_value(cursor: Any, row: Any) -> Any:
    """Return the first column of a row, whatever its shape."""

    if isinstance(row, (tuple, list)):
        return row[0] if row else None
    mapping = row_to_mapping(cursor, row)
    return next(iter(mapping.values()), None)


def param_count(params: Any) -> int:
    return 0 if params is None else len(params)
