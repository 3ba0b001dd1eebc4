"""Shared core type aliases used across contracts, repository, and ports."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

ColumnMap = Dict[str, Any]
PositionalParams = List[Any]
QueryParams = Optional[Sequence[Any]]

RowMapping = Mapping[str, Any]
