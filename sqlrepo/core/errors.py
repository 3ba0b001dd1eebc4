"""Exception types raised by the repository core."""

from __future__ import annotations


class RepositoryError(Exception):
    """Base class for repository-level failures."""


class UnsupportedOperationError(RepositoryError, NotImplementedError):
    """Raised when a write is requested from a read-only repository."""


class MappingError(RepositoryError, ValueError):
    """Raised when a fetched row cannot be converted into an entity.

    The original mapper exception is chained as `__cause__`.
    """

    def __init__(self, message: str, *, row: object = None):
        super().__init__(message)
        self.row = row
