from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from ..common.validators import FieldViolation


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    Carries every violation found, not just the first one.
    """

    def __init__(self, violations: Sequence["FieldViolation"]):
        self.violations = tuple(violations)
        super().__init__("; ".join(v.describe() for v in self.violations) or "Invalid input")


class NotFoundError(DomainError):
    """Raised when a requested id does not exist."""


class ConflictError(DomainError):
    """Raised when a write violates a uniqueness constraint."""


class StorageError(DomainError):
    """Raised when the database is unreachable or a query fails."""


class ObjectNotFoundError(DomainError):
    """Raised when a stored object (e.g. a student photo) does not exist."""
