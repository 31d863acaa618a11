from __future__ import annotations

from typing import Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ImportPreconditionError(DomainError):
    """Raised before any row is processed; the whole import is rejected."""


class EmptyInputError(ImportPreconditionError):
    """The file has no header row or no data rows."""


class MissingColumnsError(ImportPreconditionError):
    def __init__(self, missing: Sequence[str]):
        self.missing = list(missing)
        super().__init__(
            f"Missing required columns: {', '.join(self.missing)}. "
            "Please ensure your CSV has a column for each of them."
        )


class UnresolvedReferenceError(DomainError):
    """A row points at a record that does not exist (and must not be created)."""


class StoreUnavailableError(DomainError):
    """The backing store cannot be reached; remaining rows cannot be applied."""
