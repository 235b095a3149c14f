"""Error taxonomy for the record store and the services built on it."""

from typing import Any, Optional


class PostgrestError(Exception):
    """Raw failure reported by the hosted backend or the transport.

    Only the store client raises this; the gateway classifies it into one of
    the ``StoreError`` kinds below before anything else sees it.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status: Optional[int] = None,
        details: Optional[Any] = None,
        hint: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status
        self.details = details
        self.hint = hint

    def __repr__(self) -> str:
        return f"PostgrestError(code={self.code!r}, status={self.status!r}, message={self.message!r})"


class StoreError(Exception):
    """Base exception for all record store errors."""
    pass

class Unauthenticated(StoreError):
    """Raised when an operation needs a session and there is none."""
    pass

class AccessDenied(StoreError):
    """Raised when row level security refuses the operation."""
    pass

class DuplicateKey(StoreError):
    """Raised when a unique constraint rejects a write."""
    pass

class InvalidReference(StoreError):
    """Raised when a foreign key points at a missing record."""
    pass

class MissingRequiredField(StoreError):
    """Raised when a NOT NULL column or required field is missing."""
    pass

class ConstraintViolation(StoreError):
    """Raised when a check constraint rejects a value."""
    pass

class RecordNotFound(StoreError):
    """Raised when an update targets a record that no longer exists."""
    pass

class RemoteError(StoreError):
    """Catch-all for backend failures; keeps the backend message and code."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.code = code

class OperationInProgress(StoreError):
    """Raised when a mutation for the same record is already in flight."""
    pass
