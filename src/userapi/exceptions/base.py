# userapi/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py                    # App-level error kinds (ValidationFailedError, NotFoundError, ConflictError, ...)
# │   ├── integrity_classifier.py    # SQL-level / DB-specific integrity errors
# │   └── mapper.py                  # Map SQL-level / driver errors to app-level errors
"""
Application error taxonomy.

Every error that can leave the repository, service or controller layers is an
`AppError` carrying one member of the closed `ErrorKind` set. Only the HTTP
responder (api/v1/error_handlers.py) turns a kind into a status code.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class ErrorKind(str, Enum):
    VALIDATION_FAILED = "validation_failed"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    STORE_UNAVAILABLE = "store_unavailable"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class FieldIssue:
    """A single failed field check: which field and why (client-safe text)."""
    field: str
    reason: str


class AppError(Exception):
    """
    Base exception for repository/service/controller errors.

    - kind: the ErrorKind this error belongs to (drives the HTTP status)
    - message: human-friendly message (safe to show to clients)
    - fields: optional list of field names related to the error (e.g., ['email'])
    - constraint: optional DB constraint name or identifier (for logs only)
    """

    kind: ErrorKind = ErrorKind.UNEXPECTED
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.constraint = constraint

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.constraint:
            parts.append(f"constraint: {self.constraint}")
        parts.append(f"kind: {self.kind.value}")
        return f"{base} ({'; '.join(parts)})"

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict suitable for HTTP responses.
        Standard shape:
            {
                "detail": "A human-friendly message",
                "code": "conflict",
                "fields": ["email"],        # optional
            }
        The constraint name stays out of the payload.
        """
        payload: dict = {"detail": self.message, "code": self.kind.value}
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload


class ValidationFailedError(AppError):
    """Inbound payload failed structural checks. Carries one FieldIssue per failure."""

    kind = ErrorKind.VALIDATION_FAILED
    default_message = "Validation failed"

    def __init__(self, issues: Iterable[FieldIssue], message: str | None = None):
        self.issues = list(issues)
        super().__init__(message, fields=[issue.field for issue in self.issues])

    def to_payload(self) -> dict:
        payload = super().to_payload()
        payload["errors"] = [{"field": i.field, "reason": i.reason} for i in self.issues]
        return payload


class NotFoundError(AppError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    """Uniqueness constraint violated (e.g. email already taken)."""

    kind = ErrorKind.CONFLICT
    default_message = "Resource already exists"


class StoreUnavailableError(AppError):
    """Persistence layer unreachable or timed out. Never retried inside the core."""

    kind = ErrorKind.STORE_UNAVAILABLE
    default_message = "Storage temporarily unavailable"


class UnexpectedError(AppError):
    kind = ErrorKind.UNEXPECTED
    default_message = "Internal server error"


class ConfigurationError(Exception):
    """Missing or invalid startup configuration. Fatal; never reaches a client."""


__all__ = [
    "ErrorKind",
    "FieldIssue",
    "AppError",
    "ValidationFailedError",
    "NotFoundError",
    "ConflictError",
    "StoreUnavailableError",
    "UnexpectedError",
    "ConfigurationError",
]
