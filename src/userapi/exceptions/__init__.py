from .base import (
    ErrorKind,
    FieldIssue,
    AppError,
    ValidationFailedError,
    NotFoundError,
    ConflictError,
    StoreUnavailableError,
    UnexpectedError,
    ConfigurationError,
)

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
