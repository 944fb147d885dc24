"""
Translate SQLAlchemy / driver failures into app-level errors.

Repositories wrap every store interaction in `db_error_handler(...)` so that no
raw driver exception (or its message) ever escapes the repository layer.
"""
import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import (
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy.ext.asyncio import AsyncSession

from .base import AppError, ConflictError, StoreUnavailableError, UnexpectedError
from .integrity_classifier import ConstraintViolation, classify_integrity_error, extract_columns

logger = logging.getLogger(__name__)

# Connectivity / timeout failures: the store could not answer in time.
_UNAVAILABLE_ERRORS = (OperationalError, InterfaceError, DisconnectionError, PoolTimeoutError, TimeoutError)


def map_integrity_error(exc: IntegrityError, model_name: str | None = None) -> AppError:
    """
    Map a SQLAlchemy IntegrityError to an app-level exception.
    Populates `.fields` and `.constraint` where possible.
    """
    violation, constraint_name = classify_integrity_error(exc)
    columns = extract_columns(exc)
    model_part = model_name or "Record"

    if violation is ConstraintViolation.UNIQUE:
        # Expected client-level scenario (409), so INFO without the raw DB text.
        logger.info(
            "mapper.duplicate_detected",
            extra={"model": model_part, "fields": columns, "constraint": constraint_name},
        )
        if columns:
            return ConflictError(
                f"{model_part} already exists for field(s): {', '.join(columns)}",
                fields=columns,
                constraint=constraint_name,
            )
        return ConflictError(f"{model_part} already exists", constraint=constraint_name)

    # Any other integrity failure means the core sent something the schema rejects.
    logger.warning(
        "mapper.integrity_violation",
        extra={"model": model_part, "violation": violation.value, "fields": columns, "constraint": constraint_name},
    )
    logger.debug("mapper.integrity_raw", extra={"model": model_part, "raw": str(exc.orig)})
    return UnexpectedError(f"{model_part} could not be stored", fields=columns, constraint=constraint_name)


async def _safe_rollback(db: AsyncSession, model_name: str | None) -> None:
    try:
        await db.rollback()
    except Exception:
        logger.exception("Failed to rollback session", extra={"model": model_name})


@asynccontextmanager
async def db_error_handler(db: AsyncSession, model_name: str | None = None):
    """
    Usage:
        async with db_error_handler(self.db, "User"):
            ... DB ops ...
    Rolls back on error and raises a mapped app-level exception. AppErrors raised
    inside the block pass through unchanged; CancelledError is never intercepted.
    """
    try:
        yield
    except AppError:
        raise
    except IntegrityError as exc:
        await _safe_rollback(db, model_name)
        raise map_integrity_error(exc, model_name) from exc
    except _UNAVAILABLE_ERRORS as exc:
        await _safe_rollback(db, model_name)
        logger.warning(
            "mapper.store_unavailable",
            extra={"model": model_name, "error_type": type(exc).__name__},
        )
        if isinstance(exc, TimeoutError):
            raise StoreUnavailableError("Storage did not respond before the request deadline") from exc
        raise StoreUnavailableError() from exc
    except SQLAlchemyError as exc:
        await _safe_rollback(db, model_name)
        logger.exception("Unexpected DB error for %s", model_name, extra={"model": model_name})
        raise UnexpectedError(f"Failed to operate on {model_name or 'database'}") from exc
