"""
Classification of SQLAlchemy IntegrityError into constraint-level categories.

The categories below are internal labels. They never leave the repository
layer: `mapper.py` turns them into app-level errors (ConflictError, ...).

| Constraint-level (internal) | → | App-level (external) |
| --------------------------- | - | -------------------- |
| `UNIQUE`                    | → | `ConflictError`      |
| `NOT_NULL`, `FOREIGN_KEY`,  | → | `UnexpectedError`    |
| `CHECK`, `UNKNOWN`          |   |                      |
"""
import logging
import re
from enum import Enum

from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class ConstraintViolation(str, Enum):
    UNIQUE = "unique"
    NOT_NULL = "not_null"
    FOREIGN_KEY = "foreign_key"
    CHECK = "check"
    UNKNOWN = "unknown"


# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    UNIQUE_VIOLATION = "23505"
    NOT_NULL_VIOLATION = "23502"
    FOREIGN_KEY_VIOLATION = "23503"
    CHECK_VIOLATION = "23514"


SQLSTATE_VIOLATION_MAP = {
    PostgresErrorCodes.UNIQUE_VIOLATION.value: ConstraintViolation.UNIQUE,
    PostgresErrorCodes.NOT_NULL_VIOLATION.value: ConstraintViolation.NOT_NULL,
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION.value: ConstraintViolation.FOREIGN_KEY,
    PostgresErrorCodes.CHECK_VIOLATION.value: ConstraintViolation.CHECK,
}

_MESSAGE_KEYWORDS = (
    (ConstraintViolation.UNIQUE, ("unique constraint", "unique failed", "unique violation", "duplicate")),
    (ConstraintViolation.NOT_NULL, ("not null constraint", "not null", "null value in column")),
    (ConstraintViolation.FOREIGN_KEY, ("foreign key constraint", "foreign key", "is not present in table")),
    (ConstraintViolation.CHECK, ("check constraint", "check failed")),
)


def _sqlstate_of(orig) -> str | None:
    # psycopg 3 and the asyncpg adapter expose `sqlstate`; psycopg2 exposes `pgcode`.
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def _constraint_name_of(orig) -> str | None:
    diag = getattr(orig, "diag", None)
    if diag is not None:
        return getattr(diag, "constraint_name", None)
    return getattr(orig, "constraint_name", None)


def _classify_from_sqlstate(orig) -> tuple[ConstraintViolation | None, str | None]:
    sqlstate = _sqlstate_of(orig)
    if not sqlstate:
        return None, None

    constraint_name = _constraint_name_of(orig)
    violation = SQLSTATE_VIOLATION_MAP.get(sqlstate)
    if violation is not None:
        logger.debug("integrity.sqlstate", extra={"sqlstate": sqlstate, "constraint_name": constraint_name})
        return violation, constraint_name

    logger.warning(
        "Unknown integrity error sqlstate encountered",
        extra={"sqlstate": sqlstate, "constraint_name": constraint_name},
    )
    return ConstraintViolation.UNKNOWN, constraint_name


def _classify_from_message(msg: str) -> ConstraintViolation:
    """Fallback for SQLite, MySQL and drivers without a SQLSTATE."""
    normalized = (msg or "").lower()
    for violation, keywords in _MESSAGE_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return violation

    logger.warning("Unknown integrity error message encountered", extra={"message_snippet": normalized[:200]})
    return ConstraintViolation.UNKNOWN


def classify_integrity_error(exc: IntegrityError) -> tuple[ConstraintViolation, str | None]:
    """
    Classify a SQLAlchemy IntegrityError.

    Returns:
        A tuple of (ConstraintViolation, constraint_name if the driver reports one)
    """
    violation, constraint_name = _classify_from_sqlstate(exc.orig)
    if violation is not None:
        return violation, constraint_name
    return _classify_from_message(str(exc.orig)), None


# -----------------------
# Column extraction helpers
# -----------------------

_COLUMN_PATTERNS = (
    # Postgres: 'DETAIL:  Key (email)=(a@b.com) already exists.'
    re.compile(r'key \((?P<cols>[^)]+)\)=', flags=re.IGNORECASE),
    # Postgres: 'null value in column "name" violates not-null constraint'
    re.compile(r'null value in column "(?P<cols>[^"]+)"', flags=re.IGNORECASE),
    # SQLite: 'UNIQUE constraint failed: users.email'
    re.compile(r'(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>[^\n\[]+)', flags=re.IGNORECASE),
)


def extract_columns(exc: IntegrityError) -> list[str] | None:
    """Best-effort extraction of the column names involved in an integrity failure."""
    msg = str(exc.orig) if exc.orig is not None else str(exc)
    for pattern in _COLUMN_PATTERNS:
        m = pattern.search(msg)
        if m:
            cols = [c.strip().strip('"') for c in m.group("cols").split(",")]
            return [c.split(".")[-1] for c in cols if c]
    return None
