"""
Logging filters

Request ID filter and helpers for logging.

The request id lives in a `contextvars.ContextVar`, so it follows the request
across awaits and asyncio tasks. `RequestIdFilter` copies it onto every
`LogRecord` (or the sentinel "-"), which keeps `%(request_id)s` format strings
safe. `RequestIDMiddleware` (middleware.py) sets it at the start of a request.
"""

import logging
from logging import LogRecord
import contextvars

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None):
    """
    Set the request id in the current context and return the token to allow reset.

    Returns:
        token: contextvar.Token which can be passed to reset_request_id(token)
    """
    return _request_id_ctx.set(request_id)


def reset_request_id(token):
    """
    Reset the contextvar to the previously saved token returned by set_request_id().
    """
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Guarantees every LogRecord has a `request_id` attribute.

    Precedence: an explicit `extra={"request_id": ...}`, then the contextvar,
    then "-". Always returns True; it only annotates.
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    """Masks sensitive `extra` attributes before any handler formats the record."""

    SENSITIVE = {"password", "secret", "token", "access_token", "refresh_token", "authorization", "dsn"}

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = "***REDACTED***"
        return True
