# src/userapi/core/logging/builder.py
"""
Logging builder: create and apply a dictConfig logging configuration.

    setup_logging(settings)

is called once by the process entry point (main.run) before anything else logs.
Settings are passed in explicitly; this module never calls get_settings().

Handler selection:
| `LOG_TO_STDOUT` | `LOG_DIR` set  | Active handlers                 |
| --------------- | -------------- | ------------------------------- |
| `true`          | doesn't matter | `console` + `error_console`     |
| `false`         | no             | `console` + `error_console`     |
| `false`         | yes            | `console` + `file` + `error_file` |
"""

from __future__ import annotations

from pathlib import Path
import logging
import logging.config

from userapi.config.settings import Settings
from userapi.utils.logging import get_project_name

from .formatters import JsonFormatter, ColorFormatter
from .filters import RequestIdFilter, RedactFilter
from .handlers import (
    get_console_handler,
    get_file_handler,
    get_error_file_handler,
    get_error_console_handler,
)


def _writes_files(settings: Settings) -> bool:
    return (not settings.LOG_TO_STDOUT) and bool(settings.LOG_DIR)


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping using the provided settings.

    The returned mapping includes:
      - formatters: "standard" (color/dev or plain) and "json"
      - filters: "request_id", "redact"
      - handlers: console, (file/error_file) OR error_console depending on LOG_TO_STDOUT
      - loggers: root, uvicorn.error, uvicorn.access, sqlalchemy.engine
    """
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s",
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name(default="userapi"),
        },
    }

    filters = {
        "request_id": {"()": RequestIdFilter},
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}
    if _writes_files(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers.keys()),
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            "uvicorn.error": {
                "level": settings.LOG_LEVEL,
                "handlers": list(handlers.keys()),
                "propagate": False,
            },
            # AccessLogMiddleware writes the access log; keep uvicorn's own quiet.
            "uvicorn.access": {
                "level": "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
            # SQL logging may contain user data; off unless explicitly enabled.
            "sqlalchemy.engine": {
                "level": "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Settings) -> None:
    """
    Initialize logging from settings.

    Creates LOG_DIR when file logging is active, applies the dictConfig and
    attaches a RequestIdFilter to the root logger so `%(request_id)s` is always set.
    """
    if _writes_files(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))
    logging.getLogger().addFilter(RequestIdFilter())
