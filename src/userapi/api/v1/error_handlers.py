"""
FastAPI exception handlers that map app-level errors to HTTP responses.

The status code is decided here and only here (`http_status_for`); the error
classes only know their ErrorKind. Payloads come from `.to_payload()`, so no
driver message or stack trace reaches a client.
"""
import logging
from typing import assert_never

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from userapi.exceptions.base import (
    AppError,
    ErrorKind,
    FieldIssue,
    UnexpectedError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)


def http_status_for(kind: ErrorKind) -> int:
    match kind:
        case ErrorKind.VALIDATION_FAILED:
            return status.HTTP_400_BAD_REQUEST
        case ErrorKind.NOT_FOUND:
            return status.HTTP_404_NOT_FOUND
        case ErrorKind.CONFLICT:
            return status.HTTP_409_CONFLICT
        case ErrorKind.STORE_UNAVAILABLE:
            return status.HTTP_503_SERVICE_UNAVAILABLE
        case ErrorKind.UNEXPECTED:
            return status.HTTP_500_INTERNAL_SERVER_ERROR
        case _:
            assert_never(kind)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    status_code = http_status_for(exc.kind)
    # 5xx are worth a warning; client errors are routine.
    level = logging.WARNING if status_code >= 500 else logging.INFO
    logger.log(
        level,
        "api.app_error",
        extra={
            "method": request.method,
            "path": request.url.path,
            "kind": exc.kind.value,
            "fields": exc.fields,
            "constraint": exc.constraint,
        },
    )
    return JSONResponse(status_code=status_code, content=exc.to_payload())


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Undecodable bodies and malformed path parameters (e.g. a non-UUID id)
    become ValidationFailed, i.e. 400 instead of FastAPI's default 422.
    """
    issues = []
    for error in exc.errors():
        loc = error.get("loc") or ()
        field = str(loc[-1]) if loc else "body"
        issues.append(FieldIssue(field, error.get("msg", "invalid value")))
    return await app_error_handler(request, ValidationFailedError(issues))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "api.unhandled_error",
        extra={"method": request.method, "path": request.url.path},
    )
    error = UnexpectedError()
    return JSONResponse(status_code=http_status_for(error.kind), content=error.to_payload())


def register_exception_handlers(app):
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
