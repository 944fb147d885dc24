# src/userapi/core/logging/middleware.py
"""
Request-scoped logging middleware for FastAPI / Starlette.

- RequestIDMiddleware: takes `X-Request-ID` from the request (when it is a sane,
  short token) or generates a UUID4, stores it in the request-id contextvar and
  echoes it on the response.
- AccessLogMiddleware: one `http.access` INFO record per request with method,
  path, status and duration_ms.

Register RequestIDMiddleware last (outermost) so access records carry the id:
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)
"""

import logging
import re
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from .filters import set_request_id, reset_request_id

REQUEST_ID_HEADER = "X-Request-ID"

# Accept only short opaque tokens from upstream to avoid log injection.
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

access_logger = logging.getLogger("userapi.access")


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next):
        incoming = request.headers.get(REQUEST_ID_HEADER)
        rid = incoming if incoming and _VALID_REQUEST_ID.match(incoming) else str(uuid.uuid4())

        token = set_request_id(rid)
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            reset_request_id(token)


class AccessLogMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            access_logger.info(
                "http.access",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": status_code,
                    "duration_ms": int((time.perf_counter() - start) * 1000),
                },
            )
