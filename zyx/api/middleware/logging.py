"""
Zyx Dashboard - Request Logging Middleware
==========================================

Tags each request with an ID and logs method, path, status and timing.
"""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from zyx.core.logger import logger


REQUEST_ID_HEADER = "X-Request-ID"

# Polled by load balancers; not worth a log line each
QUIET_PATHS = frozenset({"/health", "/api/health"})


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Request logging middleware.

    Adds to responses:
    - X-Request-ID: the incoming header when present, otherwise a new ID
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        request.state.request_id = request_id

        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000

        response.headers[REQUEST_ID_HEADER] = request_id

        if request.url.path not in QUIET_PATHS:
            details = [
                ("Request ID", request_id),
                ("Method", request.method),
                ("Path", request.url.path[:80]),
                ("Status", str(response.status_code)),
                ("Duration", f"{duration_ms:.1f}ms"),
            ]
            if response.status_code >= 500:
                logger.warning("API Request Failed", details)
            else:
                logger.debug("API Request", details)

        return response


__all__ = ["LoggingMiddleware", "REQUEST_ID_HEADER"]
