"""Request timing: one log line per request and an ``X-Response-Time`` header."""
from __future__ import annotations

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

# Polling clients hit these every few seconds; keep them out of INFO.
_QUIET_SUFFIXES = ("/messages", "/healthz", "/readyz")
SLOW_REQUEST_MS = 1000.0


def _level_for(request: Request, status_code: int, elapsed_ms: float) -> int:
    if status_code >= 500 or elapsed_ms >= SLOW_REQUEST_MS:
        return logging.WARNING
    if request.method == "GET" and request.url.path.endswith(_QUIET_SUFFIXES):
        return logging.DEBUG
    return logging.INFO


class RequestTimingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        response.headers["X-Response-Time"] = f"{elapsed_ms:.1f}ms"
        logger.log(
            _level_for(request, response.status_code, elapsed_ms),
            "%s %s -> %s in %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response
