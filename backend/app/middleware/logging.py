"""
Relay Hub Backend: Request Logging Middleware
================================================

What:  One access-log line per API request with status and duration.
How:   Times the downstream call and picks the log level from the status code.
When:  Runs inside RequestIDMiddleware, so the request ID is already set.

Typical durations:
    - GET /api/weather:         100-500ms (OpenWeatherMap round trip)
    - POST /api/face-analysis:  500-3000ms (upload + detection)
    - POST /api/chat:           2000-30000ms (completion dominates)

What we log vs what we DON'T log (privacy):
    ✅ Log: method, path, status, duration, IP, request ID
    ❌ Don't log: query strings, bodies (chat text, photos), upstream
       credentials. The weather route logs the city name at DEBUG only.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("relayhub.access")

# Health probes and static assets would drown out the API traffic
SKIPPED_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status, duration and client IP for /api requests."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in SKIPPED_PATHS or not path.startswith("/api"):
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
