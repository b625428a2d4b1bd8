"""
Relay Hub Backend: Unhandled Error Middleware
================================================

What:  Turns any exception that escapes the routes into `{"error": "server error"}`
       with HTTP 500.
Why:   FastAPI's `Exception` handler runs in ServerErrorMiddleware, outside
       every user middleware, so its responses skip the X-Request-ID and CORS
       headers. Catching here, innermost, lets the 500 travel back through the
       whole chain like any other response.

RelayError and RequestValidationError never reach this layer; the handlers
registered in main.py answer those first.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

GENERIC_ERROR = "server error"


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Stack trace goes to the log, never to the client."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                "[%s] Unexpected error on %s %s: %s",
                request_id_var.get(""),
                request.method,
                request.url.path,
                str(exc),
                exc_info=True,
            )
            return JSONResponse(status_code=500, content={"error": GENERIC_ERROR})
