"""
Relay Hub Backend: Custom Exception Hierarchy
================================================

What:  Defines application-specific exceptions for the two failure classes a
       relay can hit: the caller forgot an input, or the upstream let us down.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return `{"error": <message>}` with the matching HTTP status code.
Who:   Raised by routes (missing input) and upstream services (upstream error).

Exception Hierarchy:
    RelayError (base)           → 500 Internal Server Error
    ├── MissingInputError       → 400 Bad Request (client can fix)
    └── UpstreamError           → 500 Internal Server Error (generic message)

Security Note:
    `message` is the only thing that reaches the client. `context` is for the
    server log: upstream name, exception type, upstream status. Never put
    credentials in either.
"""

from typing import Any, Dict, Optional


class RelayError(Exception):
    """
    Base exception for all relay errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class MissingInputError(RelayError):
    """
    Raised when a required request input is absent or empty.

    When:    No uploaded image, no `city` query parameter, no chat `message`.
    HTTP:    400 Bad Request

    Only presence is checked; content is forwarded upstream untouched.
    """

    status_code = 400

    def __init__(
        self,
        message: str = "input required",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class UpstreamError(RelayError):
    """
    Raised when reaching or decoding a third-party API fails.

    What:    Connection refused, DNS failure, timeout, non-JSON body, or a
             response missing the fields we extract.
    HTTP:    500 Internal Server Error

    The client always sees the generic "server error" message. The upstream
    name and underlying exception type travel in `context` for the log.
    No retry is attempted; the failure is terminal for the request.
    """

    def __init__(
        self,
        upstream: str,
        message: str = "server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["upstream"] = upstream
        super().__init__(message=message, context=ctx)
        self.upstream = upstream
