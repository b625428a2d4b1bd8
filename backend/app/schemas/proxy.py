"""
Relay Hub Backend: Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract between browser and relay.
Why:   Input shape checks, response serialization, and OpenAPI doc generation.

Scope note:
    Face and weather responses are the upstream's JSON passed through as-is,
    so they have no model here. Only the chat relay reshapes its reply.
"""

from typing import Dict, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ChatRequest(BaseModel):
    """
    What:  Body of POST /api/chat.

    Why optional: an absent or empty message is reported as a 400 with the
    relay's own error body, not FastAPI's 422 validation payload.
    """
    message: Optional[str] = Field(default=None, description="Free-text user message")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ChatResponse(BaseModel):
    """Text of the first completion choice."""
    response: Optional[str] = Field(description="Model reply")


class ErrorResponse(BaseModel):
    """
    What:  Error body returned by every relay endpoint.

    Example:
        {"error": "city required"}

    The request ID is returned in the X-Request-ID header, not the body.
    """
    error: str = Field(description="Human-readable error message")


class HealthResponse(BaseModel):
    """
    What:  Liveness report for GET /health.

    upstreams maps each relay to "configured" or "missing_credentials".
    No upstream is actually called.
    """
    status: str = Field(description="Overall status: healthy or degraded")
    version: str = Field(description="Application version")
    upstreams: Dict[str, str] = Field(description="Credential status per upstream")
    uptime_seconds: float = Field(description="Seconds since service started")
