"""
Relay Hub Backend: Outbound HTTP Client Management
=====================================================

What:  Creates, shares, and disposes the httpx.AsyncClient used for every
       upstream call, plus the FastAPI dependency that hands it to handlers.
Why:   One pooled client per process reuses TCP/TLS connections to the three
       upstream hosts instead of paying a handshake per request.
How:   The lifespan handler in main.py calls create_http_client() on startup,
       parks the client on app.state, and calls dispose_http_client() on
       shutdown. Routes receive it through Depends(get_http_client).

The client carries no request state, so concurrent handlers can share it
without locking.
"""

import logging

import httpx
from fastapi import Request

from app.config import Settings

logger = logging.getLogger(__name__)


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """
    Build the shared outbound client.

    The timeout applies to connect, read, write and pool acquisition alike.
    Redirects are not followed; upstream responses are relayed as-is.
    """
    client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.upstream_timeout),
        follow_redirects=False,
    )
    logger.info("Outbound HTTP client created (timeout=%.1fs)", settings.upstream_timeout)
    return client


async def dispose_http_client(client: httpx.AsyncClient) -> None:
    """
    What:  Closes all pooled connections.
    When:  Called during application shutdown (lifespan handler).
    """
    await client.aclose()
    logger.info("Outbound HTTP client closed")


def get_http_client(request: Request) -> httpx.AsyncClient:
    """FastAPI dependency returning the client created in the lifespan."""
    return request.app.state.http_client
