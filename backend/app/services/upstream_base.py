"""
Relay Hub Backend: Abstract Upstream Service
===============================================

What:  Base class shared by the face, weather and chat upstream clients.
Why:   All three relays follow the same shape: send one request, decode the
       JSON body, log how it went, and turn any failure into UpstreamError.
       Keeping that shape in one place means each concrete service only
       describes what to send and what to return.
How:   Concrete services call self._send_json() and implement has_credentials().
Who:   Instantiated per request by the route dependencies.

Failure contract:
    Anything raised while sending or decoding (transport errors, timeouts,
    non-JSON bodies) is logged with its stack trace and re-raised as
    UpstreamError. The client sees only the generic message.

    Upstream HTTP status is NOT inspected. A 4xx/5xx whose body is JSON is
    returned like a 200; it is only logged at WARNING.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any

import httpx

from app.config import Settings
from app.exceptions import UpstreamError

logger = logging.getLogger(__name__)


class UpstreamService(ABC):
    """
    Abstract interface for a single third-party API relay.

    Contract:
        - _send_json() performs exactly one HTTP call (no retry)
        - All implementation-specific errors are wrapped in UpstreamError
        - Credentials come from the injected Settings, never from os.environ
    """

    # Short name used in logs and in UpstreamError.context
    name: str = "upstream"

    def __init__(self, client: httpx.AsyncClient, settings: Settings):
        self.client = client
        self.settings = settings

    @classmethod
    @abstractmethod
    def has_credentials(cls, settings: Settings) -> bool:
        """True when `settings` holds every credential this upstream needs."""
        ...

    def is_configured(self) -> bool:
        return self.has_credentials(self.settings)

    async def _send_json(self, method: str, url: str, **kwargs: Any) -> Any:
        """
        Send one request upstream and return its decoded JSON body.

        Args:
            method: HTTP method
            url:    Fully built upstream URL
            kwargs: Passed through to httpx (data, files, json, headers)

        Returns:
            Whatever JSON value the upstream sent back.

        Raises:
            UpstreamError: on any transport or decoding failure.
        """
        start_time = time.perf_counter()

        try:
            response = await self.client.request(method, url, **kwargs)
            data = response.json()
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            # URL is not logged: the weather URL carries the API key
            logger.error(
                "%s upstream call failed after %.0fms: %s",
                self.name,
                duration_ms,
                str(e),
                exc_info=True,
            )
            raise UpstreamError(
                upstream=self.name,
                context={"error_type": type(e).__name__},
            ) from e

        duration_ms = (time.perf_counter() - start_time) * 1000

        if response.is_error:
            logger.warning(
                "%s upstream returned HTTP %d in %.0fms; relaying body unchanged",
                self.name,
                response.status_code,
                duration_ms,
            )
        else:
            logger.info(
                "%s upstream returned HTTP %d in %.0fms",
                self.name,
                response.status_code,
                duration_ms,
            )

        return data
