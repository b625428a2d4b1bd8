"""
Relay Hub Backend: OpenWeatherMap Relay
==========================================

What:  Fetches current weather for a city and returns the JSON unchanged.
Who:   Called by GET /api/weather.

URL construction:
    The city is interpolated into the query string as received, with no
    extra escaping: `?q=<city>&appid=<key>&units=metric`. httpx still
    percent-encodes characters that are illegal in a URL (spaces, non-ASCII),
    but a city containing `&` or `=` changes the query the upstream sees.
    Kept deliberately to match the established relay behavior.
"""

from typing import Any

import httpx
from fastapi import Depends

from app.config import Settings, get_settings
from app.services.http_client import get_http_client
from app.services.upstream_base import UpstreamService

UNITS = "metric"


class WeatherService(UpstreamService):
    """Relay for the OpenWeatherMap current-weather API."""

    name = "weather"

    @classmethod
    def has_credentials(cls, settings: Settings) -> bool:
        return bool(settings.weather_api_key)

    def build_url(self, city: str) -> str:
        return (
            f"{self.settings.weather_api_url}"
            f"?q={city}&appid={self.settings.weather_api_key}&units={UNITS}"
        )

    async def current(self, city: str) -> Any:
        """
        Return the upstream's current-weather JSON for `city` verbatim.

        Raises:
            UpstreamError: network failure or non-JSON body.
        """
        return await self._send_json("GET", self.build_url(city))


def get_weather_service(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> WeatherService:
    return WeatherService(client, settings)
