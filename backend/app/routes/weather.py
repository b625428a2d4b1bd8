"""
Relay Hub Backend: Weather Route Handler
===========================================

What:  Handles GET /api/weather?city=<name>.
Why:   Keeps the OpenWeatherMap key on the server instead of in the browser.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query

from app.exceptions import MissingInputError
from app.schemas.proxy import ErrorResponse
from app.services.weather_service import WeatherService, get_weather_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Weather"])


@router.get(
    "/weather",
    responses={
        200: {"description": "OpenWeatherMap response, unmodified"},
        400: {"description": "City missing", "model": ErrorResponse},
        500: {"description": "Upstream unreachable or invalid", "model": ErrorResponse},
    },
    summary="Current weather for a city",
)
async def get_weather(
    city: Optional[str] = Query(default=None, description="City name, e.g. London"),
    service: WeatherService = Depends(get_weather_service),
) -> Any:
    """Relay the current weather for `city`. Empty and absent are both rejected."""
    if not city:
        raise MissingInputError("city required", field="city")

    # City names stay out of INFO logs
    logger.debug("Received weather request for city=%s", city)
    return await service.current(city)
