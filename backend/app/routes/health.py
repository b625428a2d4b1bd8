"""
Relay Hub Backend: Health Check Route
========================================

What:  Liveness endpoint for container health checks and load balancers.
How:   Reports version, uptime, and whether each upstream has credentials.

Health Check Philosophy:
    The relay holds no state and owns no database, so it is alive if it can
    answer. Upstreams are NOT probed: each probe would spend the caller's
    third-party quota every 10-30 seconds.

    Status levels:
    - healthy:   every upstream has credentials
    - degraded:  at least one upstream is missing credentials
                 (its endpoint will relay the upstream's auth error)
"""

import logging
import time

from fastapi import APIRouter, Depends

from app import __version__
from app.config import Settings, get_settings
from app.schemas.proxy import HealthResponse
from app.services.chat_service import ChatService
from app.services.face_service import FaceAnalysisService
from app.services.weather_service import WeatherService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()

UPSTREAM_SERVICES = (FaceAnalysisService, WeatherService, ChatService)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    # Credential check only: no client is built and nothing is sent
    upstreams = {
        service.name: "configured" if service.has_credentials(settings) else "missing_credentials"
        for service in UPSTREAM_SERVICES
    }

    overall = "healthy"
    if any(state != "configured" for state in upstreams.values()):
        overall = "degraded"
        logger.debug("Health check: degraded upstreams %s", upstreams)

    return HealthResponse(
        status=overall,
        version=__version__,
        upstreams=upstreams,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
