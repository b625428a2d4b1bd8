"""
Relay Hub Backend: Face++ Detection Relay
============================================

What:  Forwards an uploaded image to the Face++ detect endpoint.
How:   Builds a multipart form with the configured key/secret and the raw
       image bytes, POSTs it, and returns the decoded JSON unchanged.
Who:   Called by POST /api/face-analysis.

Upload contract:
    Whatever the browser sent (PNG, JPEG, any name), the bytes are forwarded
    as `image_file` with filename `image.jpg` and content type `image/jpeg`.
    Face++ sniffs the real format from the bytes.
"""

import logging
from typing import Any

import httpx
from fastapi import Depends

from app.config import Settings, get_settings
from app.services.http_client import get_http_client
from app.services.upstream_base import UpstreamService

logger = logging.getLogger(__name__)

UPLOAD_FILENAME = "image.jpg"
UPLOAD_CONTENT_TYPE = "image/jpeg"


class FaceAnalysisService(UpstreamService):
    """Relay for the Face++ detect API."""

    name = "face"

    @classmethod
    def has_credentials(cls, settings: Settings) -> bool:
        return bool(settings.face_api_key and settings.face_api_secret)

    async def analyze(self, image: bytes) -> Any:
        """
        Send image bytes to Face++ and return its JSON response verbatim.

        Raises:
            UpstreamError: network failure or non-JSON body.
        """
        logger.info("Forwarding %d image bytes to Face++", len(image))
        return await self._send_json(
            "POST",
            self.settings.face_api_url,
            data={
                "api_key": self.settings.face_api_key,
                "api_secret": self.settings.face_api_secret,
            },
            files={"image_file": (UPLOAD_FILENAME, image, UPLOAD_CONTENT_TYPE)},
        )


def get_face_service(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> FaceAnalysisService:
    """FastAPI dependency building the relay for the current request."""
    return FaceAnalysisService(client, settings)
