"""
Relay Hub Backend: Face Analysis Route Handler
=================================================

What:  Handles POST /api/face-analysis.
How:   Reads the multipart `image` field into memory and hands the bytes to
       FaceAnalysisService, which relays them to Face++.
Who:   Called by the browser client after the user picks or snaps a photo.

Request Flow:
    1. Client sends multipart/form-data with an `image` file field
    2. No file → MissingInputError (400 "no image uploaded")
    3. Bytes are forwarded upstream; nothing touches the disk
    4. Upstream JSON is returned as-is, whatever its status code
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, File, UploadFile

from app.exceptions import MissingInputError
from app.schemas.proxy import ErrorResponse
from app.services.face_service import FaceAnalysisService, get_face_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Face"])


@router.post(
    "/face-analysis",
    responses={
        200: {"description": "Face++ detect response, unmodified"},
        400: {"description": "No image uploaded", "model": ErrorResponse},
        500: {"description": "Upstream unreachable or invalid", "model": ErrorResponse},
    },
    summary="Detect faces in an uploaded image",
)
async def analyze_face(
    image: Optional[UploadFile] = File(
        default=None,
        description="Image file to analyze",
    ),
    service: FaceAnalysisService = Depends(get_face_service),
) -> Any:
    if image is None:
        raise MissingInputError("no image uploaded", field="image")

    try:
        content = await image.read()
        logger.info(
            "Received face analysis request: filename=%s, size=%d bytes",
            image.filename or "unknown",
            len(content),
        )
        return await service.analyze(content)
    finally:
        await image.close()
