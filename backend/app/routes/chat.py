"""
Relay Hub Backend: Chat Route Handler
========================================

What:  Handles POST /api/chat with a JSON body `{"message": "..."}`.
How:   Validates presence of the message, delegates to ChatService, and
       wraps the model's reply as `{"response": "..."}`.

Error responses (handled by global exception handlers):
    HTTP 400: body absent, message absent or empty (MissingInputError)
    HTTP 400: body is not valid JSON (RequestValidationError)
    HTTP 500: upstream failed or replied without a completion (UpstreamError)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends

from app.exceptions import MissingInputError
from app.schemas.proxy import ChatRequest, ChatResponse, ErrorResponse
from app.services.chat_service import ChatService, get_chat_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Chat"])


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        400: {"description": "Message missing", "model": ErrorResponse},
        500: {"description": "Upstream unreachable or invalid", "model": ErrorResponse},
    },
    summary="Send one message to the chat model",
)
async def chat(
    payload: Optional[ChatRequest] = Body(default=None),
    service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """
    Forward a single user turn and return the first completion choice.

    Each call is independent: no conversation history is kept between
    requests.
    """
    if payload is None or not payload.message:
        raise MissingInputError("message required", field="message")

    # Message content is not logged (may contain personal data)
    logger.info("Received chat request: %d chars", len(payload.message))

    reply = await service.complete(payload.message)
    return ChatResponse(response=reply)
