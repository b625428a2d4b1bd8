"""
Relay Hub Backend: Chat Completion Relay
===========================================

What:  Sends one user message to the chat-completion API and returns the
       text of the first choice.
How:   Wraps the message in a single-turn completion payload, POSTs it with a
       bearer token, then reads choices[0].message.content from the reply.
Who:   Called by POST /api/chat.

Payload sent upstream:
    {
        "model": "llama-2-70b-chat",
        "messages": [{"role": "user", "content": "<message>"}],
        "temperature": 0.7,
        "max_tokens": 2000
    }

Unlike the face and weather relays, this one reshapes the reply. A body that
decodes but lacks choices/message/content is an UpstreamError too.
"""

import logging
from typing import Any, Dict, Optional

import httpx
from fastapi import Depends

from app.config import Settings, get_settings
from app.exceptions import UpstreamError
from app.services.http_client import get_http_client
from app.services.upstream_base import UpstreamService

logger = logging.getLogger(__name__)


class ChatService(UpstreamService):
    """Relay for an OpenAI-compatible chat-completion endpoint."""

    name = "chat"

    @classmethod
    def has_credentials(cls, settings: Settings) -> bool:
        return bool(settings.chat_api_key)

    def build_payload(self, message: str) -> Dict[str, Any]:
        return {
            "model": self.settings.chat_model,
            "messages": [{"role": "user", "content": message}],
            "temperature": self.settings.chat_temperature,
            "max_tokens": self.settings.chat_max_tokens,
        }

    async def complete(self, message: str) -> Optional[str]:
        """
        Ask the model for a reply to `message`.

        Returns:
            The first choice's message content, exactly as sent upstream.

        Raises:
            UpstreamError: network failure, non-JSON body, or a response
                without choices[0].message.content, or content that is
                not text.
        """
        data = await self._send_json(
            "POST",
            self.settings.chat_api_url,
            json=self.build_payload(message),
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self.settings.chat_api_key}",
            },
        )

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            logger.error(
                "chat upstream response has no choices[0].message.content (%s: %s)",
                type(e).__name__,
                str(e),
            )
            raise UpstreamError(
                upstream=self.name,
                context={"error_type": type(e).__name__},
            ) from e

        if content is not None and not isinstance(content, str):
            logger.error(
                "chat upstream content is %s, expected a string",
                type(content).__name__,
            )
            raise UpstreamError(
                upstream=self.name,
                context={"error_type": "NonTextContent", "content_type": type(content).__name__},
            )
        return content


def get_chat_service(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> ChatService:
    return ChatService(client, settings)
