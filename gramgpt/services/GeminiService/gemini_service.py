"""
Gemini chat session backed by the Google Gen AI SDK.

The SDK's async chat keeps the conversation history on its side, so each call
only carries the parts of the newest user message.
"""

from __future__ import annotations

import base64
import logging
from typing import Any

from google import genai
from google.genai import types
from langfuse import observe

from gramgpt.entities.errors import InitializationError, ProviderError
from gramgpt.entities.message import Part
from gramgpt.services.GeminiService.chat_session_interface import (
    ChatSessionInterface,
)


DEFAULT_MODEL_NAME = "gemini-2.5-flash"


def to_genai_parts(parts: list[Part]) -> list[types.Part]:
    """Convert transcript parts into SDK parts, preserving their order."""
    converted: list[types.Part] = []
    for part in parts:
        inline_data = part.get("inline_data")
        if inline_data is not None:
            converted.append(
                types.Part.from_bytes(
                    data=base64.b64decode(inline_data["data"]),
                    mime_type=inline_data["mime_type"],
                )
            )
        text = part.get("text")
        if text:
            converted.append(types.Part.from_text(text=text))
    return converted


class GeminiChatSession(ChatSessionInterface):
    """Single stateful Gemini conversation, created once per run."""

    def __init__(self, chat: Any, model_name: str, logger: logging.Logger) -> None:
        self.chat = chat
        self.model_name = model_name
        self.logger = logger

    @classmethod
    def create(
        cls, api_key: str, model_name: str, logger: logging.Logger
    ) -> GeminiChatSession:
        """
        Create the client and open a chat addressed to ``model_name``.

        Raises:
            InitializationError: If the credential is missing or the SDK
                refuses to build the client
        """
        if not api_key or not api_key.strip():
            raise InitializationError(
                "API_KEY environment variable is not set or is empty."
            )

        try:
            client = genai.Client(api_key=api_key.strip())
            chat = client.aio.chats.create(model=model_name)
        except Exception as exc:
            raise InitializationError(
                f"Could not create Gemini chat session: {exc}"
            ) from exc

        logger.info("Gemini chat session created. Model: %s", model_name)
        return cls(chat=chat, model_name=model_name, logger=logger)

    @observe()
    async def send_message(self, parts: list[Part]) -> str:
        genai_parts = to_genai_parts(parts)
        if not genai_parts:
            raise ProviderError("Refusing to send a message without parts")

        try:
            response = await self.chat.send_message(genai_parts)
        except Exception as exc:
            raise ProviderError(f"Gemini request failed: {exc}") from exc

        text = getattr(response, "text", None)
        if not text:
            raise ProviderError("Gemini returned an empty response")

        self.logger.info(
            "Received %d characters from model %s", len(text), self.model_name
        )
        return text
