import base64
import logging
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from gramgpt.entities.errors import InitializationError, ProviderError
from gramgpt.services.GeminiService.gemini_service import (
    DEFAULT_MODEL_NAME,
    GeminiChatSession,
    to_genai_parts,
)


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("GeminiChatSessionTest")


@pytest.fixture
def chat() -> MagicMock:
    chat = MagicMock()
    chat.send_message = AsyncMock()
    return chat


@pytest.fixture
def session(chat: MagicMock, logger: logging.Logger) -> GeminiChatSession:
    return GeminiChatSession(chat=chat, model_name=DEFAULT_MODEL_NAME, logger=logger)


class TestCreate:
    def test_missing_api_key_raises_initialization_error(
        self, logger: logging.Logger
    ) -> None:
        with patch("gramgpt.services.GeminiService.gemini_service.genai.Client") as client:
            with pytest.raises(InitializationError) as exc_info:
                GeminiChatSession.create(
                    api_key="  ", model_name=DEFAULT_MODEL_NAME, logger=logger
                )

        assert "API_KEY" in str(exc_info.value)
        client.assert_not_called()

    def test_creates_chat_for_model(self, logger: logging.Logger) -> None:
        with patch("gramgpt.services.GeminiService.gemini_service.genai.Client") as client:
            session = GeminiChatSession.create(
                api_key="secret", model_name="gemini-2.5-flash", logger=logger
            )

        client.assert_called_once_with(api_key="secret")
        client.return_value.aio.chats.create.assert_called_once_with(
            model="gemini-2.5-flash"
        )
        assert session.chat is client.return_value.aio.chats.create.return_value
        assert session.model_name == "gemini-2.5-flash"

    def test_sdk_failure_becomes_initialization_error(
        self, logger: logging.Logger
    ) -> None:
        with patch(
            "gramgpt.services.GeminiService.gemini_service.genai.Client",
            side_effect=ValueError("bad key format"),
        ):
            with pytest.raises(InitializationError):
                GeminiChatSession.create(
                    api_key="secret", model_name=DEFAULT_MODEL_NAME, logger=logger
                )


def test_to_genai_parts_preserves_order_and_decodes_images() -> None:
    payload = b"\x89PNG"
    parts = to_genai_parts(
        [
            {
                "inline_data": {
                    "mime_type": "image/png",
                    "data": base64.b64encode(payload).decode("ascii"),
                }
            },
            {"text": "এটা কী?"},
        ]
    )

    assert len(parts) == 2
    assert parts[0].inline_data.data == payload
    assert parts[0].inline_data.mime_type == "image/png"
    assert parts[1].text == "এটা কী?"


class TestSendMessage:
    @pytest.mark.asyncio
    async def test_returns_response_text(
        self, session: GeminiChatSession, chat: MagicMock
    ) -> None:
        chat.send_message.return_value = SimpleNamespace(text="নমস্কার")

        reply = await session.send_message([{"text": "হ্যালো"}])

        assert reply == "নমস্কার"
        sent = chat.send_message.call_args[0][0]
        assert len(sent) == 1
        assert sent[0].text == "হ্যালো"

    @pytest.mark.asyncio
    async def test_sdk_error_becomes_provider_error(
        self, session: GeminiChatSession, chat: MagicMock
    ) -> None:
        chat.send_message.side_effect = RuntimeError("503 unavailable")

        with pytest.raises(ProviderError):
            await session.send_message([{"text": "হ্যালো"}])

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", [None, ""])
    async def test_empty_response_becomes_provider_error(
        self, session: GeminiChatSession, chat: MagicMock, text: str | None
    ) -> None:
        chat.send_message.return_value = SimpleNamespace(text=text)

        with pytest.raises(ProviderError):
            await session.send_message([{"text": "হ্যালো"}])

    @pytest.mark.asyncio
    async def test_no_parts_is_refused_without_calling_sdk(
        self, session: GeminiChatSession, chat: MagicMock
    ) -> None:
        with pytest.raises(ProviderError):
            await session.send_message([])

        chat.send_message.assert_not_called()
