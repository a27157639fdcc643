from __future__ import annotations

import logging
from typing import Any

from telethon import TelegramClient, events

from gramgpt.services.SessionController.session_controller_interface import (
    SendOutcome,
    SendStatus,
    SessionControllerInterface,
    SessionState,
)
from gramgpt.services.TelegramService.telegram_image_file import TelegramImageFile
from gramgpt.services.TelegramService.telegram_service_interface import (
    TelegramServiceInterface,
)
from gramgpt.services.TelegramService.texts import (
    INVALID_SUGGESTION,
    SUGGESTIONS,
    welcome_message,
)
from gramgpt.services.TelegramService.transcript_renderer import (
    render_transcript,
    split_message,
)


class TelegramService(TelegramServiceInterface):
    """Chat surface for the single conversation, bound to one Telegram chat."""

    def __init__(
        self,
        controller: SessionControllerInterface,
        telegram_client: TelegramClient,
        logger: logging.Logger,
        chat_id: int,
    ) -> None:
        self.controller = controller
        self.bot: TelegramClient = telegram_client
        self.logger: logging.Logger = logger
        self.chat_id: int = chat_id
        self.logger.info("TelegramService initialized for chat %s", self.chat_id)

    @classmethod
    async def create(
        cls,
        controller: SessionControllerInterface,
        telegram_client: TelegramClient,
        logger: logging.Logger,
        chat_id: int,
    ) -> TelegramService:
        """Factory to perform async setup steps before returning the service."""
        service = cls(
            controller=controller,
            telegram_client=telegram_client,
            logger=logger,
            chat_id=chat_id,
        )
        service.bot.add_event_handler(service._my_event_handler, events.NewMessage)
        return service

    async def start(self) -> None:
        self.logger.info("Starting Telegram client...")
        await self.bot.start()
        self.logger.info("Telegram client started.")
        await self.bot.run_until_disconnected()

    def _should_respond(self, event) -> bool:
        if getattr(event, "out", False):
            return False
        return event.chat_id == self.chat_id

    async def _my_event_handler(self, event) -> None:
        if not self._should_respond(event):
            self.logger.debug("Ignoring message from chat %s", event.chat_id)
            return

        raw_message: str = (event.raw_text or "").strip()
        command = raw_message.split(maxsplit=1)[0].lower() if raw_message else ""

        if command in ("/start", "/help"):
            await self._reply(event, welcome_message())
            return

        if command == "/history":
            await self._reply(event, render_transcript(self.controller.transcript))
            return

        if command == "/suggest":
            await self._handle_suggest_command(event, raw_message)
            return

        message = getattr(event, "message", None) or event
        image_file = TelegramImageFile.from_message(message)
        await self._send_to_model(event, raw_message, image_file)

    async def _handle_suggest_command(self, event, raw_message: str) -> None:
        parts = raw_message.split()
        index = int(parts[1]) if len(parts) > 1 and parts[1].isdigit() else 0
        if not 1 <= index <= len(SUGGESTIONS):
            await self._reply(event, INVALID_SUGGESTION.format(count=len(SUGGESTIONS)))
            return

        await self._send_to_model(event, SUGGESTIONS[index - 1], None)

    async def _send_to_model(
        self, event, text: str, image_file: TelegramImageFile | None
    ) -> None:
        if self.controller.state is SessionState.INIT_FAILED:
            await self._reply(event, self.controller.error_message or "")
            return

        async with self.bot.action(event.chat_id, "typing"):
            outcome: SendOutcome = await self.controller.send(text, image_file)

        if outcome.status is SendStatus.REJECTED:
            self.logger.debug("Send rejected in state %s", self.controller.state.value)
            return

        if outcome.status is SendStatus.REPLIED and outcome.model_turn is not None:
            reply_text = "\n".join(
                part.get("text", "") for part in outcome.model_turn["parts"]
            )
            await self._reply(event, reply_text)
            return

        await self._reply(event, outcome.error_message or "")

    async def _reply(self, event: Any, text: str) -> None:
        if not text:
            return
        try:
            for chunk in split_message(text):
                await event.reply(chunk)
        except Exception as exc:
            self.logger.error("Failed to deliver reply to chat %s: %s", event.chat_id, exc)
