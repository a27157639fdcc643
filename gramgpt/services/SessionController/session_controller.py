"""
Conversation session controller.

Owns the transcript and the provider session handle, and is the only place
either of them is mutated. A send commits in two phases: the user turn is
appended as soon as the input is normalized, the model turn only if the
provider call succeeds.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass

from gramgpt.entities.errors import FileReadError
from gramgpt.entities.message import Part, Turn, model_turn, user_turn
from gramgpt.services.GeminiService.chat_session_interface import (
    ChatSessionFactory,
    ChatSessionInterface,
)
from gramgpt.services.InputNormalizer.image_file_interface import ImageFileInterface
from gramgpt.services.InputNormalizer.input_normalizer import InputNormalizer
from gramgpt.services.SessionController.session_controller_interface import (
    SendOutcome,
    SendStatus,
    SessionControllerInterface,
    SessionState,
)


FILE_ERROR_MESSAGE = "Failed to process the image file."
PROVIDER_ERROR_MESSAGE = "দুঃখিত, একটি সমস্যা হয়েছে। অনুগ্রহ করে আবার চেষ্টা করুন।"
INIT_ERROR_MESSAGE = (
    "গ্রামজিপিটি চালু করা যায়নি। API কী সেট করা আছে কিনা দেখে অ্যাপটি আবার চালু করুন।"
)


@dataclass(frozen=True)
class ProviderReply:
    text: str


@dataclass(frozen=True)
class ProviderFailure:
    error: Exception


ProviderResult = ProviderReply | ProviderFailure


class SessionController(SessionControllerInterface):
    def __init__(
        self,
        session_factory: ChatSessionFactory,
        normalizer: InputNormalizer,
        logger: logging.Logger,
    ) -> None:
        self.session_factory = session_factory
        self.normalizer = normalizer
        self.logger = logger
        self._session: ChatSessionInterface | None = None
        self._state: SessionState = SessionState.INITIALIZING
        self._transcript: list[Turn] = []
        self._error_message: str | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def transcript(self) -> tuple[Turn, ...]:
        return tuple(copy.deepcopy(self._transcript))

    @property
    def is_sending(self) -> bool:
        return self._state is SessionState.SENDING

    @property
    def error_message(self) -> str | None:
        return self._error_message

    def initialize(self) -> SessionState:
        if self._state is not SessionState.INITIALIZING:
            self.logger.debug("Session already initialized (%s)", self._state.value)
            return self._state

        try:
            self._session = self.session_factory()
        except Exception as exc:
            self.logger.error("Failed to initialize chat session: %s", exc)
            self._session = None
            self._error_message = INIT_ERROR_MESSAGE
            self._state = SessionState.INIT_FAILED
            return self._state

        self._state = SessionState.IDLE
        self.logger.info("Chat session ready")
        return self._state

    async def send(
        self, text: str, file: ImageFileInterface | None = None
    ) -> SendOutcome:
        """
        Run one accept → normalize → append → invoke → reconcile cycle.

        Rejected sends leave transcript and error untouched. Every accepted
        send ends back in IDLE whatever happens in between.

        Args:
            text: Raw text from the composer
            file: Optional attached image

        Returns:
            Tagged outcome describing what happened to the transcript
        """
        if self._state is not SessionState.IDLE or self._session is None:
            self.logger.warning("Ignoring send while session is %s", self._state.value)
            return SendOutcome(SendStatus.REJECTED)

        if not (text or "").strip() and file is None:
            self.logger.warning("Ignoring send with empty input")
            return SendOutcome(SendStatus.REJECTED)

        # Claimed before the first await so a second send cannot slip in.
        self._state = SessionState.SENDING
        self._error_message = None
        try:
            try:
                parts = await self.normalizer.normalize(text, file)
            except (FileReadError, ValueError) as exc:
                self.logger.error("Error converting file: %s", exc)
                self._error_message = FILE_ERROR_MESSAGE
                return SendOutcome(
                    SendStatus.FILE_ERROR, error_message=self._error_message
                )
            except Exception as exc:
                self.logger.error(
                    "Unexpected error building message: %s", exc, exc_info=True
                )
                self._error_message = FILE_ERROR_MESSAGE
                return SendOutcome(
                    SendStatus.FILE_ERROR, error_message=self._error_message
                )

            self._transcript.append(user_turn(parts))

            result = await self._invoke_provider(self._session, parts)
            if isinstance(result, ProviderFailure):
                self._error_message = PROVIDER_ERROR_MESSAGE
                return SendOutcome(
                    SendStatus.PROVIDER_ERROR, error_message=self._error_message
                )

            turn = model_turn(result.text)
            self._transcript.append(turn)
            return SendOutcome(SendStatus.REPLIED, model_turn=copy.deepcopy(turn))
        finally:
            self._state = SessionState.IDLE

    async def _invoke_provider(
        self, session: ChatSessionInterface, parts: list[Part]
    ) -> ProviderResult:
        try:
            text = await session.send_message(parts)
        except Exception as exc:
            self.logger.error("Provider call failed: %s", exc, exc_info=True)
            return ProviderFailure(exc)

        if not text:
            self.logger.warning("Provider returned an empty reply")
            return ProviderFailure(ValueError("Empty reply"))

        return ProviderReply(text)
