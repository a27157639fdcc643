from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TypedDict

from gramgpt.entities.message import Turn
from gramgpt.services.InputNormalizer.image_file_interface import ImageFileInterface


class SessionState(str, Enum):
    INITIALIZING = "initializing"
    INIT_FAILED = "init_failed"
    IDLE = "idle"
    SENDING = "sending"


class SendStatus(str, Enum):
    REJECTED = "rejected"
    REPLIED = "replied"
    FILE_ERROR = "file_error"
    PROVIDER_ERROR = "provider_error"


@dataclass(frozen=True)
class SendOutcome:
    """Result of one send command, as seen by the rendering layer."""

    status: SendStatus
    model_turn: Turn | None = None
    error_message: str | None = None


class SessionView(TypedDict):
    """Everything a frame of the chat surface needs to render."""

    state: SessionState
    transcript: tuple[Turn, ...]
    is_sending: bool
    error_message: str | None


class SessionControllerInterface(ABC):
    @property
    @abstractmethod
    def state(self) -> SessionState:
        """Current lifecycle state."""

    @property
    @abstractmethod
    def transcript(self) -> tuple[Turn, ...]:
        """Read-only snapshot of the conversation so far."""

    @property
    @abstractmethod
    def is_sending(self) -> bool:
        """True while a provider call is in flight."""

    @property
    @abstractmethod
    def error_message(self) -> str | None:
        """Last user-visible error, if any."""

    @abstractmethod
    def initialize(self) -> SessionState:
        """Create the provider session once; never retried."""

    @abstractmethod
    async def send(
        self, text: str, file: ImageFileInterface | None = None
    ) -> SendOutcome:
        """Submit one user message and wait for the model turn or an error."""

    def snapshot(self) -> SessionView:
        return {
            "state": self.state,
            "transcript": self.transcript,
            "is_sending": self.is_sending,
            "error_message": self.error_message,
        }
