import os

from telethon import TelegramClient

from gramgpt.bootstrap.components import Components
from gramgpt.components.configuration.configuration import Configuration
from gramgpt.components.logger.logger import Logger
from gramgpt.services.GeminiService.chat_session_interface import (
    ChatSessionFactory,
    ChatSessionInterface,
)
from gramgpt.services.GeminiService.gemini_service import (
    DEFAULT_MODEL_NAME,
    GeminiChatSession,
)
from gramgpt.services.InputNormalizer.input_normalizer import (
    DEFAULT_MAX_IMAGE_BYTES,
    InputNormalizer,
)
from gramgpt.services.SessionController.session_controller import SessionController
from gramgpt.services.SessionController.session_controller_interface import (
    SessionControllerInterface,
)
from gramgpt.services.TelegramService.telegram_service import TelegramService
from gramgpt.services.TelegramService.telegram_service_interface import (
    TelegramServiceInterface,
)


def get_chat_session_factory(components: Components) -> ChatSessionFactory:
    """
    Build the factory the controller calls once during initialization.

    The credential is read from the process environment (API_KEY) at call time
    so that a missing key surfaces as an initialization failure, not a crash.
    """
    configuration = components.get_component(Configuration)
    logger = components.get_component(Logger).get_logger("GeminiChatSession")
    model_name = configuration.get_configuration(
        "MODEL_NAME", str, default=DEFAULT_MODEL_NAME
    )

    def create_session() -> ChatSessionInterface:
        return GeminiChatSession.create(
            api_key=os.getenv("API_KEY", ""),
            model_name=model_name or DEFAULT_MODEL_NAME,
            logger=logger,
        )

    return create_session


def get_input_normalizer(components: Components) -> InputNormalizer:
    configuration = components.get_component(Configuration)
    max_image_bytes = configuration.get_configuration(
        "MAX_IMAGE_BYTES", int, default=DEFAULT_MAX_IMAGE_BYTES
    )
    return InputNormalizer(
        logger=components.get_component(Logger).get_logger("InputNormalizer"),
        max_image_bytes=int(
            max_image_bytes if max_image_bytes is not None else DEFAULT_MAX_IMAGE_BYTES
        ),
    )


def get_session_controller(components: Components) -> SessionControllerInterface:
    controller = SessionController(
        session_factory=get_chat_session_factory(components),
        normalizer=get_input_normalizer(components),
        logger=components.get_component(Logger).get_logger("SessionController"),
    )
    controller.initialize()
    return controller


async def get_telegram_service(
    components: Components, controller: SessionControllerInterface
) -> TelegramServiceInterface:
    configuration = components.get_component(Configuration)
    chat_id: int = configuration.get_configuration("TELEGRAM_CHAT_ID", int)

    return await TelegramService.create(
        controller=controller,
        telegram_client=components.get_component(TelegramClient),
        logger=components.get_component(Logger).get_logger("TelegramService"),
        chat_id=chat_id,
    )
