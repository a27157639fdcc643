from gramgpt.dependencies.components import get_components
from gramgpt.dependencies.services import get_session_controller, get_telegram_service
from gramgpt.services.SessionController.session_controller_interface import (
    SessionControllerInterface,
)
from gramgpt.services.TelegramService.telegram_service_interface import (
    TelegramServiceInterface,
)


async def bootstrap_bot(
    env: str = "development",
    config_path: str = "configuration",
) -> TelegramServiceInterface:
    components = get_components(env=env, config_path=config_path)
    controller: SessionControllerInterface = get_session_controller(components)

    bot: TelegramServiceInterface = await get_telegram_service(components, controller)
    return bot
