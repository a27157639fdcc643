import asyncio
import os

from gramgpt.bootstrap.bootstrapper import bootstrap_bot
from gramgpt.services.TelegramService.telegram_service_interface import (
    TelegramServiceInterface,
)


async def main():
    bot: TelegramServiceInterface = await bootstrap_bot(
        env=os.getenv("GRAMGPT_ENV", "development")
    )
    await bot.start()


if __name__ == "__main__":
    asyncio.run(main())
