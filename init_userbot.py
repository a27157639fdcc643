import asyncio

from telethon import TelegramClient
from telethon.errors import SessionPasswordNeededError

from gramgpt.dependencies.components import get_components


async def ensure_authorized(client: TelegramClient) -> None:
    if await client.is_user_authorized():
        return

    phone: str = input(
        "আপনার দেশের কোডসহ ফোন নম্বর লিখুন (যেমন +8801XXXXXXXXX): "
    )
    await client.send_code_request(phone)

    code: str = input("SMS বা Telegram-এ পাওয়া কোডটি লিখুন: ")
    password: str | None = None

    try:
        await client.sign_in(phone=phone, code=code)
    except SessionPasswordNeededError:
        password = input("আপনার অ্যাকাউন্টে 2FA চালু আছে, পাসওয়ার্ড লিখুন: ")
        await client.sign_in(password=password)


async def main() -> None:
    components = get_components(env="development", config_path="configuration")
    client: TelegramClient = components.get_component(TelegramClient)

    # Telethon creates the .session file on first login.
    await client.connect()
    await ensure_authorized(client)

    me = await client.get_me()
    name = me.username or me.first_name or "<unnamed>"
    print(f"Logged in as: {name}")
    print(f"Chat id of this account: {me.id}")

    await client.disconnect()


if __name__ == "__main__":
    asyncio.run(main())
