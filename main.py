from __future__ import annotations

import asyncio
import sys

from aiogram import Bot
from aiogram.types import BotCommand, BotCommandScopeDefault
from loguru import logger

from giftdraw.bot import create_bot, create_dispatcher
from giftdraw.core.config import load_settings
from giftdraw.core.logging import setup_logging
from giftdraw.db import init_engine
from giftdraw.services.rate_limit import configure_rate_limiter
from giftdraw.services.reveal import RevealController
from giftdraw.services.sharing import CopiedIndicator
from giftdraw.services.store import DrawStore


USERS_COMMANDS: dict[str, str] = {
    "start": "show the current screen",
    "reset": "erase the draw and start over",
}


async def set_default_commands(bot: Bot) -> None:
    await bot.set_my_commands(
        [
            BotCommand(command=command, description=description)
            for command, description in USERS_COMMANDS.items()
        ],
        scope=BotCommandScopeDefault(),
    )


async def on_startup(bot: Bot, controller: RevealController) -> None:
    logger.info("bot starting...")

    await set_default_commands(bot)

    bot_info = await bot.get_me()

    logger.info("Name     - {name}", name=bot_info.full_name)
    logger.info("Username - @{username}", username=bot_info.username)
    logger.info("ID       - {id}", id=bot_info.id)
    logger.info("Phase    - {phase}", phase=controller.phase.value)

    logger.info("bot started")


async def on_shutdown(bot: Bot) -> None:
    logger.info("bot stopping...")

    await bot.session.close()

    logger.info("bot stopped")


async def main() -> None:
    settings = load_settings()
    setup_logging(settings.log_level, settings.log_path)
    init_engine(settings.database_url, create_schema=settings.database_url.startswith("sqlite"))
    configure_rate_limiter(settings.rate_limit_calls, settings.rate_limit_period)

    controller = RevealController.start(DrawStore(settings.session_key))
    indicator = CopiedIndicator(settings.copied_indicator_seconds)

    bot = create_bot(settings)
    dp = create_dispatcher(controller, indicator)
    dp.startup.register(on_startup)
    dp.shutdown.register(on_shutdown)

    await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())


if __name__ == "__main__":
    if sys.platform == "win32":
        asyncio.run(main())
    else:
        import uvloop

        uvloop.run(main())
