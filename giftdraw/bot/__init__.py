from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from giftdraw.bot.handlers import router as handlers_router
from giftdraw.core.config import Settings
from giftdraw.services.reveal import RevealController
from giftdraw.services.sharing import CopiedIndicator


def create_bot(settings: Settings) -> Bot:
    return Bot(token=settings.bot_token, default=DefaultBotProperties(parse_mode=ParseMode.HTML))


def create_dispatcher(controller: RevealController, indicator: CopiedIndicator) -> Dispatcher:
    """Handlers receive ``controller`` and ``indicator`` as injected arguments."""
    dp = Dispatcher(controller=controller, indicator=indicator)
    dp.include_router(handlers_router)
    return dp
