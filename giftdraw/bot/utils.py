from __future__ import annotations

from aiogram import types
from aiogram.exceptions import TelegramAPIError
from loguru import logger

from giftdraw.services import rate_limit

SLOW_DOWN = "You're doing that too often. Please slow down."
SOMETHING_WRONG = "Something went wrong. Please try again later."


def check_rate_limit(user_id: int, action: str) -> bool:
    key = f"{user_id}:{action}"
    result = rate_limit.rate_limiter.allow(key)
    return result.allowed


async def safe_delete(message: types.Message) -> bool:
    try:
        await message.delete()
    except TelegramAPIError as exc:  # pragma: no cover - network dependent
        logger.bind(chat_id=message.chat.id, message_id=message.message_id).warning(
            "Failed to delete message: {error}", error=str(exc)
        )
        return False
    return True


def log_handler_exception(action: str, user_id: int | None, chat_id: int | None, error: Exception) -> None:
    logger.bind(action=action, user_id=user_id, chat_id=chat_id).exception(
        "Handler error: {error}", error=str(error)
    )
