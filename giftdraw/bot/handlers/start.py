from aiogram import Router, types
from aiogram.filters import Command, CommandStart

from giftdraw.bot.keyboards import confirm_reset_keyboard
from giftdraw.bot.screens import current_screen, setup_screen
from giftdraw.bot.utils import SLOW_DOWN, SOMETHING_WRONG, check_rate_limit, log_handler_exception
from giftdraw.services.reveal import RevealController
from giftdraw.services.sharing import CopiedIndicator

router = Router()

RESET_PROMPT = (
    "Are you sure you want to start a new draw? "
    "This erases the current draw and nobody will be able to redeem their code."
)


@router.message(CommandStart())
async def command_start_handler(
    message: types.Message,
    controller: RevealController,
    indicator: CopiedIndicator,
) -> None:
    if not check_rate_limit(message.from_user.id, "start"):
        await message.answer(SLOW_DOWN)
        return

    try:
        text, keyboard = current_screen(controller, indicator)
        await message.answer(text, reply_markup=keyboard)
    except Exception as exc:
        log_handler_exception("start", message.from_user.id, message.chat.id, exc)
        await message.answer(SOMETHING_WRONG)


@router.message(Command("reset"))
async def reset_command_handler(message: types.Message) -> None:
    if not check_rate_limit(message.from_user.id, "reset"):
        await message.answer(SLOW_DOWN)
        return

    await message.answer(RESET_PROMPT, reply_markup=confirm_reset_keyboard())


@router.callback_query(lambda c: c.data == "reset")
async def reset_callback_handler(query: types.CallbackQuery) -> None:
    if not check_rate_limit(query.from_user.id, "reset"):
        await query.answer(SLOW_DOWN, show_alert=True)
        return

    await query.message.answer(RESET_PROMPT, reply_markup=confirm_reset_keyboard())
    await query.answer()


@router.callback_query(lambda c: c.data in {"confirm_reset", "cancel_reset"})
async def confirm_reset_callback_handler(
    query: types.CallbackQuery,
    controller: RevealController,
    indicator: CopiedIndicator,
) -> None:
    if not check_rate_limit(query.from_user.id, "confirm_reset"):
        await query.answer(SLOW_DOWN, show_alert=True)
        return

    try:
        if not controller.reset(confirmed=query.data == "confirm_reset"):
            await query.message.edit_text("Kept the current draw.")
            await query.answer()
            return

        indicator.clear()
        await query.message.edit_text("The draw was erased. Starting over.")
        text, keyboard = setup_screen(controller)
        await query.message.answer(text, reply_markup=keyboard)
        await query.answer()
    except Exception as exc:
        log_handler_exception("confirm_reset", query.from_user.id, query.message.chat.id, exc)
        await query.answer(SOMETHING_WRONG, show_alert=True)
