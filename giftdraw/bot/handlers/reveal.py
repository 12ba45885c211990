from __future__ import annotations

from aiogram import Router, types

from giftdraw.bot.filters import PhaseFilter, is_plain_text
from giftdraw.bot.screens import awaiting_code_screen, revealed_screen
from giftdraw.bot.utils import SLOW_DOWN, SOMETHING_WRONG, check_rate_limit, log_handler_exception, safe_delete
from giftdraw.services.reveal import EmptyCode, InvalidCode, Phase, RevealController

router = Router()


@router.message(PhaseFilter(Phase.AWAITING_CODE), is_plain_text)
async def redeem_code_handler(message: types.Message, controller: RevealController) -> None:
    if not check_rate_limit(message.from_user.id, "redeem"):
        await message.answer(SLOW_DOWN)
        return

    try:
        controller.redeem(message.text)
    except EmptyCode as exc:
        await message.answer(str(exc))
        return
    except InvalidCode as exc:
        await safe_delete(message)
        await message.answer(f"❌ {exc}")
        return
    except Exception as exc:
        log_handler_exception("redeem", message.from_user.id, message.chat.id, exc)
        await message.answer(SOMETHING_WRONG)
        return

    await safe_delete(message)
    text, keyboard = revealed_screen(controller)
    await message.answer(text, reply_markup=keyboard)


@router.message(PhaseFilter(Phase.REVEALED), is_plain_text)
async def revealed_message_handler(message: types.Message) -> None:
    await safe_delete(message)
    await message.answer("Tap Back on the result first, then type the next code.")


@router.callback_query(PhaseFilter(Phase.REVEALED), lambda c: c.data == "back")
async def back_callback_handler(query: types.CallbackQuery, controller: RevealController) -> None:
    if not check_rate_limit(query.from_user.id, "back"):
        await query.answer(SLOW_DOWN, show_alert=True)
        return

    try:
        controller.back_to_code_entry()
        # nothing of the previous result may remain visible
        await safe_delete(query.message)
        text, keyboard = awaiting_code_screen()
        await query.message.answer(text, reply_markup=keyboard)
        await query.answer()
    except Exception as exc:
        log_handler_exception("back", query.from_user.id, query.message.chat.id, exc)
        await query.answer(SOMETHING_WRONG, show_alert=True)
