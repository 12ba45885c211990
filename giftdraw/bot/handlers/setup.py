from __future__ import annotations

from aiogram import Router, types

from giftdraw.bot.filters import PhaseFilter, is_plain_text
from giftdraw.bot.keyboards import RemoveParticipant, resolve_participant
from giftdraw.bot.screens import codes_screen, setup_screen
from giftdraw.bot.utils import SLOW_DOWN, SOMETHING_WRONG, check_rate_limit, log_handler_exception
from giftdraw.services.draw import DrawError
from giftdraw.services.reveal import Phase, RevealController
from giftdraw.services.sharing import CopiedIndicator
from giftdraw.services.store import DrawStoreError

router = Router()
router.message.filter(PhaseFilter(Phase.SETUP))
router.callback_query.filter(PhaseFilter(Phase.SETUP))


@router.message(is_plain_text)
async def add_participants_handler(message: types.Message, controller: RevealController) -> None:
    if not check_rate_limit(message.from_user.id, "add"):
        await message.answer(SLOW_DOWN)
        return

    try:
        added = [name for name in message.text.splitlines() if controller.add_participant(name)]
        if not added:
            # empty names and duplicates leave the roster unchanged
            await message.answer("Nothing added: that name is empty or already on the list.")
            return

        text, keyboard = setup_screen(controller)
        await message.answer(text, reply_markup=keyboard)
    except Exception as exc:
        log_handler_exception("add", message.from_user.id, message.chat.id, exc)
        await message.answer(SOMETHING_WRONG)


@router.callback_query(RemoveParticipant.filter())
async def remove_participant_handler(
    query: types.CallbackQuery,
    callback_data: RemoveParticipant,
    controller: RevealController,
) -> None:
    if not check_rate_limit(query.from_user.id, "remove"):
        await query.answer(SLOW_DOWN, show_alert=True)
        return

    try:
        name = resolve_participant((p.name for p in controller.participants), callback_data.key)
        if name is None:
            await query.answer("That participant is no longer on the list.")
            return

        controller.remove_participant(name)
        text, keyboard = setup_screen(controller)
        await query.message.edit_text(text, reply_markup=keyboard)
        await query.answer()
    except Exception as exc:
        log_handler_exception("remove", query.from_user.id, query.message.chat.id, exc)
        await query.answer(SOMETHING_WRONG, show_alert=True)


@router.callback_query(lambda c: c.data == "draw")
async def draw_callback_handler(
    query: types.CallbackQuery,
    controller: RevealController,
    indicator: CopiedIndicator,
) -> None:
    if not check_rate_limit(query.from_user.id, "draw"):
        await query.answer(SLOW_DOWN, show_alert=True)
        return

    try:
        controller.perform_draw()
    except (DrawError, DrawStoreError) as exc:
        await query.answer(str(exc), show_alert=True)
        return
    except Exception as exc:
        log_handler_exception("draw", query.from_user.id, query.message.chat.id, exc)
        await query.answer(SOMETHING_WRONG, show_alert=True)
        return

    text, keyboard = codes_screen(controller, indicator)
    await query.message.edit_text(text, reply_markup=keyboard)
    await query.answer("Draw complete!")
