from __future__ import annotations

import asyncio
import html
from typing import Set

from aiogram import Router, types
from aiogram.exceptions import TelegramAPIError
from aiogram.types import BufferedInputFile
from loguru import logger

from giftdraw.bot.filters import PhaseFilter
from giftdraw.bot.keyboards import CopyCode, resolve_participant
from giftdraw.bot.screens import awaiting_code_screen, codes_screen
from giftdraw.bot.utils import SLOW_DOWN, SOMETHING_WRONG, check_rate_limit, log_handler_exception
from giftdraw.services.reveal import Phase, RevealController
from giftdraw.services.sharing import CopiedIndicator, format_code_list, format_printable_sheet

router = Router()
router.callback_query.filter(PhaseFilter(Phase.CODES))

_refresh_tasks: Set[asyncio.Task] = set()


async def _refresh_marks_later(
    message: types.Message,
    controller: RevealController,
    indicator: CopiedIndicator,
) -> None:
    await asyncio.sleep(indicator.duration)
    if controller.phase != Phase.CODES:
        return
    _, keyboard = codes_screen(controller, indicator)
    try:
        await message.edit_reply_markup(reply_markup=keyboard)
    except TelegramAPIError as exc:  # pragma: no cover - network dependent
        logger.bind(chat_id=message.chat.id).debug("Copied mark refresh skipped: {error}", error=str(exc))


def _schedule_refresh(
    message: types.Message,
    controller: RevealController,
    indicator: CopiedIndicator,
) -> asyncio.Task:
    task = asyncio.create_task(_refresh_marks_later(message, controller, indicator))
    _refresh_tasks.add(task)
    task.add_done_callback(_refresh_done)
    return task


def _refresh_done(task: asyncio.Task) -> None:
    _refresh_tasks.discard(task)
    if not task.cancelled() and task.exception() is not None:
        logger.opt(exception=task.exception()).warning("Copied mark refresh failed")


@router.callback_query(CopyCode.filter())
async def copy_code_handler(
    query: types.CallbackQuery,
    callback_data: CopyCode,
    controller: RevealController,
    indicator: CopiedIndicator,
) -> None:
    if not check_rate_limit(query.from_user.id, "copy"):
        await query.answer(SLOW_DOWN, show_alert=True)
        return

    codes = dict(controller.code_sheet())
    giver = resolve_participant(codes, callback_data.key)
    if giver is None:
        await query.answer("Unknown code.")
        return

    code = codes[giver]
    try:
        await query.message.answer(f"<code>{code}</code>")
    except TelegramAPIError as exc:
        logger.bind(chat_id=query.message.chat.id).warning("Copy failed: {error}", error=str(exc))
        await query.answer("Could not copy the code.", show_alert=True)
        return

    indicator.mark(code)
    await query.answer("Copied! Tap the code to copy it.")
    try:
        _, keyboard = codes_screen(controller, indicator)
        await query.message.edit_reply_markup(reply_markup=keyboard)
        _schedule_refresh(query.message, controller, indicator)
    except TelegramAPIError as exc:  # pragma: no cover - network dependent
        logger.bind(chat_id=query.message.chat.id).debug("Copied mark not shown: {error}", error=str(exc))


@router.callback_query(lambda c: c.data == "copy_all")
async def copy_all_handler(query: types.CallbackQuery, controller: RevealController) -> None:
    if not check_rate_limit(query.from_user.id, "copy_all"):
        await query.answer(SLOW_DOWN, show_alert=True)
        return

    text = format_code_list(controller.code_sheet())
    try:
        await query.message.answer(f"<pre>{html.escape(text)}</pre>")
    except TelegramAPIError as exc:
        logger.bind(chat_id=query.message.chat.id).warning("Bulk copy failed: {error}", error=str(exc))
        await query.answer("Could not copy the codes.", show_alert=True)
        return
    await query.answer("All codes copied!")


@router.callback_query(lambda c: c.data == "print")
async def print_codes_handler(query: types.CallbackQuery, controller: RevealController) -> None:
    if not check_rate_limit(query.from_user.id, "print"):
        await query.answer(SLOW_DOWN, show_alert=True)
        return

    sheet = format_printable_sheet(controller.code_sheet())
    try:
        await query.message.answer_document(
            BufferedInputFile(sheet.encode("utf-8"), filename="codes.txt"),
            caption="Print this sheet and cut it into slips.",
        )
        await query.answer()
    except Exception as exc:
        log_handler_exception("print", query.from_user.id, query.message.chat.id, exc)
        await query.answer(SOMETHING_WRONG, show_alert=True)


@router.callback_query(lambda c: c.data == "to_reveal")
async def continue_to_reveal_handler(
    query: types.CallbackQuery,
    controller: RevealController,
    indicator: CopiedIndicator,
) -> None:
    if not check_rate_limit(query.from_user.id, "to_reveal"):
        await query.answer(SLOW_DOWN, show_alert=True)
        return

    try:
        controller.continue_to_reveal()
        indicator.clear()
        # the code list must not stay on screen for the next person
        await query.message.edit_text("Codes handed out.")
        text, keyboard = awaiting_code_screen()
        await query.message.answer(text, reply_markup=keyboard)
        await query.answer()
    except Exception as exc:
        log_handler_exception("to_reveal", query.from_user.id, query.message.chat.id, exc)
        await query.answer(SOMETHING_WRONG, show_alert=True)
