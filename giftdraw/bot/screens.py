from __future__ import annotations

import html
from typing import Tuple

from aiogram.types import InlineKeyboardMarkup

from giftdraw.bot.keyboards import (
    awaiting_code_keyboard,
    codes_keyboard,
    revealed_keyboard,
    setup_keyboard,
)
from giftdraw.services.draw import MIN_PARTICIPANTS
from giftdraw.services.reveal import Phase, RevealController
from giftdraw.services.sharing import CopiedIndicator

Screen = Tuple[str, InlineKeyboardMarkup]


def setup_screen(controller: RevealController) -> Screen:
    participants = controller.participants
    lines = ["🎁 <b>Secret Santa</b>", "", f"<b>Participants ({len(participants)})</b>"]
    if participants:
        lines.extend(f"• {html.escape(p.name)}" for p in participants)
    else:
        lines.append("No participants added yet.")
    lines.append("")
    lines.append("Send names to add them, one per line. Tap a name below to remove it.")
    if not controller.can_draw:
        lines.append(f"At least {MIN_PARTICIPANTS} participants are needed to draw.")
    return "\n".join(lines), setup_keyboard(participants, controller.can_draw)


def codes_screen(controller: RevealController, indicator: CopiedIndicator) -> Screen:
    sheet = controller.code_sheet()
    lines = [
        "✓ The draw is done!",
        "<b>Hand out the codes:</b> everyone should note or copy their own code.",
        "⚠️ Then each person redeems their code alone.",
        "",
    ]
    lines.extend(f"<b>{html.escape(giver)}</b>: <code>{code}</code>" for giver, code in sheet)
    marked = indicator.marked(code for _, code in sheet)
    return "\n".join(lines), codes_keyboard(sheet, marked)


def awaiting_code_screen() -> Screen:
    text = (
        "🔐 Type your code to find out who you drew!\n"
        "Do it alone, without anyone watching."
    )
    return text, awaiting_code_keyboard()


def revealed_screen(controller: RevealController) -> Screen:
    revelation = controller.revealed
    text = (
        f"<b>{html.escape(revelation.giver)}</b>, you drew:\n\n"
        f"🎁 <b>{html.escape(revelation.receiver)}</b>\n\n"
        "⚠️ Don't tell anyone! Tap Back when you are done."
    )
    return text, revealed_keyboard()


def current_screen(controller: RevealController, indicator: CopiedIndicator) -> Screen:
    if controller.phase == Phase.SETUP:
        return setup_screen(controller)
    if controller.phase == Phase.CODES:
        return codes_screen(controller, indicator)
    if controller.phase == Phase.REVEALED:
        return revealed_screen(controller)
    return awaiting_code_screen()
