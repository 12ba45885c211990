import hashlib
from typing import Iterable, Optional, Sequence, Set, Tuple

from aiogram.filters.callback_data import CallbackData
from aiogram.utils.keyboard import InlineKeyboardBuilder

from giftdraw.services.roster import Participant


class RemoveParticipant(CallbackData, prefix="remove"):
    key: str


class CopyCode(CallbackData, prefix="copy"):
    key: str


def participant_key(name: str) -> str:
    """Short stable key for a name; callback data is capped at 64 bytes."""
    return hashlib.sha256(name.encode("utf-8")).hexdigest()[:16]


def resolve_participant(names: Iterable[str], key: str) -> Optional[str]:
    return next((name for name in names if participant_key(name) == key), None)


def setup_keyboard(participants: Sequence[Participant], can_draw: bool):
    keyboard = InlineKeyboardBuilder()
    for participant in participants:
        keyboard.button(
            text=f"✕ {participant.name}",
            callback_data=RemoveParticipant(key=participant_key(participant.name)),
        )
    if can_draw:
        keyboard.button(text="🎲 Draw", callback_data="draw")
    keyboard.adjust(1)
    return keyboard.as_markup()


def codes_keyboard(sheet: Sequence[Tuple[str, str]], marked: Set[str]):
    keyboard = InlineKeyboardBuilder()
    for giver, code in sheet:
        mark = "✓" if code in marked else "📋"
        keyboard.button(text=f"{mark} {giver}", callback_data=CopyCode(key=participant_key(giver)))
    keyboard.button(text="📋 Copy all", callback_data="copy_all")
    keyboard.button(text="🖨️ Print", callback_data="print")
    keyboard.button(text="Continue to reveal", callback_data="to_reveal")
    keyboard.adjust(*_rows(len(sheet)), 2, 1)
    return keyboard.as_markup()


def _rows(count: int) -> Iterable[int]:
    return [2] * (count // 2) + ([1] if count % 2 else [])


def awaiting_code_keyboard():
    keyboard = InlineKeyboardBuilder()
    keyboard.button(text="New draw", callback_data="reset")
    return keyboard.as_markup()


def revealed_keyboard():
    keyboard = InlineKeyboardBuilder()
    keyboard.button(text="Back", callback_data="back")
    return keyboard.as_markup()


def confirm_reset_keyboard():
    keyboard = InlineKeyboardBuilder()
    keyboard.button(text="Yes, erase the draw", callback_data="confirm_reset")
    keyboard.button(text="No, keep it", callback_data="cancel_reset")
    keyboard.adjust(1)
    return keyboard.as_markup()
