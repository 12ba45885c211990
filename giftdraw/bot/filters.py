from __future__ import annotations

from aiogram.filters import BaseFilter
from aiogram.types import TelegramObject

from giftdraw.services.reveal import Phase, RevealController


class PhaseFilter(BaseFilter):
    """Route an update only while the controller is in one of ``phases``."""

    def __init__(self, *phases: Phase) -> None:
        self.phases = frozenset(phases)

    async def __call__(self, event: TelegramObject, controller: RevealController) -> bool:
        return controller.phase in self.phases


def is_plain_text(message) -> bool:
    return bool(message.text) and not message.text.startswith("/")
