"""Session lifecycle for one gift exchange.

Phases: setup → codes → awaiting_code ⇄ revealed
Reset returns any phase to setup. A session that starts with a stored draw
resumes in awaiting_code.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Tuple

from loguru import logger

from giftdraw.services.draw import MIN_PARTICIPANTS, DrawResult, draw
from giftdraw.services.roster import Participant, Roster
from giftdraw.services.store import DrawStore, DrawStoreError


class Phase(str, enum.Enum):
    SETUP = "setup"
    CODES = "codes"
    AWAITING_CODE = "awaiting_code"
    REVEALED = "revealed"


VALID_TRANSITIONS: Dict[Phase, FrozenSet[Phase]] = {
    Phase.SETUP: frozenset({Phase.CODES}),
    Phase.CODES: frozenset({Phase.AWAITING_CODE}),
    Phase.AWAITING_CODE: frozenset({Phase.REVEALED}),
    Phase.REVEALED: frozenset({Phase.AWAITING_CODE}),
}


class ControllerError(RuntimeError):
    pass


class PhaseError(ControllerError):
    pass


class InvalidCode(ControllerError):
    pass


class EmptyCode(InvalidCode):
    pass


@dataclass(frozen=True)
class Revelation:
    giver: str
    receiver: str


class RevealController:
    """Owns the roster, the committed draw and the per-device reveal state.

    The store is written only by ``perform_draw`` and cleared only by
    ``reset`` (or by ``start`` when the record is unreadable); everything
    else reads the committed result.
    """

    def __init__(self, store: DrawStore, seed: Optional[int] = None) -> None:
        self._store = store
        self._seed = seed
        self._roster = Roster()
        self._result: Optional[DrawResult] = None
        self._revealed: Optional[Revelation] = None
        self._phase = Phase.SETUP

    @classmethod
    def start(cls, store: DrawStore, seed: Optional[int] = None) -> "RevealController":
        controller = cls(store, seed=seed)
        try:
            saved = store.load()
        except DrawStoreError:
            # an unreadable record would block every future draw; drop it and start over
            logger.bind(key=store.key).exception("Stored draw is unreadable, starting in setup")
            store.clear()
            saved = None
        if saved is not None:
            controller._result = saved
            controller._phase = Phase.AWAITING_CODE
            logger.bind(assignments=len(saved)).info("Resumed stored draw")
        return controller

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def participants(self) -> List[Participant]:
        return self._roster.participants

    @property
    def revealed(self) -> Optional[Revelation]:
        return self._revealed

    @property
    def can_draw(self) -> bool:
        return self._phase == Phase.SETUP and len(self._roster) >= MIN_PARTICIPANTS

    def _require(self, *phases: Phase) -> None:
        if self._phase not in phases:
            allowed = ", ".join(phase.value for phase in phases)
            raise PhaseError(f"Not available in phase '{self._phase.value}' (needs: {allowed}).")

    def _move_to(self, target: Phase) -> None:
        if target not in VALID_TRANSITIONS[self._phase]:
            raise PhaseError(f"Cannot move from '{self._phase.value}' to '{target.value}'.")
        logger.bind(source=self._phase.value, target=target.value).debug("Phase change")
        self._phase = target

    def add_participant(self, name: str) -> bool:
        self._require(Phase.SETUP)
        return self._roster.add(name)

    def remove_participant(self, name: str) -> bool:
        self._require(Phase.SETUP)
        return self._roster.remove(name)

    def perform_draw(self) -> DrawResult:
        self._require(Phase.SETUP)
        result = draw(self._roster.names(), seed=self._seed)
        self._store.save(result)
        self._result = result
        self._move_to(Phase.CODES)
        return result

    def code_sheet(self) -> List[Tuple[str, str]]:
        self._require(Phase.CODES)
        return self._result.code_sheet()

    def continue_to_reveal(self) -> None:
        self._require(Phase.CODES)
        self._move_to(Phase.AWAITING_CODE)

    def redeem(self, code: str) -> Revelation:
        self._require(Phase.AWAITING_CODE)
        if not (code or "").strip():
            raise EmptyCode("Please type your code.")
        assignment = self._result.find(code)
        if assignment is None:
            logger.info("Code redemption rejected")
            raise InvalidCode("Invalid code. Check it and try again.")
        self._revealed = Revelation(giver=assignment.giver, receiver=assignment.receiver)
        self._move_to(Phase.REVEALED)
        logger.info("Code redeemed")
        return self._revealed

    def back_to_code_entry(self) -> None:
        self._require(Phase.REVEALED)
        self._revealed = None
        self._move_to(Phase.AWAITING_CODE)

    def reset(self, confirmed: bool) -> bool:
        """Destroy the stored draw and start over; ``confirmed=False`` changes nothing."""
        if not confirmed:
            return False
        self._store.clear()
        self._roster.clear()
        self._result = None
        self._revealed = None
        self._phase = Phase.SETUP
        logger.info("Session reset")
        return True
