from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List


@dataclass(frozen=True)
class Participant:
    name: str


def _fold(name: str) -> str:
    return name.strip().casefold()


class Roster:
    """Ordered set of participants, unique by case-insensitive name.

    ``add`` and ``remove`` never raise for bad input: a rejected call leaves
    the roster unchanged and returns ``False``.
    """

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._participants: List[Participant] = []
        for name in names:
            self.add(name)

    def add(self, name: str) -> bool:
        trimmed = (name or "").strip()
        if not trimmed or trimmed.casefold() in self:
            return False
        self._participants.append(Participant(name=trimmed))
        return True

    def remove(self, name: str) -> bool:
        for index, participant in enumerate(self._participants):
            if participant.name == name:
                del self._participants[index]
                return True
        return False

    def clear(self) -> None:
        self._participants.clear()

    @property
    def participants(self) -> List[Participant]:
        return list(self._participants)

    def names(self) -> List[str]:
        return [participant.name for participant in self._participants]

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        folded = _fold(name)
        return any(_fold(p.name) == folded for p in self._participants)

    def __iter__(self) -> Iterator[Participant]:
        return iter(list(self._participants))

    def __len__(self) -> int:
        return len(self._participants)
