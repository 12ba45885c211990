from __future__ import annotations

import time
from typing import Callable, Dict, Iterable, Optional, Sequence, Tuple

CodeSheet = Sequence[Tuple[str, str]]


def format_code_list(sheet: CodeSheet) -> str:
    return "\n".join(f"{giver}: {code}" for giver, code in sheet)


def format_printable_sheet(sheet: CodeSheet, title: str = "Secret Santa codes") -> str:
    width = max((len(giver) for giver, _ in sheet), default=0) + 4
    lines = [title, "=" * len(title), ""]
    lines.extend(f"{giver.ljust(width, '.')} {code}" for giver, code in sheet)
    lines.extend(
        [
            "",
            "Cut along the lines and hand each person their own code.",
            "Everyone redeems their code alone to see who they drew.",
        ]
    )
    return "\n".join(lines) + "\n"


class CopiedIndicator:
    """Short-lived "copied" marks for the code list; purely cosmetic."""

    def __init__(self, duration: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.duration = duration
        self._clock = clock
        self._marks: Dict[str, float] = {}

    def mark(self, code: str) -> None:
        self._marks[code] = self._clock() + self.duration

    def is_marked(self, code: str) -> bool:
        expires_at = self._marks.get(code)
        if expires_at is None:
            return False
        if self._clock() >= expires_at:
            self._marks.pop(code, None)
            return False
        return True

    def marked(self, codes: Iterable[str]) -> set:
        return {code for code in codes if self.is_marked(code)}

    def clear(self, code: Optional[str] = None) -> None:
        if code is None:
            self._marks.clear()
        else:
            self._marks.pop(code, None)
