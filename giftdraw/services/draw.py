from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from loguru import logger

# no 0/O, 1/I, which read alike on paper and screens
CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
CODE_LENGTH = 6
MIN_PARTICIPANTS = 3
MAX_DRAW_ATTEMPTS = 100
MAX_CODE_ATTEMPTS = 1000


class DrawError(RuntimeError):
    pass


class InsufficientParticipants(DrawError):
    pass


class DuplicateParticipants(DrawError):
    pass


class DrawFailed(DrawError):
    pass


class CodeGenerationError(DrawError):
    pass


def normalize_code(code: str) -> str:
    return (code or "").strip().upper()


@dataclass(frozen=True)
class Assignment:
    giver: str
    receiver: str
    code: str

    def __post_init__(self) -> None:
        if self.giver == self.receiver:
            raise ValueError(f"{self.giver!r} cannot be assigned to themselves.")


@dataclass(frozen=True)
class DrawResult:
    """Immutable output of one draw, one assignment per giver in roster order."""

    assignments: Tuple[Assignment, ...]

    def __post_init__(self) -> None:
        givers = [a.giver for a in self.assignments]
        receivers = [a.receiver for a in self.assignments]
        codes = [normalize_code(a.code) for a in self.assignments]
        if len(set(givers)) != len(givers) or sorted(givers) != sorted(receivers):
            raise ValueError("Receivers must be a permutation of the givers.")
        if len(set(codes)) != len(codes):
            raise ValueError("Assignment codes must be unique.")

    def find(self, code: str) -> Optional[Assignment]:
        wanted = normalize_code(code)
        if not wanted:
            return None
        for assignment in self.assignments:
            if normalize_code(assignment.code) == wanted:
                return assignment
        return None

    def code_sheet(self) -> List[Tuple[str, str]]:
        return [(a.giver, a.code) for a in self.assignments]

    def to_payload(self) -> Dict[str, Any]:
        return {
            "results": [
                {"giver": a.giver, "receiver": a.receiver, "code": a.code}
                for a in self.assignments
            ]
        }

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "DrawResult":
        try:
            rows = payload["results"]
            assignments = tuple(
                Assignment(giver=row["giver"], receiver=row["receiver"], code=row["code"])
                for row in rows
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Malformed draw payload: {exc}") from exc
        return cls(assignments=assignments)

    def __iter__(self) -> Iterator[Assignment]:
        return iter(self.assignments)

    def __len__(self) -> int:
        return len(self.assignments)


def _make_rng(seed: Optional[int]) -> random.Random:
    if seed is None:
        return random.SystemRandom()
    return random.Random(seed)


def find_derangement(
    names: Sequence[str],
    rng: random.Random,
    max_attempts: int = MAX_DRAW_ATTEMPTS,
) -> Tuple[List[str], int]:
    """Shuffle until no name stays in place; returns the order and attempts used."""
    for attempt in range(1, max_attempts + 1):
        shuffled = list(names)
        rng.shuffle(shuffled)
        if all(giver != receiver for giver, receiver in zip(names, shuffled)):
            return shuffled, attempt
    raise DrawFailed("Could not complete the draw. Please try again.")


def generate_code(
    rng: random.Random,
    alphabet: str = CODE_ALPHABET,
    length: int = CODE_LENGTH,
) -> str:
    return "".join(rng.choice(alphabet) for _ in range(length))


def issue_codes(
    count: int,
    rng: random.Random,
    alphabet: str = CODE_ALPHABET,
    length: int = CODE_LENGTH,
    max_attempts: int = MAX_CODE_ATTEMPTS,
) -> List[str]:
    issued: List[str] = []
    used = set()
    for _ in range(count):
        for _ in range(max_attempts):
            code = generate_code(rng, alphabet, length)
            if code not in used:
                break
        else:
            raise CodeGenerationError("Could not generate unique codes for every participant.")
        used.add(code)
        issued.append(code)
    return issued


def draw(
    names: Sequence[str],
    seed: Optional[int] = None,
    max_attempts: int = MAX_DRAW_ATTEMPTS,
) -> DrawResult:
    participants = list(names)
    if len(participants) < MIN_PARTICIPANTS:
        raise InsufficientParticipants(
            f"At least {MIN_PARTICIPANTS} participants are required."
        )
    if len({name.casefold() for name in participants}) != len(participants):
        raise DuplicateParticipants("Participant names must be unique.")

    rng = _make_rng(seed)
    receivers, attempts = find_derangement(participants, rng, max_attempts)
    codes = issue_codes(len(participants), rng)

    result = DrawResult(
        assignments=tuple(
            Assignment(giver=giver, receiver=receiver, code=code)
            for giver, receiver, code in zip(participants, receivers, codes)
        )
    )
    logger.bind(participants=len(participants), attempts=attempts).info("Draw completed")
    return result
