from giftdraw.services.draw import (
    DrawError,
    DrawFailed,
    DrawResult,
    InsufficientParticipants,
    draw,
)
from giftdraw.services.reveal import ControllerError, InvalidCode, Phase, RevealController
from giftdraw.services.store import DrawStore, DrawStoreError

__all__ = [
    "ControllerError",
    "DrawError",
    "DrawFailed",
    "DrawResult",
    "DrawStore",
    "DrawStoreError",
    "InsufficientParticipants",
    "InvalidCode",
    "Phase",
    "RevealController",
    "draw",
]
