from __future__ import annotations

import time
from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict


@dataclass
class RateLimitResult:
    allowed: bool
    retry_after: float


class RateLimiter:
    """Sliding-window throttle per key (``"<user_id>:<action>"`` in the bot)."""

    def __init__(
        self,
        max_calls: int,
        period_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_calls < 1 or period_seconds <= 0:
            raise ValueError("Rate limit needs max_calls >= 1 and a positive period.")
        self.max_calls = max_calls
        self.period_seconds = period_seconds
        self._clock = clock
        self._calls: Dict[str, Deque[float]] = defaultdict(deque)

    def allow(self, key: str) -> RateLimitResult:
        now = self._clock()
        window = self._calls[key]
        while window and now - window[0] >= self.period_seconds:
            window.popleft()
        if len(window) >= self.max_calls:
            retry_after = self.period_seconds - (now - window[0])
            return RateLimitResult(False, max(retry_after, 0))
        window.append(now)
        return RateLimitResult(True, 0)

    def forget(self, key: str) -> None:
        self._calls.pop(key, None)


rate_limiter = RateLimiter(max_calls=5, period_seconds=10)


def configure_rate_limiter(max_calls: int, period_seconds: float) -> RateLimiter:
    global rate_limiter
    rate_limiter = RateLimiter(max_calls=max_calls, period_seconds=period_seconds)
    return rate_limiter
