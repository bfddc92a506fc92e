"""RateLimitState — quota headroom reported by the upstream ticketing API.

One instance per upstream connection, shared by every in-flight call. Writes
happen under a lock; throttle checks may read a value one response old.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

HEADER_TOTAL = "x-ratelimit-total"
HEADER_REMAINING = "x-ratelimit-remaining"
HEADER_RESET = "x-ratelimit-reset"


@dataclass(frozen=True)
class RateLimitStatus:
    total: int
    remaining: int
    percent_used: float
    resets_in: int  # seconds

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "remaining": self.remaining,
            "percent_used": round(self.percent_used, 2),
            "resets_in": self.resets_in,
        }


class RateLimitState:
    def __init__(
        self,
        total: int = 1000,
        remaining: int = 1000,
        reset_at: float | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self._clock = clock
        self._total = total
        self._remaining = remaining
        self._reset_at = reset_at if reset_at is not None else clock() + 3600
        self._lock = threading.Lock()

    def update_from_headers(self, headers: Mapping[str, str]) -> None:
        """Apply whichever rate-limit headers are present; ignore malformed ones."""
        parsed: dict[str, int] = {}
        for name in (HEADER_TOTAL, HEADER_REMAINING, HEADER_RESET):
            raw = headers.get(name)
            if raw is None:
                continue
            try:
                parsed[name] = int(float(raw))
            except ValueError:
                logger.warning("Ignoring malformed %s header: %r", name, raw)

        if not parsed:
            return

        with self._lock:
            if HEADER_TOTAL in parsed:
                self._total = parsed[HEADER_TOTAL]
            if HEADER_REMAINING in parsed:
                self._remaining = parsed[HEADER_REMAINING]
            if HEADER_RESET in parsed:
                self._reset_at = float(parsed[HEADER_RESET])

    def status(self) -> RateLimitStatus:
        with self._lock:
            total, remaining, reset_at = self._total, self._remaining, self._reset_at

        percent_used = ((total - remaining) / total) * 100 if total > 0 else 100.0
        resets_in = math.ceil(max(0.0, reset_at - self._clock()))
        return RateLimitStatus(
            total=total,
            remaining=remaining,
            percent_used=percent_used,
            resets_in=resets_in,
        )

    def should_slow_down(self) -> bool:
        """Slow down only when quota is nearly gone AND the reset is far away."""
        s = self.status()
        if s.remaining < 20 and s.resets_in > 300:
            return True
        return s.percent_used > 95 and s.resets_in > 120

    def proactive_delay_ms(self) -> int:
        s = self.status()
        if s.remaining < 10:
            return 3000
        if s.remaining < 20:
            return 1000
        if s.percent_used > 95:
            return 500
        return 0
