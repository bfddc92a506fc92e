"""ResilientSyncClient — proactive throttling plus retry-with-backoff on HTTP 429.

States
------
  ATTEMPTING    — call the operation; record rate-limit headers.
  RATE_LIMITED  — got 429; give up (FAILED) if the retry budget is spent,
                  otherwise pick a delay and move to WAITING.
  WAITING       — sleep the delay, then ATTEMPTING again with attempt + 1.
  SUCCESS       — return the response.
  FAILED        — raise UpstreamRateLimitedError chained to the last 429.

Any non-429 error leaves the machine immediately. The proactive throttle
delay is applied once, before attempt 0, never between retries.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from email.utils import parsedate_to_datetime
from enum import Enum

import httpx

from assignment_engine.adapters.upstream.rate_limit_state import RateLimitState
from assignment_engine.domain.exceptions import UpstreamRateLimitedError
from assignment_engine.domain.value_objects.engine_config import RetrySettings

logger = logging.getLogger(__name__)

Operation = Callable[[], Awaitable[httpx.Response]]


class RetryPhase(str, Enum):
    ATTEMPTING = "ATTEMPTING"
    RATE_LIMITED = "RATE_LIMITED"
    WAITING = "WAITING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


def parse_retry_after(value: str, now: float) -> float | None:
    """Retry-After as milliseconds: delta-seconds or an HTTP date. None if unparsable."""
    value = value.strip()
    try:
        return max(0.0, float(value) * 1000)
    except ValueError:
        pass

    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    return abs(when.timestamp() - now) * 1000


class ResilientSyncClient:
    def __init__(
        self,
        rate_limit: RateLimitState,
        retry: RetrySettings | Callable[[], RetrySettings] | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.time,
    ):
        self._rate_limit = rate_limit
        self._retry = retry if retry is not None else RetrySettings()
        self._sleep = sleep
        self._clock = clock

    @property
    def rate_limit(self) -> RateLimitState:
        return self._rate_limit

    def _settings(self) -> RetrySettings:
        return self._retry() if callable(self._retry) else self._retry

    def backoff_delay_ms(self, attempt: int, settings: RetrySettings) -> float:
        return min(
            settings.initial_delay_ms * settings.backoff_multiplier ** attempt,
            settings.max_delay_ms,
        )

    async def execute_with_retry(self, operation: Operation, context: str = "request") -> httpx.Response:
        """Run *operation* until it succeeds, fails, or the 429 budget is spent.

        Raises:
            UpstreamRateLimitedError: after ``max_retries`` retries all got 429.
            httpx.HTTPStatusError: for any other error status (not retried).
            httpx.HTTPError: transport errors propagate unchanged.
        """
        settings = self._settings()

        if self._rate_limit.should_slow_down():
            delay_ms = self._rate_limit.proactive_delay_ms()
            if delay_ms > 0:
                logger.debug(
                    "Proactive rate limiting (%s): waiting %dms (%d requests remaining)",
                    context, delay_ms, self._rate_limit.status().remaining,
                )
                await self._sleep(delay_ms / 1000)

        phase = RetryPhase.ATTEMPTING
        attempt = 0
        delay_ms = 0.0
        response: httpx.Response | None = None
        last_error: httpx.HTTPStatusError | None = None

        while True:
            if phase is RetryPhase.ATTEMPTING:
                response = await self._attempt(operation)
                if response.status_code == 429:
                    phase = RetryPhase.RATE_LIMITED
                else:
                    response.raise_for_status()
                    phase = RetryPhase.SUCCESS

            elif phase is RetryPhase.RATE_LIMITED:
                try:
                    response.raise_for_status()
                except httpx.HTTPStatusError as e:
                    last_error = e
                if attempt >= settings.max_retries:
                    phase = RetryPhase.FAILED
                else:
                    delay_ms = self._retry_delay_ms(response, attempt, settings, context)
                    phase = RetryPhase.WAITING

            elif phase is RetryPhase.WAITING:
                await self._sleep(delay_ms / 1000)
                attempt += 1
                phase = RetryPhase.ATTEMPTING

            elif phase is RetryPhase.SUCCESS:
                return response

            else:
                logger.error("Max retries (%d) exceeded for %s", settings.max_retries, context)
                raise UpstreamRateLimitedError(context, attempt + 1) from last_error

    async def _attempt(self, operation: Operation) -> httpx.Response:
        try:
            response = await operation()
        except httpx.HTTPStatusError as e:
            self._rate_limit.update_from_headers(e.response.headers)
            if e.response.status_code != 429:
                raise
            return e.response

        self._rate_limit.update_from_headers(response.headers)
        return response

    def _retry_delay_ms(
        self, response: httpx.Response, attempt: int, settings: RetrySettings, context: str
    ) -> float:
        hint = response.headers.get("retry-after")
        if hint:
            delay = parse_retry_after(hint, self._clock())
            if delay is not None:
                logger.warning(
                    "Rate limited (%s). Retry-After says wait %ds (attempt %d/%d)",
                    context, round(delay / 1000), attempt + 1, settings.max_retries,
                )
                return delay

        delay = self.backoff_delay_ms(attempt, settings)
        logger.warning(
            "Rate limited (%s). Using exponential backoff: %ds (attempt %d/%d)",
            context, round(delay / 1000), attempt + 1, settings.max_retries,
        )
        return delay
