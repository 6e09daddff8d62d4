"""Rate Limiter — thread-safe gate around the in-memory rate window.

Invariants:
    - Every read-modify-write of the window happens under one lock
    - A denied request raises RateLimitedError; callers never continue past it
    - run_reset_loop() resets the window every window_seconds, independent of traffic,
      until cancelled

Design Decisions:
    - threading.Lock, not asyncio.Lock: FastAPI runs sync dependencies in a
      threadpool, so admission may be called from worker threads
    - Clock injected (monotonic by default) so tests drive window expiry directly
"""

import asyncio
import logging
import threading
import time
from typing import Callable

from notes_api.core.domain_types import AdmissionDecision, ClientId, RateLimitPolicy
from notes_api.core.errors import ErrorContext, RateLimitedError
from notes_api.core.rate_window import RateWindow, build_rate_window

logger = logging.getLogger(__name__)


class RateLimiter:
    """Admits or rejects requests per client identity."""

    def __init__(
        self,
        window: RateWindow,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._window = window
        self._clock = clock
        self._lock = threading.Lock()
        self._reset_loop_running = False
        self._window.reset(self._clock())

    @classmethod
    def from_policy(
        cls,
        policy: RateLimitPolicy,
        limit: int,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> "RateLimiter":
        return cls(build_rate_window(policy, limit, window_seconds), clock)

    @property
    def limit(self) -> int:
        return self._window.limit

    @property
    def window_seconds(self) -> float:
        return self._window.window_seconds

    @property
    def reset_loop_running(self) -> bool:
        """True while run_reset_loop() is active; readiness reports it."""
        return self._reset_loop_running

    def admit(self, client_id: ClientId) -> None:
        """Count the request; raise RateLimitedError when it is denied."""
        with self._lock:
            now = self._clock()
            decision = self._window.admit(client_id, now)
            retry_after = self._window.retry_after_seconds(client_id, now)
        if decision == AdmissionDecision.DENY:
            logger.warning(
                "Request rate limited", extra={"client_id": client_id},
            )
            raise RateLimitedError(
                retry_after_ms=int(retry_after * 1000),
                context=ErrorContext(client_id=client_id),
            )

    def reset(self) -> None:
        with self._lock:
            self._window.reset(self._clock())

    async def run_reset_loop(self) -> None:
        """Reset the window on a fixed period. Runs until the task is cancelled."""
        self._reset_loop_running = True
        try:
            while True:
                await asyncio.sleep(self._window.window_seconds)
                self.reset()
                logger.debug("Rate window reset")
        finally:
            self._reset_loop_running = False
