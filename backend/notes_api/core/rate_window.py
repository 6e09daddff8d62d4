"""Rate Window — in-memory admission state for the per-client request ceiling.

Invariants:
    - admit() is the only mutator besides reset(); the shell serializes both under a lock
    - Time is passed in (monotonic seconds); this module never reads a clock
    - KeyedRateWindow: a client's budget is never touched by another client's request
    - SharedRateWindow: reproduces the single-counter policy exactly
      (first request allowed, client switch refills, same client decrements,
      deny iff counter < 0 after the update)

Design Decisions:
    - Two concrete windows behind one Protocol: keyed is the default, shared is
      kept for deployments that need parity with the single-counter limiter
    - reset() leaves SharedRateWindow.previous_client intact: only the counter
      is refilled by the window timer
"""

from dataclasses import dataclass, field
from typing import Protocol

from notes_api.core.domain_types import AdmissionDecision, ClientId, RateLimitPolicy


class RateWindow(Protocol):
    """Structural contract shared by both window policies."""
    limit: int
    window_seconds: float

    def admit(self, client_id: ClientId, now: float) -> AdmissionDecision: ...
    def reset(self, now: float) -> None: ...
    def retry_after_seconds(self, client_id: ClientId, now: float) -> float: ...


@dataclass
class ClientBucket:
    """Remaining admits for one client in its current window."""
    remaining: int
    window_start: float


@dataclass
class KeyedRateWindow:
    """One bucket per client identity."""

    limit: int
    window_seconds: float = 60.0
    buckets: dict[ClientId, ClientBucket] = field(default_factory=dict)

    def admit(self, client_id: ClientId, now: float) -> AdmissionDecision:
        bucket = self.buckets.get(client_id)
        if bucket is None or now - bucket.window_start >= self.window_seconds:
            bucket = ClientBucket(remaining=self.limit, window_start=now)
            self.buckets[client_id] = bucket
        if bucket.remaining <= 0:
            return AdmissionDecision.DENY
        bucket.remaining -= 1
        return AdmissionDecision.ALLOW

    def reset(self, now: float) -> None:
        self.buckets.clear()

    def retry_after_seconds(self, client_id: ClientId, now: float) -> float:
        bucket = self.buckets.get(client_id)
        if bucket is None:
            return 0.0
        return max(0.0, bucket.window_start + self.window_seconds - now)


@dataclass
class SharedRateWindow:
    """Single process-wide counter keyed only by the previous caller."""

    limit: int
    window_seconds: float = 60.0
    tokens_left: int = field(init=False)
    previous_client: ClientId | None = None
    window_start: float = 0.0

    def __post_init__(self) -> None:
        self.tokens_left = self.limit

    def admit(self, client_id: ClientId, now: float) -> AdmissionDecision:
        if self.previous_client is None:
            self.previous_client = client_id
            self.tokens_left -= 1
            return AdmissionDecision.ALLOW

        if client_id != self.previous_client:
            self.tokens_left = self.limit
            self.previous_client = client_id
        else:
            self.tokens_left -= 1

        if self.tokens_left < 0:
            return AdmissionDecision.DENY
        return AdmissionDecision.ALLOW

    def reset(self, now: float) -> None:
        self.tokens_left = self.limit
        self.window_start = now

    def retry_after_seconds(self, client_id: ClientId, now: float) -> float:
        return max(0.0, self.window_start + self.window_seconds - now)


def build_rate_window(
    policy: RateLimitPolicy, limit: int, window_seconds: float = 60.0,
) -> RateWindow:
    """Instantiate the window for the configured policy."""
    if policy == RateLimitPolicy.SHARED:
        return SharedRateWindow(limit=limit, window_seconds=window_seconds)
    return KeyedRateWindow(limit=limit, window_seconds=window_seconds)
