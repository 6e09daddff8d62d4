"""Rate Window — tests for the in-memory admission state.

Tests cover:
    - Keyed window: per-client budgets, exhaustion, expiry, isolation between clients
    - Shared window: first-request rule, refill on client switch, decrement on repeat
    - reset() semantics and retry_after_seconds
"""

from notes_api.core.domain_types import AdmissionDecision, ClientId, RateLimitPolicy
from notes_api.core.rate_window import (
    KeyedRateWindow, SharedRateWindow, build_rate_window,
)

ALLOW = AdmissionDecision.ALLOW
DENY = AdmissionDecision.DENY
A = ClientId("10.0.0.1")
B = ClientId("10.0.0.2")


# ─── KeyedRateWindow ─────────────────────────────────────────────

def test_keyed_admits_exactly_limit_requests_then_denies():
    window = KeyedRateWindow(limit=3)
    decisions = [window.admit(A, now=0.0) for _ in range(5)]
    assert decisions == [ALLOW, ALLOW, ALLOW, DENY, DENY]


def test_keyed_denies_stay_denied_for_whole_window():
    window = KeyedRateWindow(limit=2, window_seconds=60)
    window.admit(A, 0.0)
    window.admit(A, 1.0)
    for t in (2.0, 30.0, 59.9):
        assert window.admit(A, t) == DENY


def test_keyed_budget_refills_after_window_elapses():
    window = KeyedRateWindow(limit=1, window_seconds=60)
    assert window.admit(A, 0.0) == ALLOW
    assert window.admit(A, 10.0) == DENY
    assert window.admit(A, 60.0) == ALLOW


def test_keyed_other_client_does_not_touch_budget():
    window = KeyedRateWindow(limit=2)
    window.admit(A, 0.0)
    window.admit(A, 0.0)
    for _ in range(10):
        assert window.admit(B, 0.0) in (ALLOW, DENY)
    assert window.admit(A, 0.0) == DENY
    assert window.buckets[A].remaining == 0


def test_keyed_interleaved_clients_each_get_full_budget():
    window = KeyedRateWindow(limit=2)
    seq = [window.admit(c, 0.0) for c in (A, B, A, B, A, B)]
    assert seq == [ALLOW, ALLOW, ALLOW, ALLOW, DENY, DENY]


def test_keyed_zero_limit_denies_everything():
    window = KeyedRateWindow(limit=0)
    assert window.admit(A, 0.0) == DENY


def test_keyed_reset_clears_all_buckets():
    window = KeyedRateWindow(limit=1)
    window.admit(A, 0.0)
    window.admit(B, 0.0)
    window.reset(5.0)
    assert window.buckets == {}
    assert window.admit(A, 5.0) == ALLOW


def test_keyed_retry_after_counts_down_to_window_end():
    window = KeyedRateWindow(limit=1, window_seconds=60)
    window.admit(A, 100.0)
    assert window.retry_after_seconds(A, 130.0) == 30.0
    assert window.retry_after_seconds(A, 200.0) == 0.0
    assert window.retry_after_seconds(B, 130.0) == 0.0


# ─── SharedRateWindow ────────────────────────────────────────────

def test_shared_first_request_consumes_token_and_is_allowed():
    window = SharedRateWindow(limit=3)
    assert window.admit(A, 0.0) == ALLOW
    assert window.tokens_left == 2
    assert window.previous_client == A


def test_shared_first_request_allowed_even_with_zero_limit():
    window = SharedRateWindow(limit=0)
    assert window.admit(A, 0.0) == ALLOW
    assert window.tokens_left == -1


def test_shared_same_client_exhausts_budget():
    window = SharedRateWindow(limit=3)
    decisions = [window.admit(A, 0.0) for _ in range(5)]
    assert decisions == [ALLOW, ALLOW, ALLOW, DENY, DENY]
    assert window.tokens_left == -2


def test_shared_client_switch_refills_without_counting():
    window = SharedRateWindow(limit=3)
    window.admit(A, 0.0)
    window.admit(A, 0.0)
    assert window.admit(B, 0.0) == ALLOW
    assert window.tokens_left == 3
    assert window.previous_client == B


def test_shared_other_client_unblocks_exhausted_client():
    window = SharedRateWindow(limit=1)
    window.admit(A, 0.0)
    window.admit(A, 0.0)
    assert window.admit(A, 0.0) == DENY
    window.admit(B, 0.0)
    assert window.admit(A, 0.0) == ALLOW


def test_shared_reset_refills_counter_but_keeps_previous_client():
    window = SharedRateWindow(limit=2)
    for _ in range(4):
        window.admit(A, 0.0)
    window.reset(60.0)
    assert window.tokens_left == 2
    assert window.previous_client == A
    assert window.admit(A, 61.0) == ALLOW
    assert window.tokens_left == 1


def test_shared_retry_after_tracks_last_reset():
    window = SharedRateWindow(limit=1, window_seconds=60)
    window.reset(100.0)
    assert window.retry_after_seconds(A, 145.0) == 15.0


# ─── build_rate_window ───────────────────────────────────────────

def test_build_rate_window_selects_policy():
    assert isinstance(build_rate_window(RateLimitPolicy.KEYED, 5), KeyedRateWindow)
    shared = build_rate_window(RateLimitPolicy.SHARED, 5, window_seconds=30)
    assert isinstance(shared, SharedRateWindow)
    assert shared.window_seconds == 30
    assert shared.tokens_left == 5
