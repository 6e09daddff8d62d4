"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId and NoteId wrap the integer primary keys assigned by storage
    - ClientId is the normalized client identity used for rate admission
    - All valid states encoded as Enums, no raw string matching
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
NoteId = NewType("NoteId", int)
ClientId = NewType("ClientId", str)


# ─── Enums ───────────────────────────────────────────────────────

class RateLimitPolicy(str, Enum):
    """How the rate window is keyed."""
    KEYED = "keyed"      # one bucket per client
    SHARED = "shared"    # single counter + previous client (legacy parity)


class AdmissionDecision(str, Enum):
    """Outcome of a rate admission check."""
    ALLOW = "allow"
    DENY = "deny"


class NoteStatus(str, Enum):
    """Lifecycle marker echoed by the delete endpoint."""
    DELETED = "deleted"
