"""Session Claims — the verified identity carried by an auth token.

Invariants:
    - Claims are immutable once decoded
    - is_admin defaults to False when the claim is absent
"""

from dataclasses import dataclass
from datetime import datetime

from notes_api.core.domain_types import UserId


@dataclass(frozen=True)
class SessionClaims:
    """Decoded payload of a verified session token."""
    user_id: UserId
    is_admin: bool = False
    issued_at: datetime | None = None
    expires_at: datetime | None = None
