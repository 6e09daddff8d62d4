"""Ownership Enforcement — the authorization guard applied to every note operation.

Invariants:
    - Allow iff actor is the resource owner OR actor is admin
    - can_access is PURE: no IO, no logging, no state
    - enforce_ownership raises AccessDeniedError; shell maps it to 401
"""

from notes_api.core.errors import AccessDeniedError, ErrorContext
from notes_api.core.session_claims import SessionClaims


def can_access(claims: SessionClaims, owner_id: int) -> bool:
    """Rule: owner or admin."""
    return claims.user_id == owner_id or claims.is_admin


def enforce_ownership(
    claims: SessionClaims, owner_id: int, note_id: int | None = None,
) -> None:
    """Raise AccessDeniedError unless can_access allows the actor."""
    if not can_access(claims, owner_id):
        raise AccessDeniedError(
            ErrorContext(user_id=claims.user_id, note_id=note_id),
        )
