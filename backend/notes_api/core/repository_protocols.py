"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - All storage access goes through these Protocol types
    - Repositories return live records only; soft-deleted notes are invisible
    - Every write either fully applies or raises (no partial field updates)

Design Decisions:
    - Protocol over ABC: structural subtyping, ORM models satisfy UserLike/NoteLike
      without inheriting from anything in core
    - Async in Protocol: implementations do IO; services await them
"""

from datetime import datetime
from typing import Protocol

from notes_api.core.domain_types import NoteId, UserId


class UserLike(Protocol):
    """Structural contract for user records handed to services."""
    id: int
    name: str
    username: str
    password_hash: str
    is_admin: bool
    created_at: datetime


class NoteLike(Protocol):
    """Structural contract for note records handed to services."""
    id: int
    description: str | None
    user_id: int
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None


class UserRepository(Protocol):
    """Contract for credential storage — implemented by shell."""
    async def get_by_username(self, username: str) -> UserLike | None: ...
    async def get_by_id(self, user_id: UserId) -> UserLike | None: ...
    async def create(
        self, name: str, username: str, password_hash: str, is_admin: bool,
    ) -> UserLike: ...


class NoteRepository(Protocol):
    """Contract for note persistence — implemented by shell."""
    async def get_live(self, note_id: NoteId) -> NoteLike | None: ...
    async def create(self, owner_id: UserId, description: str | None) -> NoteLike: ...
    async def update_description(
        self, note: NoteLike, description: str | None,
    ) -> NoteLike: ...
    async def soft_delete(self, note: NoteLike) -> None: ...
