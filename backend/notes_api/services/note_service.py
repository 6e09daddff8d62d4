"""Note Service — CRUD on notes with ownership enforcement.

Invariants:
    - Create is allowed for any authenticated actor; the note is owned by the actor
    - Read/Update/Delete: NoteNotFoundError before AccessDeniedError (lookup, then authorize)
    - Update replaces only the body and bumps updated_at
    - Delete is soft and NOT idempotent: a second delete raises NoteNotFoundError
"""

import logging

from notes_api.core.domain_types import NoteId, NoteStatus
from notes_api.core.enforce_ownership import enforce_ownership
from notes_api.core.errors import NoteNotFoundError
from notes_api.core.repository_protocols import NoteLike, NoteRepository
from notes_api.core.session_claims import SessionClaims

logger = logging.getLogger(__name__)


class NoteService:
    """Owner-scoped note operations."""

    def __init__(self, notes: NoteRepository):
        self.notes = notes

    async def create(
        self, actor: SessionClaims, description: str | None,
    ) -> NoteLike:
        note = await self.notes.create(actor.user_id, description)
        logger.info(
            "Note created", extra={"user_id": actor.user_id, "note_id": note.id},
        )
        return note

    async def read(self, actor: SessionClaims, note_id: NoteId) -> NoteLike:
        return await self._get_authorized(actor, note_id)

    async def update(
        self, actor: SessionClaims, note_id: NoteId, description: str | None,
    ) -> NoteLike:
        note = await self._get_authorized(actor, note_id)
        return await self.notes.update_description(note, description)

    async def delete(self, actor: SessionClaims, note_id: NoteId) -> dict:
        note = await self._get_authorized(actor, note_id)
        await self.notes.soft_delete(note)
        logger.info(
            "Note deleted", extra={"user_id": actor.user_id, "note_id": note_id},
        )
        return {"id": note.id, "status": NoteStatus.DELETED.value}

    async def _get_authorized(
        self, actor: SessionClaims, note_id: NoteId,
    ) -> NoteLike:
        note = await self.notes.get_live(note_id)
        if note is None:
            raise NoteNotFoundError(note_id)
        enforce_ownership(actor, note.user_id, note_id=note_id)
        return note
