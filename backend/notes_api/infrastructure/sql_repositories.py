"""SQL Repositories — SQLAlchemy implementations of the core storage protocols.

Invariants:
    - get_live never returns a soft-deleted note
    - Every write commits or rolls back as a unit
    - A unique-constraint loss on users.username surfaces as DuplicateUsernameError
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.core.domain_types import NoteId, UserId
from notes_api.core.errors import DuplicateUsernameError
from notes_api.models.note import Note
from notes_api.models.user import User

logger = logging.getLogger(__name__)


class SqlUserRepository:
    """Credential store over the users table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_username(self, username: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.username == username),
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, user_id: UserId) -> User | None:
        return await self.db.get(User, user_id)

    async def create(
        self, name: str, username: str, password_hash: str, is_admin: bool,
    ) -> User:
        user = User(
            name=name, username=username,
            password_hash=password_hash, is_admin=is_admin,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.info("Username lost unique constraint race on insert")
            raise DuplicateUsernameError()
        return user


class SqlNoteRepository:
    """Note persistence over the notes table, with soft delete."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_live(self, note_id: NoteId) -> Note | None:
        result = await self.db.execute(
            select(Note)
            .where(Note.id == note_id)
            .where(Note.deleted_at.is_(None)),
        )
        return result.scalar_one_or_none()

    async def create(self, owner_id: UserId, description: str | None) -> Note:
        note = Note(description=description, user_id=owner_id)
        self.db.add(note)
        await self.db.commit()
        return note

    async def update_description(
        self, note: Note, description: str | None,
    ) -> Note:
        note.description = description
        note.updated_at = datetime.now(timezone.utc)
        await self.db.commit()
        return note

    async def soft_delete(self, note: Note) -> None:
        now = datetime.now(timezone.utc)
        note.deleted_at = now
        note.updated_at = now
        await self.db.commit()
