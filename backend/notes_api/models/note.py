"""Note ORM — a user's text note.

Invariants:
    - user_id is set at creation and never changes (ownership never transfers)
    - description is the note body and may be NULL
    - deleted_at IS NOT NULL means the note is logically gone; repositories never return it
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from notes_api.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """Note owned by exactly one user."""
    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    owner: Mapped["User"] = relationship(
        "User", back_populates="notes", lazy="raise",
    )
