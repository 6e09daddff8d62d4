"""Note Schemas — note payloads and projections.

Invariants:
    - description may be null or omitted (stored as NULL)
    - owner_id is read from the record's user_id; clients can never set it
"""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from notes_api.core.domain_types import NoteStatus


class NoteWrite(BaseModel):
    """Body for create and update."""
    description: str | None = Field(None, max_length=100_000)


class NoteResponse(BaseModel):
    """Note as seen by API clients."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    description: str | None
    owner_id: int = Field(validation_alias=AliasChoices("user_id", "owner_id"))
    created_at: datetime
    updated_at: datetime


class NoteDeleted(BaseModel):
    id: int
    status: NoteStatus = NoteStatus.DELETED
