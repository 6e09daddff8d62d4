"""Note Routes — create/read/update/delete, owner or admin only.

Invariants:
    - Order per request: rate admission (before the body is read) → token verification → service
    - Note ids are numeric path segments; anything else does not match a route (404)
"""

from fastapi import APIRouter, Depends

from notes_api.api.admission import RateAdmittedRoute
from notes_api.api.dependencies import get_current_claims, get_note_service
from notes_api.core.domain_types import NoteId
from notes_api.core.session_claims import SessionClaims
from notes_api.schemas.note import NoteDeleted, NoteResponse, NoteWrite
from notes_api.services.note_service import NoteService

router = APIRouter(
    prefix="/notes", tags=["notes"],
    route_class=RateAdmittedRoute,
)


@router.post("/new", response_model=NoteResponse)
async def create_note(
    body: NoteWrite | None = None,
    claims: SessionClaims = Depends(get_current_claims),
    notes: NoteService = Depends(get_note_service),
):
    body = body or NoteWrite()
    note = await notes.create(claims, body.description)
    return NoteResponse.model_validate(note)


@router.get("/{note_id:int}", response_model=NoteResponse)
async def read_note(
    note_id: int,
    claims: SessionClaims = Depends(get_current_claims),
    notes: NoteService = Depends(get_note_service),
):
    note = await notes.read(claims, NoteId(note_id))
    return NoteResponse.model_validate(note)


@router.put("/{note_id:int}", response_model=NoteResponse)
async def update_note(
    note_id: int,
    body: NoteWrite | None = None,
    claims: SessionClaims = Depends(get_current_claims),
    notes: NoteService = Depends(get_note_service),
):
    """Replace the note body."""
    body = body or NoteWrite()
    note = await notes.update(claims, NoteId(note_id), body.description)
    return NoteResponse.model_validate(note)


@router.delete("/{note_id:int}", response_model=NoteDeleted)
async def delete_note(
    note_id: int,
    claims: SessionClaims = Depends(get_current_claims),
    notes: NoteService = Depends(get_note_service),
):
    """Soft-delete the note. A second delete answers 404."""
    return await notes.delete(claims, NoteId(note_id))
