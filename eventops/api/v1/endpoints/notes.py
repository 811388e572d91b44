# eventops/api/v1/endpoints/notes.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from eventops.api import deps
from eventops.crud import crud_note
from eventops.db.session import get_db
from eventops.schemas.note import Note as NoteSchema, NoteCreate, NoteUpdate
from eventops.schemas.token import TokenPayload
from eventops.services.event_access import get_owned_event

router = APIRouter(prefix="/events/{eventId}/notes", tags=["Notes"])


def _get_note(db: Session, event_id: str, note_id: str):
    note = crud_note.note.get(db, id=note_id)
    if not note or note.event_id != event_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
    return note


@router.get("", response_model=List[NoteSchema])
def list_notes(
    eventId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Pinned notes first, then newest first."""
    event = get_owned_event(db, eventId, current_user, allow_admin=True)
    return crud_note.note.get_by_event(db, event_id=event.id)


@router.post("", response_model=NoteSchema, status_code=status.HTTP_201_CREATED)
def create_note(
    eventId: str,
    note_in: NoteCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    event = get_owned_event(db, eventId, current_user)
    return crud_note.note.create_for_event(
        db, obj_in=note_in, event_id=event.id, author_id=current_user.sub
    )


@router.patch("/{noteId}", response_model=NoteSchema)
def update_note(
    eventId: str,
    noteId: str,
    note_in: NoteUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    event = get_owned_event(db, eventId, current_user)
    note = _get_note(db, event.id, noteId)
    return crud_note.note.update(db, db_obj=note, obj_in=note_in)


@router.delete("/{noteId}", status_code=status.HTTP_204_NO_CONTENT)
def delete_note(
    eventId: str,
    noteId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    event = get_owned_event(db, eventId, current_user)
    note = _get_note(db, event.id, noteId)
    crud_note.note.remove(db, id=note.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
