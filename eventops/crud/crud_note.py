# eventops/crud/crud_note.py
from typing import List
from sqlalchemy.orm import Session

from .base import CRUDBase
from eventops.models.event_note import EventNote
from eventops.schemas.note import NoteCreate, NoteUpdate


class CRUDNote(CRUDBase[EventNote, NoteCreate, NoteUpdate]):
    def get_by_event(self, db: Session, *, event_id: str) -> List[EventNote]:
        """Pinned notes first, newest first within each group."""
        return (
            db.query(self.model)
            .filter(self.model.event_id == event_id)
            .order_by(self.model.is_pinned.desc(), self.model.created_at.desc())
            .all()
        )

    def create_for_event(
        self, db: Session, *, obj_in: NoteCreate, event_id: str, author_id: str
    ) -> EventNote:
        return self.create(db, obj_in=obj_in, event_id=event_id, author_id=author_id)


note = CRUDNote(EventNote)
