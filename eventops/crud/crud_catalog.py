# eventops/crud/crud_catalog.py
"""
Shared CRUD for moderated catalog entries (sponsors and vendors).

Entries are created 'pending', become publicly listed once approved, and
are linked to events through a separate link model.
"""

from typing import List, Optional, Tuple, Type
from sqlalchemy.orm import Session

from .base import CRUDBase, ModelType, CreateSchemaType, UpdateSchemaType
from eventops.utils.time_utils import utcnow


class CRUDCatalog(CRUDBase[ModelType, CreateSchemaType, UpdateSchemaType]):
    # Column used for the public facet filter (industry / category)
    facet_field = "category"

    def get_approved(
        self,
        db: Session,
        *,
        facet: str | None = None,
        search: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[ModelType]:
        query = db.query(self.model).filter(self.model.status == "approved")
        if facet:
            query = query.filter(getattr(self.model, self.facet_field) == facet)
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                self.model.name.ilike(pattern) | self.model.description.ilike(pattern)
            )
        return query.order_by(self.model.name).offset(skip).limit(limit).all()

    def get_facets(self, db: Session) -> List[str]:
        """Distinct facet values among approved entries, sorted."""
        column = getattr(self.model, self.facet_field)
        rows = (
            db.query(column)
            .filter(self.model.status == "approved")
            .distinct()
            .all()
        )
        return sorted(value for (value,) in rows if value)

    def get_by_status(
        self, db: Session, *, status: str | None = None, skip: int = 0, limit: int = 100
    ) -> List[ModelType]:
        query = db.query(self.model)
        if status:
            query = query.filter(self.model.status == status)
        return query.order_by(self.model.created_at.desc()).offset(skip).limit(limit).all()

    def create_pending(
        self, db: Session, *, obj_in: CreateSchemaType, submitted_by: str
    ) -> ModelType:
        # JSON mode turns URLs and e-mail types into plain strings
        data = obj_in.model_dump(mode="json")
        db_obj = self.model(
            **data, submitted_by=submitted_by, status="pending", verified=False
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def approve(
        self, db: Session, *, db_obj: ModelType, admin_id: str, notes: Optional[str] = None
    ) -> ModelType:
        db_obj.status = "approved"
        db_obj.verified = True
        db_obj.reviewed_by = admin_id
        db_obj.reviewed_at = utcnow()
        db_obj.review_notes = notes
        db_obj.rejection_reason = None
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def reject(
        self, db: Session, *, db_obj: ModelType, admin_id: str, reason: Optional[str] = None
    ) -> ModelType:
        db_obj.status = "rejected"
        db_obj.verified = False
        db_obj.reviewed_by = admin_id
        db_obj.reviewed_at = utcnow()
        db_obj.rejection_reason = reason
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj


class CRUDEventLink:
    """Event <-> catalog entry relationship (EventSponsor, EventVendor)."""

    def __init__(self, model: Type, target_field: str):
        self.model = model
        self.target_field = target_field

    def get(self, db: Session, id: str):
        return db.query(self.model).filter(self.model.id == id).first()

    def get_by_event(self, db: Session, *, event_id: str) -> list:
        return (
            db.query(self.model)
            .filter(self.model.event_id == event_id)
            .order_by(self.model.created_at)
            .all()
        )

    def get_link(self, db: Session, *, event_id: str, target_id: str):
        return (
            db.query(self.model)
            .filter(
                self.model.event_id == event_id,
                getattr(self.model, self.target_field) == target_id,
            )
            .first()
        )

    def create_link(self, db: Session, *, event_id: str, target_id: str, **fields) -> Tuple[object, bool]:
        """Create the link, or return the existing one. Second value is True if it existed."""
        existing = self.get_link(db, event_id=event_id, target_id=target_id)
        if existing:
            return existing, True

        db_obj = self.model(
            event_id=event_id, status="inquiry", **{self.target_field: target_id}, **fields
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj, False

    def remove(self, db: Session, *, db_obj) -> None:
        db.delete(db_obj)
        db.commit()
