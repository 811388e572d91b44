# eventops/crud/crud_event.py
from sqlalchemy.orm import Session
from typing import List, Optional
from .base import CRUDBase
from eventops.models.event import Event
from eventops.schemas.event import EventCreate, EventUpdate
from eventops.utils.time_utils import utcnow


class CRUDEvent(CRUDBase[Event, EventCreate, EventUpdate]):

    def create_with_owner(
        self, db: Session, *, obj_in: EventCreate, owner_id: str
    ) -> Event:
        return self.create(db, obj_in=obj_in, owner_id=owner_id)

    def get_multi_by_owner(
        self,
        db: Session,
        *,
        owner_id: str,
        skip: int = 0,
        limit: int = 100,
        search: str | None = None,
        status: str | None = None,
        sort_by: str | None = "start_date",
        sort_direction: str | None = "desc",
    ) -> dict:
        """
        Gets a list of an organizer's events with optional filters, sorting, and pagination.
        """
        query = db.query(self.model).filter(self.model.owner_id == owner_id)

        if status:
            query = query.filter(self.model.status == status)

        if search:
            query = query.filter(self.model.title.ilike(f"%{search}%"))

        # Get total count before pagination
        total_count = query.count()

        sort_attr = getattr(self.model, sort_by or "start_date", self.model.start_date)
        if sort_direction and sort_direction.lower() == "desc":
            query = query.order_by(sort_attr.desc())
        else:
            query = query.order_by(sort_attr.asc())

        events = query.offset(skip).limit(limit).all()
        return {"events": events, "totalCount": total_count}

    def get_upcoming(
        self, db: Session, *, owner_id: str, limit: int = 5
    ) -> List[Event]:
        """Events of an organizer starting in the future, soonest first."""
        return (
            db.query(self.model)
            .filter(
                self.model.owner_id == owner_id,
                self.model.start_date > utcnow(),
                self.model.status != "cancelled",
            )
            .order_by(self.model.start_date.asc())
            .limit(limit)
            .all()
        )

    def count_by_organization(self, db: Session, *, organization_id: str) -> int:
        return (
            db.query(self.model)
            .filter(self.model.organization_id == organization_id)
            .count()
        )

    def get_flagged(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[Event]:
        return (
            db.query(self.model)
            .filter(self.model.is_flagged == True)
            .order_by(self.model.flagged_at.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def flag(
        self, db: Session, *, db_obj: Event, reason: str, severity: str, admin_id: str
    ) -> Event:
        db_obj.is_flagged = True
        db_obj.flagged_reason = reason
        db_obj.flagged_severity = severity
        db_obj.flagged_by = admin_id
        db_obj.flagged_at = utcnow()
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def unflag(self, db: Session, *, db_obj: Event) -> Event:
        db_obj.is_flagged = False
        db_obj.flagged_reason = None
        db_obj.flagged_severity = None
        db_obj.flagged_by = None
        db_obj.flagged_at = None
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_owned(self, db: Session, *, id: str, owner_id: str) -> Optional[Event]:
        event = self.get(db, id=id)
        if event and event.owner_id == owner_id:
            return event
        return None


event = CRUDEvent(Event)
