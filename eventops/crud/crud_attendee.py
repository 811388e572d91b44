# eventops/crud/crud_attendee.py
import secrets
import string
from typing import List, Optional
from sqlalchemy.orm import Session

from .base import CRUDBase
from eventops.models.attendee import Attendee
from eventops.schemas.attendee import AttendeeCreate, AttendeeUpdate
from eventops.utils.time_utils import now_ms, utcnow

_BASE36 = string.digits + string.ascii_uppercase


def _to_base36(value: int) -> str:
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits)) or "0"


def generate_ticket_number() -> str:
    """TKT-<base36 timestamp>-<6 random chars>"""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(6))
    return f"TKT-{_to_base36(now_ms())}-{suffix}"


class CRUDAttendee(CRUDBase[Attendee, AttendeeCreate, AttendeeUpdate]):
    def get_by_event(
        self,
        db: Session,
        *,
        event_id: str,
        status: str | None = None,
        search: str | None = None,
    ) -> List[Attendee]:
        query = db.query(self.model).filter(self.model.event_id == event_id)
        if status:
            query = query.filter(self.model.status == status)
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                self.model.name.ilike(pattern)
                | self.model.email.ilike(pattern)
                | self.model.ticket_number.ilike(pattern)
            )
        return query.order_by(self.model.created_at.desc()).all()

    def get_by_email(self, db: Session, *, event_id: str, email: str) -> Optional[Attendee]:
        return (
            db.query(self.model)
            .filter(self.model.event_id == event_id, self.model.email == email.lower())
            .first()
        )

    def get_by_ticket_number(self, db: Session, *, ticket_number: str) -> Optional[Attendee]:
        return (
            db.query(self.model)
            .filter(self.model.ticket_number == ticket_number.strip().upper())
            .first()
        )

    def get_stats(self, db: Session, *, event_id: str) -> dict:
        stats = {
            "total": 0,
            "registered": 0,
            "confirmed": 0,
            "checked_in": 0,
            "cancelled": 0,
            "no_show": 0,
            "check_in_rate": 0,
        }
        for attendee in db.query(self.model).filter(self.model.event_id == event_id).all():
            stats["total"] += 1
            if attendee.status in stats:
                stats[attendee.status] += 1

        # Cancelled registrations do not count towards the rate
        eligible = stats["total"] - stats["cancelled"]
        if eligible > 0:
            stats["check_in_rate"] = round(stats["checked_in"] / eligible * 100)
        return stats

    def create_for_event(
        self, db: Session, *, obj_in: AttendeeCreate, event_id: str
    ) -> Attendee:
        db_obj = Attendee(
            event_id=event_id,
            name=obj_in.name.strip(),
            email=obj_in.email.lower(),
            phone=obj_in.phone,
            ticket_type=obj_in.ticket_type,
            notes=obj_in.notes,
            ticket_number=generate_ticket_number(),
            status="registered",
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def check_in(self, db: Session, *, db_obj: Attendee, checked_in_by: str) -> Attendee:
        db_obj.status = "checked_in"
        db_obj.checked_in_at = utcnow()
        db_obj.checked_in_by = checked_in_by
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def undo_check_in(self, db: Session, *, db_obj: Attendee) -> Attendee:
        db_obj.status = "confirmed"
        db_obj.checked_in_at = None
        db_obj.checked_in_by = None
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj


attendee = CRUDAttendee(Attendee)
