# eventops/models/attendee.py
from sqlalchemy import Column, String, DateTime, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from eventops.db.base_class import Base
from eventops.utils.time_utils import utcnow
import uuid


class Attendee(Base):
    __tablename__ = "attendees"
    __table_args__ = (
        UniqueConstraint("event_id", "email", name="uq_attendee_event_email"),
    )

    id = Column(String, primary_key=True, default=lambda: f"att_{uuid.uuid4().hex[:12]}")
    event_id = Column(
        String, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    ticket_type = Column(String(100), nullable=True)
    ticket_number = Column(String(50), nullable=False, unique=True, index=True)
    # registered | confirmed | checked_in | cancelled | no_show
    status = Column(String(20), nullable=False, default="registered")
    notes = Column(Text, nullable=True)
    checked_in_at = Column(DateTime(timezone=True), nullable=True)
    checked_in_by = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=utcnow)

    event = relationship("Event", back_populates="attendees")
