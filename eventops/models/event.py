# eventops/models/event.py
from sqlalchemy import Column, Integer, String, DateTime, Boolean, Text, ForeignKey
from sqlalchemy.orm import relationship
from eventops.db.base_class import Base
from eventops.utils.time_utils import utcnow
import uuid


class Event(Base):
    __tablename__ = "events"

    id = Column(
        String, primary_key=True, default=lambda: f"evt_{uuid.uuid4().hex[:12]}"
    )
    owner_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    organization_id = Column(String, ForeignKey("organizations.id"), nullable=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    event_type = Column(String(50), nullable=True)
    # draft | planning | active | completed | cancelled
    status = Column(String(20), nullable=False, default="draft", index=True)
    start_date = Column(DateTime(timezone=True), nullable=True)
    end_date = Column(DateTime(timezone=True), nullable=True)
    location = Column(String(500), nullable=True)
    budget = Column(Integer, nullable=True)  # cents
    expected_attendees = Column(Integer, nullable=True)

    # Moderation
    is_flagged = Column(Boolean, nullable=False, default=False)
    flagged_reason = Column(Text, nullable=True)
    flagged_severity = Column(String(10), nullable=True)  # low | medium | high
    flagged_by = Column(String, nullable=True)
    flagged_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    tasks = relationship("EventTask", back_populates="event", cascade="all, delete-orphan")
    budget_items = relationship("BudgetItem", back_populates="event", cascade="all, delete-orphan")
    notes = relationship("EventNote", back_populates="event", cascade="all, delete-orphan")
    attendees = relationship("Attendee", back_populates="event", cascade="all, delete-orphan")
