# eventops/models/event_note.py
from sqlalchemy import Column, String, Boolean, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from eventops.db.base_class import Base
from eventops.utils.time_utils import utcnow
import uuid


class EventNote(Base):
    __tablename__ = "event_notes"

    id = Column(String, primary_key=True, default=lambda: f"note_{uuid.uuid4().hex[:12]}")
    event_id = Column(
        String, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    author_id = Column(String, nullable=False)
    title = Column(String(200), nullable=True)
    content = Column(Text, nullable=False)
    is_pinned = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=utcnow)

    event = relationship("Event", back_populates="notes")
