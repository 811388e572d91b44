# eventops/models/event_task.py
from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from eventops.db.base_class import Base
from eventops.utils.time_utils import utcnow
import uuid


class EventTask(Base):
    __tablename__ = "event_tasks"

    id = Column(String, primary_key=True, default=lambda: f"tsk_{uuid.uuid4().hex[:12]}")
    event_id = Column(
        String, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(300), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(50), nullable=True)
    priority = Column(String(10), nullable=False, default="medium")
    status = Column(String(20), nullable=False, default="todo")
    due_date = Column(DateTime(timezone=True), nullable=True)

    linked_vendor_id = Column(String, nullable=True)
    linked_sponsor_id = Column(String, nullable=True)
    linked_budget_item_id = Column(String, nullable=True)
    notes = Column(Text, nullable=True)

    sort_order = Column(Integer, nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=utcnow)

    event = relationship("Event", back_populates="tasks")
