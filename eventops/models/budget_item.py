# eventops/models/budget_item.py
from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from eventops.db.base_class import Base
from eventops.utils.time_utils import utcnow
import uuid


class BudgetItem(Base):
    __tablename__ = "budget_items"

    id = Column(String, primary_key=True, default=lambda: f"bud_{uuid.uuid4().hex[:12]}")
    event_id = Column(
        String, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category = Column(String(50), nullable=False)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    estimated_amount = Column(Integer, nullable=False)  # cents
    actual_amount = Column(Integer, nullable=True)  # cents
    # planned | committed | paid | cancelled
    status = Column(String(20), nullable=False, default="planned")

    vendor_id = Column(String, nullable=True)
    sponsor_id = Column(String, nullable=True)
    paid_at = Column(DateTime(timezone=True), nullable=True)
    paid_method = Column(String(50), nullable=True)
    invoice_number = Column(String(100), nullable=True)
    receipt_url = Column(String(500), nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=utcnow)

    event = relationship("Event", back_populates="budget_items")
