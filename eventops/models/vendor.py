# eventops/models/vendor.py
"""
Vendor catalog and event-vendor relationships. Mirrors the sponsor flow:
pending registration, admin review, then organizers link approved vendors.
"""

import uuid
from sqlalchemy import Column, String, Boolean, DateTime, JSON, ForeignKey, Integer, Float, Text
from sqlalchemy.orm import relationship
from eventops.db.base_class import Base
from eventops.utils.time_utils import utcnow


class Vendor(Base):
    __tablename__ = "vendors"

    id = Column(String, primary_key=True, default=lambda: f"ven_{uuid.uuid4().hex[:12]}")
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(100), nullable=False, index=True)
    services = Column(JSON, nullable=True)
    location = Column(String(200), nullable=True)
    price_min = Column(Integer, nullable=True)
    price_max = Column(Integer, nullable=True)
    rating = Column(Float, nullable=True)

    contact_name = Column(String(200), nullable=True)
    contact_email = Column(String(255), nullable=True)
    website = Column(String(500), nullable=True)
    submitted_by = Column(String, nullable=True)

    status = Column(String(20), nullable=False, default="pending", index=True)
    verified = Column(Boolean, nullable=False, default=False)
    reviewed_by = Column(String, nullable=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)
    review_notes = Column(Text, nullable=True)
    rejection_reason = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=utcnow)


class EventVendor(Base):
    __tablename__ = "event_vendors"

    id = Column(String, primary_key=True, default=lambda: f"evv_{uuid.uuid4().hex[:12]}")
    event_id = Column(
        String, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    vendor_id = Column(String, ForeignKey("vendors.id"), nullable=False, index=True)
    # inquiry | negotiating | confirmed | declined | completed
    status = Column(String(20), nullable=False, default="inquiry")
    proposed_budget = Column(Integer, nullable=True)
    final_budget = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=utcnow)

    vendor = relationship("Vendor")
