# eventops/models/sponsor.py
"""
Sponsor catalog and event-sponsor relationships.

A sponsor registers once (status 'pending') and becomes visible to
organizers after an admin approves it. Organizers then attach approved
sponsors to their events through EventSponsor.
"""

import uuid
from sqlalchemy import Column, String, Boolean, DateTime, JSON, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from eventops.db.base_class import Base
from eventops.utils.time_utils import utcnow


class Sponsor(Base):
    __tablename__ = "sponsors"

    id = Column(
        String, primary_key=True, default=lambda: f"spon_{uuid.uuid4().hex[:12]}"
    )
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    industry = Column(String(100), nullable=False, index=True)
    sponsorship_tiers = Column(JSON, nullable=True)  # e.g. ["gold", "silver"]
    budget_min = Column(Integer, nullable=True)
    budget_max = Column(Integer, nullable=True)
    target_event_types = Column(JSON, nullable=True)
    target_audience = Column(Text, nullable=True)

    contact_name = Column(String(200), nullable=True)
    contact_email = Column(String(255), nullable=True)
    website = Column(String(500), nullable=True)
    submitted_by = Column(String, nullable=True)

    # Moderation: pending | approved | rejected
    status = Column(String(20), nullable=False, default="pending", index=True)
    verified = Column(Boolean, nullable=False, default=False)
    reviewed_by = Column(String, nullable=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)
    review_notes = Column(Text, nullable=True)
    rejection_reason = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=utcnow)


class EventSponsor(Base):
    __tablename__ = "event_sponsors"

    id = Column(String, primary_key=True, default=lambda: f"esp_{uuid.uuid4().hex[:12]}")
    event_id = Column(
        String, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    sponsor_id = Column(String, ForeignKey("sponsors.id"), nullable=False, index=True)
    # inquiry | negotiating | confirmed | declined
    status = Column(String(20), nullable=False, default="inquiry")
    tier = Column(String(50), nullable=True)
    proposed_amount = Column(Integer, nullable=True)
    final_amount = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=utcnow)

    sponsor = relationship("Sponsor")
