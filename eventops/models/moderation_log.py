# eventops/models/moderation_log.py
from sqlalchemy import Column, String, DateTime, JSON, Text
from eventops.db.base_class import Base
from eventops.utils.time_utils import utcnow
import uuid


class ModerationLog(Base):
    """Audit trail of admin moderation actions."""
    __tablename__ = "moderation_logs"

    id = Column(String, primary_key=True, default=lambda: f"mod_{uuid.uuid4().hex[:12]}")
    admin_id = Column(String, nullable=False, index=True)
    action = Column(String(50), nullable=False)  # e.g. 'sponsor_approved', 'event_flagged'
    target_type = Column(String(20), nullable=False)  # user | event | sponsor | vendor
    target_id = Column(String, nullable=False, index=True)
    reason = Column(Text, nullable=True)
    metadata_ = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
