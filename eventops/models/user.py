# eventops/models/user.py
from sqlalchemy import Column, String, Boolean, DateTime, Text
from eventops.db.base_class import Base
from eventops.utils.time_utils import utcnow
import uuid


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=lambda: f"usr_{uuid.uuid4().hex[:12]}")
    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(200), nullable=False)
    password_hash = Column(String, nullable=False)
    # superadmin | admin | organizer | vendor | sponsor | volunteer
    role = Column(String(20), nullable=False, default="organizer", index=True)
    avatar_url = Column(String(500), nullable=True)

    is_suspended = Column(Boolean, nullable=False, default=False)
    suspended_at = Column(DateTime(timezone=True), nullable=True)
    suspension_reason = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
