# eventops/models/failed_login_attempt.py
from sqlalchemy import Column, String, BigInteger, JSON
from eventops.db.base_class import Base
import uuid


class FailedLoginAttempt(Base):
    """
    Failed login bookkeeping for one identifier (email or IP).

    Timestamps are epoch milliseconds so the lockout arithmetic stays in a
    single unit.
    """
    __tablename__ = "failed_login_attempts"

    id = Column(String, primary_key=True, default=lambda: f"fla_{uuid.uuid4().hex[:12]}")
    identifier = Column(String(255), nullable=False, unique=True, index=True)
    attempts = Column(JSON, nullable=False, default=list)
    locked_until = Column(BigInteger, nullable=True)
    created_at = Column(BigInteger, nullable=False)
