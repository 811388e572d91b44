# eventops/models/ai_conversation.py
from sqlalchemy import Column, String, DateTime, JSON, ForeignKey
from eventops.db.base_class import Base
from eventops.utils.time_utils import utcnow
import uuid


class AIConversation(Base):
    __tablename__ = "ai_conversations"

    id = Column(String, primary_key=True, default=lambda: f"conv_{uuid.uuid4().hex[:12]}")
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    event_id = Column(String, nullable=True)
    title = Column(String(200), nullable=True)
    # Anthropic-format message list: [{"role": ..., "content": ...}, ...]
    messages = Column(JSON, nullable=False, default=list)
    # tool_use ids of write actions already confirmed or declined
    resolved_tool_calls = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
