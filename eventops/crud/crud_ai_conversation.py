# eventops/crud/crud_ai_conversation.py
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session

from eventops.models.ai_conversation import AIConversation


class CRUDAIConversation:
    def get_for_user(self, db: Session, *, id: str, user_id: str) -> Optional[AIConversation]:
        return (
            db.query(AIConversation)
            .filter(AIConversation.id == id, AIConversation.user_id == user_id)
            .first()
        )

    def list_for_user(self, db: Session, *, user_id: str, limit: int = 20) -> List[AIConversation]:
        return (
            db.query(AIConversation)
            .filter(AIConversation.user_id == user_id)
            .order_by(AIConversation.updated_at.desc())
            .limit(limit)
            .all()
        )

    def create(
        self, db: Session, *, user_id: str, title: str, event_id: Optional[str] = None
    ) -> AIConversation:
        conversation = AIConversation(
            user_id=user_id, event_id=event_id, title=title[:200], messages=[]
        )
        db.add(conversation)
        db.commit()
        db.refresh(conversation)
        return conversation

    def save_messages(
        self, db: Session, *, conversation: AIConversation, messages: List[Dict[str, Any]]
    ) -> AIConversation:
        # Assign a new list so the JSON column is flagged dirty
        conversation.messages = list(messages)
        db.add(conversation)
        db.commit()
        db.refresh(conversation)
        return conversation

    def mark_resolved(
        self, db: Session, *, conversation: AIConversation, tool_use_id: str
    ) -> AIConversation:
        conversation.resolved_tool_calls = list(conversation.resolved_tool_calls or []) + [tool_use_id]
        db.add(conversation)
        db.commit()
        db.refresh(conversation)
        return conversation

    def remove(self, db: Session, *, conversation: AIConversation) -> None:
        db.delete(conversation)
        db.commit()


ai_conversation = CRUDAIConversation()
