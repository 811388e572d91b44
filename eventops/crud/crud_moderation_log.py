# eventops/crud/crud_moderation_log.py
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session

from eventops.models.moderation_log import ModerationLog


class CRUDModerationLog:
    def log_action(
        self,
        db: Session,
        *,
        admin_id: str,
        action: str,
        target_type: str,
        target_id: str,
        reason: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> ModerationLog:
        entry = ModerationLog(
            admin_id=admin_id,
            action=action,
            target_type=target_type,
            target_id=target_id,
            reason=reason,
            metadata_=metadata,
        )
        db.add(entry)
        db.commit()
        db.refresh(entry)
        return entry

    def get_multi(
        self,
        db: Session,
        *,
        target_type: str | None = None,
        target_id: str | None = None,
        action: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[ModerationLog]:
        query = db.query(ModerationLog)
        if target_type:
            query = query.filter(ModerationLog.target_type == target_type)
        if target_id:
            query = query.filter(ModerationLog.target_id == target_id)
        if action:
            query = query.filter(ModerationLog.action == action)
        return query.order_by(ModerationLog.created_at.desc()).offset(skip).limit(limit).all()


moderation_log = CRUDModerationLog()
