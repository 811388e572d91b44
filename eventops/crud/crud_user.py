# eventops/crud/crud_user.py
from typing import Optional, List
from sqlalchemy.orm import Session

from .base import CRUDBase
from eventops.core.security import hash_password
from eventops.models.user import User
from eventops.schemas.user import UserRegister, UserUpdate
from eventops.utils.time_utils import utcnow


class CRUDUser(CRUDBase[User, UserRegister, UserUpdate]):
    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return db.query(self.model).filter(self.model.email == email.lower()).first()

    def create(self, db: Session, *, obj_in: UserRegister, **extra) -> User:
        db_obj = User(
            email=obj_in.email.lower(),
            name=obj_in.name.strip(),
            password_hash=hash_password(obj_in.password),
            role=extra.get("role", obj_in.role),
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_multi_filtered(
        self,
        db: Session,
        *,
        role: str | None = None,
        suspended: bool | None = None,
        search: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[User]:
        query = db.query(self.model)
        if role:
            query = query.filter(self.model.role == role)
        if suspended is not None:
            query = query.filter(self.model.is_suspended == suspended)
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                self.model.name.ilike(pattern) | self.model.email.ilike(pattern)
            )
        return query.order_by(self.model.created_at.desc()).offset(skip).limit(limit).all()

    def suspend(self, db: Session, *, db_obj: User, reason: str) -> User:
        db_obj.is_suspended = True
        db_obj.suspended_at = utcnow()
        db_obj.suspension_reason = reason
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def unsuspend(self, db: Session, *, db_obj: User) -> User:
        db_obj.is_suspended = False
        db_obj.suspended_at = None
        db_obj.suspension_reason = None
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj


user = CRUDUser(User)
