# eventops/crud/crud_promo_code.py
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import and_, or_

from .base import CRUDBase
from eventops.models.promo_code import PromoCode
from eventops.models.promo_code_usage import PromoCodeUsage
from eventops.schemas.promo_code import PromoCodeCreate, PromoCodeUpdate


def normalize_code(code: str) -> str:
    return code.strip().upper()


class CRUDPromoCode(CRUDBase[PromoCode, PromoCodeCreate, PromoCodeUpdate]):
    """CRUD operations for PromoCode model."""

    def get_by_code(
        self,
        db: Session,
        *,
        organizer_id: str,
        code: str,
        exclude_id: Optional[str] = None,
    ) -> Optional[PromoCode]:
        """Get an organizer's promo code by its code string."""
        query = db.query(self.model).filter(
            and_(
                self.model.organizer_id == organizer_id,
                self.model.code == normalize_code(code),
            )
        )
        if exclude_id:
            query = query.filter(self.model.id != exclude_id)
        return query.first()

    def find_for_event(
        self,
        db: Session,
        *,
        code: str,
        event_id: str,
        organizer_id: str,
    ) -> Optional[PromoCode]:
        """
        Find a code usable on an event: either scoped to that event or
        organizer-wide for the event's organizer. Active codes win over
        inactive ones so a deactivated duplicate never shadows a live code.
        """
        candidates = (
            db.query(self.model)
            .filter(
                self.model.code == normalize_code(code),
                or_(
                    self.model.event_id == event_id,
                    and_(
                        self.model.event_id == None,
                        self.model.organizer_id == organizer_id,
                    ),
                ),
            )
            .all()
        )
        if not candidates:
            return None

        active = [promo for promo in candidates if promo.is_active]
        return (active or candidates)[0]

    def get_by_organizer(
        self,
        db: Session,
        *,
        organizer_id: str,
        event_id: Optional[str] = None,
        include_inactive: bool = True,
    ) -> List[PromoCode]:
        """Get all promo codes of an organizer, optionally only those for one event."""
        query = db.query(self.model).filter(self.model.organizer_id == organizer_id)

        if event_id:
            query = query.filter(self.model.event_id == event_id)

        if not include_inactive:
            query = query.filter(self.model.is_active == True)

        return query.order_by(self.model.created_at.desc()).all()

    def create_for_organizer(
        self, db: Session, *, obj_in: PromoCodeCreate, organizer_id: str
    ) -> PromoCode:
        """Create a new promo code for an organizer."""
        db_obj = PromoCode(
            organizer_id=organizer_id,
            event_id=obj_in.event_id,
            code=normalize_code(obj_in.code),
            description=obj_in.description,
            discount_type=obj_in.discount_type.value,
            discount_value=obj_in.discount_value,
            max_uses=obj_in.max_uses,
            max_uses_per_email=obj_in.max_uses_per_email,
            min_order_amount=obj_in.min_order_amount,
            valid_from=obj_in.valid_from,
            valid_until=obj_in.valid_until,
            is_active=obj_in.is_active,
            used_count=0,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update(
        self, db: Session, *, db_obj: PromoCode, obj_in: PromoCodeUpdate
    ) -> PromoCode:
        update_data = obj_in.model_dump(exclude_unset=True)
        if update_data.get("code") is not None:
            update_data["code"] = normalize_code(update_data["code"])
        return super().update(db, db_obj=db_obj, obj_in=update_data)

    def increment_usage(self, db: Session, *, promo_code_id: str) -> Optional[PromoCode]:
        promo = self.get(db, id=promo_code_id)
        if not promo:
            return None

        promo.used_count = (promo.used_count or 0) + 1
        db.add(promo)
        db.commit()
        db.refresh(promo)
        return promo

    def count_email_usage(
        self, db: Session, *, promo_code_id: str, email: str
    ) -> int:
        return (
            db.query(PromoCodeUsage)
            .filter(
                PromoCodeUsage.promo_code_id == promo_code_id,
                PromoCodeUsage.buyer_email == email.lower(),
            )
            .count()
        )

    def record_usage(
        self,
        db: Session,
        *,
        promo: PromoCode,
        order_id: str,
        discount_applied: int,
        buyer_email: Optional[str] = None,
    ) -> PromoCodeUsage:
        """Store a redemption and bump the usage counter in one commit."""
        usage = PromoCodeUsage(
            promo_code_id=promo.id,
            order_id=order_id,
            buyer_email=buyer_email.lower() if buyer_email else None,
            discount_applied=discount_applied,
        )
        promo.used_count = (promo.used_count or 0) + 1
        db.add(usage)
        db.add(promo)
        db.commit()
        db.refresh(usage)
        return usage

    def get_usages(self, db: Session, *, promo_code_id: str) -> List[PromoCodeUsage]:
        return (
            db.query(PromoCodeUsage)
            .filter(PromoCodeUsage.promo_code_id == promo_code_id)
            .order_by(PromoCodeUsage.used_at.desc())
            .all()
        )


promo_code = CRUDPromoCode(PromoCode)
