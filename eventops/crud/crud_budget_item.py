# eventops/crud/crud_budget_item.py
from typing import List, Optional
from sqlalchemy.orm import Session

from .base import CRUDBase
from eventops.models.budget_item import BudgetItem
from eventops.models.event import Event
from eventops.schemas.budget import BudgetItemCreate, BudgetItemUpdate
from eventops.utils.time_utils import utcnow


class CRUDBudgetItem(CRUDBase[BudgetItem, BudgetItemCreate, BudgetItemUpdate]):
    def get_by_event(
        self, db: Session, *, event_id: str, category: str | None = None
    ) -> List[BudgetItem]:
        query = db.query(self.model).filter(self.model.event_id == event_id)
        if category:
            query = query.filter(self.model.category == category)
        return query.order_by(self.model.category, self.model.created_at).all()

    def get_summary(self, db: Session, *, event: Event) -> dict:
        """
        Totals for an event's budget. Cancelled items are excluded; paid and
        committed amounts use the actual amount when known, else the estimate.
        """
        items = [
            item
            for item in db.query(self.model).filter(self.model.event_id == event.id).all()
            if item.status != "cancelled"
        ]

        total_estimated = sum(item.estimated_amount or 0 for item in items)
        total_actual = sum(item.actual_amount or 0 for item in items)
        total_paid = sum(
            item.actual_amount or item.estimated_amount or 0
            for item in items
            if item.status == "paid"
        )
        total_committed = sum(
            item.actual_amount or item.estimated_amount or 0
            for item in items
            if item.status == "committed"
        )

        by_category = {}
        for item in items:
            bucket = by_category.setdefault(
                item.category, {"estimated": 0, "actual": 0, "count": 0}
            )
            bucket["estimated"] += item.estimated_amount or 0
            bucket["actual"] += item.actual_amount or 0
            bucket["count"] += 1

        variance = total_actual - total_estimated
        event_budget = event.budget or 0

        return {
            "total_estimated": total_estimated,
            "total_actual": total_actual,
            "total_paid": total_paid,
            "total_committed": total_committed,
            "total_planned": total_estimated - total_paid - total_committed,
            "variance": variance,
            "variance_percent": (variance / total_estimated * 100) if total_estimated else 0.0,
            "by_category": by_category,
            "item_count": len(items),
            "event_budget": event_budget,
            "remaining": event_budget - total_estimated,
        }

    def create_for_event(
        self, db: Session, *, obj_in: BudgetItemCreate, event_id: str
    ) -> BudgetItem:
        extra = {"event_id": event_id}
        if obj_in.status == "paid":
            extra["paid_at"] = utcnow()
        return self.create(db, obj_in=obj_in, **extra)

    def update(
        self, db: Session, *, db_obj: BudgetItem, obj_in: BudgetItemUpdate
    ) -> BudgetItem:
        update_data = obj_in.model_dump(exclude_unset=True)
        new_status = update_data.get("status")
        if new_status is not None:
            new_status = getattr(new_status, "value", new_status)
            if new_status == "paid" and db_obj.paid_at is None:
                update_data["paid_at"] = utcnow()
        return super().update(db, db_obj=db_obj, obj_in=update_data)

    def bulk_update_status(
        self, db: Session, *, event_id: str, item_ids: List[str], status: str
    ) -> int:
        """Set the status of several items of one event. Returns the number updated."""
        items = (
            db.query(self.model)
            .filter(self.model.event_id == event_id, self.model.id.in_(item_ids))
            .all()
        )
        now = utcnow()
        for item in items:
            item.status = status
            if status == "paid" and item.paid_at is None:
                item.paid_at = now
            db.add(item)
        db.commit()
        return len(items)

    def get_for_event(self, db: Session, *, id: str, event_id: str) -> Optional[BudgetItem]:
        item = self.get(db, id=id)
        if item and item.event_id == event_id:
            return item
        return None


budget_item = CRUDBudgetItem(BudgetItem)
