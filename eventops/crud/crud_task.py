# eventops/crud/crud_task.py
from datetime import timedelta
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from .base import CRUDBase
from eventops.constants.tasks import DEFAULT_TEMPLATE, PRIORITY_ORDER, TASK_TEMPLATES
from eventops.models.event_task import EventTask
from eventops.schemas.task import TaskCreate, TaskUpdate
from eventops.utils.time_utils import as_utc, utcnow


def _task_sort_key(task: EventTask):
    # Ordered tasks first (by sort_order), then priority, then due date
    # (tasks without a due date last).
    due = as_utc(task.due_date)
    return (
        task.sort_order is None,
        task.sort_order or 0,
        PRIORITY_ORDER.get(task.priority, len(PRIORITY_ORDER)),
        due is None,
        due.timestamp() if due else 0,
    )


class CRUDTask(CRUDBase[EventTask, TaskCreate, TaskUpdate]):
    def get_by_event(
        self, db: Session, *, event_id: str, status: str | None = None
    ) -> List[EventTask]:
        query = db.query(self.model).filter(self.model.event_id == event_id)
        if status:
            query = query.filter(self.model.status == status)
        return sorted(query.all(), key=_task_sort_key)

    def get_summary(self, db: Session, *, event_id: str) -> dict:
        tasks = db.query(self.model).filter(self.model.event_id == event_id).all()

        now = utcnow()
        today = now.replace(hour=0, minute=0, second=0, microsecond=0)
        week_from_now = today + timedelta(days=7)

        by_status = {"todo": 0, "in_progress": 0, "blocked": 0, "completed": 0}
        overdue = due_this_week = urgent = 0
        for task in tasks:
            by_status[task.status] = by_status.get(task.status, 0) + 1
            if task.status == "completed":
                continue
            due = as_utc(task.due_date)
            if due and due < now:
                overdue += 1
            if due and today <= due <= week_from_now:
                due_this_week += 1
            if task.priority == "urgent":
                urgent += 1

        total = len(tasks)
        completion_rate = round(by_status["completed"] / total * 100) if total else 0

        return {
            "total": total,
            **by_status,
            "overdue": overdue,
            "due_this_week": due_this_week,
            "urgent": urgent,
            "completion_rate": completion_rate,
        }

    def _max_sort_order(self, db: Session, event_id: str) -> int:
        value = (
            db.query(func.max(self.model.sort_order))
            .filter(self.model.event_id == event_id)
            .scalar()
        )
        return value or 0

    def create_for_event(
        self, db: Session, *, obj_in: TaskCreate, event_id: str
    ) -> EventTask:
        extra = {
            "event_id": event_id,
            "sort_order": self._max_sort_order(db, event_id) + 1,
        }
        if obj_in.status == "completed":
            extra["completed_at"] = utcnow()
        return self.create(db, obj_in=obj_in, **extra)

    def update(self, db: Session, *, db_obj: EventTask, obj_in: TaskUpdate) -> EventTask:
        update_data = obj_in.model_dump(exclude_unset=True)
        new_status = update_data.get("status")
        if new_status is not None:
            new_status = getattr(new_status, "value", new_status)
            if new_status == "completed" and db_obj.status != "completed":
                update_data["completed_at"] = utcnow()
            elif new_status != "completed" and db_obj.status == "completed":
                update_data["completed_at"] = None
        return super().update(db, db_obj=db_obj, obj_in=update_data)

    def toggle_complete(self, db: Session, *, db_obj: EventTask) -> EventTask:
        if db_obj.status == "completed":
            db_obj.status = "todo"
            db_obj.completed_at = None
        else:
            db_obj.status = "completed"
            db_obj.completed_at = utcnow()
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def create_from_template(
        self, db: Session, *, event_id: str, template: str
    ) -> List[EventTask]:
        """Bulk-create a starter checklist. Unknown templates fall back to the conference list."""
        items = TASK_TEMPLATES.get(template) or TASK_TEMPLATES[DEFAULT_TEMPLATE]
        start = self._max_sort_order(db, event_id)

        created = []
        for offset, (title, category, priority) in enumerate(items, start=1):
            task = EventTask(
                event_id=event_id,
                title=title,
                category=category,
                priority=priority,
                status="todo",
                sort_order=start + offset,
            )
            db.add(task)
            created.append(task)
        db.commit()
        for task in created:
            db.refresh(task)
        return created

    def reorder(self, db: Session, *, event_id: str, task_ids: List[str]) -> List[EventTask]:
        """Assign sort_order 1..n following `task_ids`. Ids from other events are ignored."""
        tasks = {
            task.id: task
            for task in db.query(self.model)
            .filter(self.model.event_id == event_id, self.model.id.in_(task_ids))
            .all()
        }
        for position, task_id in enumerate(task_ids, start=1):
            task: Optional[EventTask] = tasks.get(task_id)
            if task is not None:
                task.sort_order = position
                db.add(task)
        db.commit()
        return self.get_by_event(db, event_id=event_id)


task = CRUDTask(EventTask)
