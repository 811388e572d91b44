# eventops/api/v1/endpoints/tasks.py
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from eventops.api import deps
from eventops.crud import crud_task
from eventops.db.session import get_db
from eventops.schemas.task import (
    Task as TaskSchema,
    TaskCreate,
    TaskReorderRequest,
    TaskStatus,
    TaskSummary,
    TaskTemplateRequest,
    TaskUpdate,
)
from eventops.schemas.token import TokenPayload
from eventops.services.event_access import get_owned_event

router = APIRouter(prefix="/events/{eventId}/tasks", tags=["Tasks"])


def _get_task(db: Session, event_id: str, task_id: str):
    task = crud_task.task.get(db, id=task_id)
    if not task or task.event_id != event_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


@router.get("", response_model=List[TaskSchema])
def list_tasks(
    eventId: str,
    status_filter: Optional[TaskStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Tasks ordered by position, then priority, then due date."""
    event = get_owned_event(db, eventId, current_user, allow_admin=True)
    return crud_task.task.get_by_event(
        db, event_id=event.id, status=status_filter.value if status_filter else None
    )


@router.get("/summary", response_model=TaskSummary)
def get_task_summary(
    eventId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    event = get_owned_event(db, eventId, current_user, allow_admin=True)
    return crud_task.task.get_summary(db, event_id=event.id)


@router.post("", response_model=TaskSchema, status_code=status.HTTP_201_CREATED)
def create_task(
    eventId: str,
    task_in: TaskCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    event = get_owned_event(db, eventId, current_user)
    return crud_task.task.create_for_event(db, obj_in=task_in, event_id=event.id)


@router.post("/template", response_model=List[TaskSchema], status_code=status.HTTP_201_CREATED)
def create_tasks_from_template(
    eventId: str,
    template_in: TaskTemplateRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Add a starter checklist (conference, workshop, hackathon, networking)."""
    event = get_owned_event(db, eventId, current_user)
    return crud_task.task.create_from_template(
        db, event_id=event.id, template=template_in.template
    )


@router.post("/reorder", response_model=List[TaskSchema])
def reorder_tasks(
    eventId: str,
    reorder_in: TaskReorderRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    event = get_owned_event(db, eventId, current_user)
    return crud_task.task.reorder(db, event_id=event.id, task_ids=reorder_in.task_ids)


@router.patch("/{taskId}", response_model=TaskSchema)
def update_task(
    eventId: str,
    taskId: str,
    task_in: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    event = get_owned_event(db, eventId, current_user)
    task = _get_task(db, event.id, taskId)
    return crud_task.task.update(db, db_obj=task, obj_in=task_in)


@router.post("/{taskId}/toggle", response_model=TaskSchema)
def toggle_task(
    eventId: str,
    taskId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Flip a task between completed and todo."""
    event = get_owned_event(db, eventId, current_user)
    task = _get_task(db, event.id, taskId)
    return crud_task.task.toggle_complete(db, db_obj=task)


@router.delete("/{taskId}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    eventId: str,
    taskId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    event = get_owned_event(db, eventId, current_user)
    task = _get_task(db, event.id, taskId)
    crud_task.task.remove(db, id=task.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
