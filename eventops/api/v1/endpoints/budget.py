# eventops/api/v1/endpoints/budget.py
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from eventops.api import deps
from eventops.crud import crud_budget_item
from eventops.db.session import get_db
from eventops.schemas.budget import (
    BudgetBulkStatusUpdate,
    BudgetItem as BudgetItemSchema,
    BudgetItemCreate,
    BudgetItemUpdate,
    BudgetSummary,
)
from eventops.schemas.token import TokenPayload
from eventops.services.event_access import get_owned_event

router = APIRouter(prefix="/events/{eventId}/budget", tags=["Budget"])


def _get_item(db: Session, event_id: str, item_id: str):
    item = crud_budget_item.budget_item.get_for_event(db, id=item_id, event_id=event_id)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Budget item not found")
    return item


@router.get("", response_model=List[BudgetItemSchema])
def list_budget_items(
    eventId: str,
    category: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    event = get_owned_event(db, eventId, current_user, allow_admin=True)
    return crud_budget_item.budget_item.get_by_event(db, event_id=event.id, category=category)


@router.get("/summary", response_model=BudgetSummary)
def get_budget_summary(
    eventId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Totals by status and category, variance against estimates and the remaining event budget."""
    event = get_owned_event(db, eventId, current_user, allow_admin=True)
    return crud_budget_item.budget_item.get_summary(db, event=event)


@router.post("", response_model=BudgetItemSchema, status_code=status.HTTP_201_CREATED)
def create_budget_item(
    eventId: str,
    item_in: BudgetItemCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    event = get_owned_event(db, eventId, current_user)
    return crud_budget_item.budget_item.create_for_event(db, obj_in=item_in, event_id=event.id)


@router.post("/bulk-status")
def bulk_update_status(
    eventId: str,
    bulk_in: BudgetBulkStatusUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    event = get_owned_event(db, eventId, current_user)
    updated = crud_budget_item.budget_item.bulk_update_status(
        db, event_id=event.id, item_ids=bulk_in.item_ids, status=bulk_in.status.value
    )
    return {"updated": updated}


@router.patch("/{itemId}", response_model=BudgetItemSchema)
def update_budget_item(
    eventId: str,
    itemId: str,
    item_in: BudgetItemUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    event = get_owned_event(db, eventId, current_user)
    item = _get_item(db, event.id, itemId)
    return crud_budget_item.budget_item.update(db, db_obj=item, obj_in=item_in)


@router.delete("/{itemId}", status_code=status.HTTP_204_NO_CONTENT)
def delete_budget_item(
    eventId: str,
    itemId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    event = get_owned_event(db, eventId, current_user)
    item = _get_item(db, event.id, itemId)
    crud_budget_item.budget_item.remove(db, id=item.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
