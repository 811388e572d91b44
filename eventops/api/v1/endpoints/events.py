# eventops/api/v1/endpoints/events.py
import math
from typing import List, Optional
from fastapi import APIRouter, Depends, status, HTTPException, Query, Response
from sqlalchemy.orm import Session

from eventops.schemas.event import (
    Event as EventSchema,
    EventCreate,
    EventStatus,
    EventUpdate,
    PaginatedEvent,
)
from eventops.schemas.token import TokenPayload
from eventops.api import deps
from eventops.constants.organization import OrgRole
from eventops.db.session import get_db
from eventops.crud import crud_event, crud_organization
from eventops.services.event_access import get_owned_event

router = APIRouter(prefix="/events", tags=["Events"])


@router.post("", response_model=EventSchema, status_code=status.HTTP_201_CREATED)
def create_event(
    event_in: EventCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Creates a new event owned by the caller."""
    if event_in.organization_id:
        membership = crud_organization.organization.get_membership(
            db, organization_id=event_in.organization_id, user_id=current_user.sub
        )
        if (
            not membership
            or membership.status != "active"
            or not OrgRole.has_permission(membership.role, OrgRole.MANAGER)
        ):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not authorized to create events for this organization",
            )
        organization = crud_organization.organization.get(db, id=event_in.organization_id)
        if organization.max_events is not None:
            count = crud_event.event.count_by_organization(
                db, organization_id=organization.id
            )
            if count >= organization.max_events:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"Organization has reached its event limit ({organization.max_events})",
                )

    return crud_event.event.create_with_owner(db, obj_in=event_in, owner_id=current_user.sub)


@router.get("", response_model=PaginatedEvent)
def list_events(
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
    search: Optional[str] = Query(None, description="Search by title"),
    status_filter: Optional[EventStatus] = Query(None, alias="status"),
    sort_by: str = Query("start_date", pattern="^(start_date|created_at|title)$"),
    sort_direction: str = Query("desc", pattern="^(asc|desc)$"),
):
    """Retrieves a paginated list of the caller's events."""
    skip = (page - 1) * limit
    result = crud_event.event.get_multi_by_owner(
        db,
        owner_id=current_user.sub,
        skip=skip,
        limit=limit,
        search=search,
        status=status_filter.value if status_filter else None,
        sort_by=sort_by,
        sort_direction=sort_direction,
    )
    total_events = result["totalCount"]

    return {
        "data": result["events"],
        "pagination": {
            "totalItems": total_events,
            "totalPages": math.ceil(total_events / limit),
            "currentPage": page,
        },
    }


@router.get("/upcoming", response_model=List[EventSchema])
def list_upcoming_events(
    limit: int = Query(5, ge=1, le=50),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return crud_event.event.get_upcoming(db, owner_id=current_user.sub, limit=limit)


@router.get("/{eventId}", response_model=EventSchema)
def get_event_by_id(
    eventId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Get a specific event by its ID."""
    return get_owned_event(db, eventId, current_user, allow_admin=True)


@router.patch("/{eventId}", response_model=EventSchema)
def update_event(
    eventId: str,
    event_in: EventUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Partially update an event."""
    event = get_owned_event(db, eventId, current_user)
    return crud_event.event.update(db, db_obj=event, obj_in=event_in)


@router.delete("/{eventId}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(
    eventId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Deletes an event together with its tasks, budget, notes and attendees."""
    event = get_owned_event(db, eventId, current_user)
    crud_event.event.remove(db, id=event.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
