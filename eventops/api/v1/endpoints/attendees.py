# eventops/api/v1/endpoints/attendees.py
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from eventops.api import deps
from eventops.crud import crud_attendee
from eventops.db.session import get_db
from eventops.schemas.attendee import (
    Attendee as AttendeeSchema,
    AttendeeCreate,
    AttendeeStats,
    AttendeeStatus,
    AttendeeUpdate,
    CheckInRequest,
    CheckInResult,
)
from eventops.schemas.token import TokenPayload
from eventops.services.event_access import get_owned_event

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events/{eventId}/attendees", tags=["Attendees"])

DUPLICATE_ATTENDEE = "An attendee with this email is already registered for this event"


def _get_attendee(db: Session, event_id: str, attendee_id: str):
    attendee = crud_attendee.attendee.get(db, id=attendee_id)
    if not attendee or attendee.event_id != event_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Attendee not found")
    return attendee


@router.get("", response_model=List[AttendeeSchema])
def list_attendees(
    eventId: str,
    status_filter: Optional[AttendeeStatus] = Query(None, alias="status"),
    search: Optional[str] = Query(None, description="Name, email or ticket number"),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    event = get_owned_event(db, eventId, current_user, allow_admin=True)
    return crud_attendee.attendee.get_by_event(
        db,
        event_id=event.id,
        status=status_filter.value if status_filter else None,
        search=search,
    )


@router.get("/stats", response_model=AttendeeStats)
def get_attendee_stats(
    eventId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    event = get_owned_event(db, eventId, current_user, allow_admin=True)
    return crud_attendee.attendee.get_stats(db, event_id=event.id)


@router.post("", response_model=AttendeeSchema, status_code=status.HTTP_201_CREATED)
def create_attendee(
    eventId: str,
    attendee_in: AttendeeCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Register an attendee and issue a ticket number."""
    event = get_owned_event(db, eventId, current_user)
    if crud_attendee.attendee.get_by_email(db, event_id=event.id, email=attendee_in.email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_ATTENDEE)
    return crud_attendee.attendee.create_for_event(db, obj_in=attendee_in, event_id=event.id)


@router.post("/check-in", response_model=CheckInResult)
def check_in_attendee(
    eventId: str,
    check_in: CheckInRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Check an attendee in by id or by ticket number.

    Already checked-in and cancelled registrations are reported with
    `success: false` rather than an error so scanners can show the reason.
    """
    event = get_owned_event(db, eventId, current_user, allow_admin=True)

    if check_in.attendee_id:
        attendee = _get_attendee(db, event.id, check_in.attendee_id)
    elif check_in.ticket_number:
        attendee = crud_attendee.attendee.get_by_ticket_number(
            db, ticket_number=check_in.ticket_number
        )
        if not attendee or attendee.event_id != event.id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Attendee not found")
    else:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Either attendee_id or ticket_number is required",
        )

    if attendee.status == "checked_in":
        return {"success": False, "message": "Attendee already checked in", "attendee": attendee}
    if attendee.status == "cancelled":
        return {
            "success": False,
            "message": "Cannot check in a cancelled registration",
            "attendee": attendee,
        }

    attendee = crud_attendee.attendee.check_in(db, db_obj=attendee, checked_in_by=current_user.sub)
    logger.info(f"Checked in attendee {attendee.id} for event {event.id}")
    return {"success": True, "message": "Check-in successful", "attendee": attendee}


@router.patch("/{attendeeId}", response_model=AttendeeSchema)
def update_attendee(
    eventId: str,
    attendeeId: str,
    attendee_in: AttendeeUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    event = get_owned_event(db, eventId, current_user)
    attendee = _get_attendee(db, event.id, attendeeId)

    if attendee_in.email and attendee_in.email.lower() != attendee.email:
        if crud_attendee.attendee.get_by_email(db, event_id=event.id, email=attendee_in.email):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_ATTENDEE)
        attendee_in.email = attendee_in.email.lower()

    return crud_attendee.attendee.update(db, db_obj=attendee, obj_in=attendee_in)


@router.post("/{attendeeId}/undo-check-in", response_model=AttendeeSchema)
def undo_check_in(
    eventId: str,
    attendeeId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    event = get_owned_event(db, eventId, current_user, allow_admin=True)
    attendee = _get_attendee(db, event.id, attendeeId)
    if attendee.status != "checked_in":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Attendee is not checked in"
        )
    return crud_attendee.attendee.undo_check_in(db, db_obj=attendee)


@router.delete("/{attendeeId}", status_code=status.HTTP_204_NO_CONTENT)
def delete_attendee(
    eventId: str,
    attendeeId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    event = get_owned_event(db, eventId, current_user)
    attendee = _get_attendee(db, event.id, attendeeId)
    crud_attendee.attendee.remove(db, id=attendee.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
