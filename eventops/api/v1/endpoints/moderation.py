# eventops/api/v1/endpoints/moderation.py
"""
Platform moderation: suspending users, changing roles and flagging events.
Every action is recorded in the moderation log.
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from eventops.api import deps
from eventops.crud import crud_event, crud_moderation_log, crud_user
from eventops.db.session import get_db
from eventops.models.user import User
from eventops.schemas.event import Event as EventSchema
from eventops.schemas.moderation import (
    FlagEventRequest,
    ModerationLog,
    RoleChangeRequest,
    SuspendRequest,
)
from eventops.schemas.token import TokenPayload
from eventops.schemas.user import User as UserSchema

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/moderation", tags=["Moderation"])


def _get_user(db: Session, user_id: str) -> User:
    user = crud_user.user.get(db, id=user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


def _get_event(db: Session, event_id: str):
    event = crud_event.event.get(db, id=event_id)
    if not event:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    return event


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


@router.get("/users", response_model=List[UserSchema])
def list_users(
    role: Optional[str] = Query(None),
    suspended: Optional[bool] = Query(None),
    search: Optional[str] = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    admin: TokenPayload = Depends(deps.require_admin),
):
    return crud_user.user.get_multi_filtered(
        db, role=role, suspended=suspended, search=search, skip=skip, limit=limit
    )


@router.post("/users/{userId}/suspend", response_model=UserSchema)
def suspend_user(
    userId: str,
    suspend_in: SuspendRequest,
    db: Session = Depends(get_db),
    admin: TokenPayload = Depends(deps.require_admin),
):
    user = _get_user(db, userId)

    if user.role == "superadmin":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Cannot suspend a superadmin")
    if user.role == "admin" and admin.role != "superadmin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Only superadmin can suspend other admins"
        )
    if user.id == admin.sub:
        raise _bad_request("Cannot suspend yourself")
    if user.is_suspended:
        raise _bad_request("User is already suspended")

    user = crud_user.user.suspend(db, db_obj=user, reason=suspend_in.reason)
    crud_moderation_log.moderation_log.log_action(
        db,
        admin_id=admin.sub,
        action="user_suspended",
        target_type="user",
        target_id=user.id,
        reason=suspend_in.reason,
        metadata={"email": user.email, "name": user.name},
    )
    logger.warning(f"User {user.id} suspended by {admin.sub}")
    return user


@router.post("/users/{userId}/unsuspend", response_model=UserSchema)
def unsuspend_user(
    userId: str,
    db: Session = Depends(get_db),
    admin: TokenPayload = Depends(deps.require_admin),
):
    user = _get_user(db, userId)

    if not user.is_suspended:
        raise _bad_request("User is not suspended")
    if user.role == "admin" and admin.role != "superadmin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only superadmin can unsuspend other admins",
        )

    previous_reason = user.suspension_reason
    user = crud_user.user.unsuspend(db, db_obj=user)
    crud_moderation_log.moderation_log.log_action(
        db,
        admin_id=admin.sub,
        action="user_unsuspended",
        target_type="user",
        target_id=user.id,
        metadata={"email": user.email, "previous_reason": previous_reason},
    )
    return user


@router.post("/users/{userId}/role", response_model=UserSchema)
def change_user_role(
    userId: str,
    role_in: RoleChangeRequest,
    db: Session = Depends(get_db),
    superadmin: TokenPayload = Depends(deps.require_superadmin),
):
    user = _get_user(db, userId)

    if user.role == "superadmin":
        raise _bad_request("Cannot change superadmin role")
    if user.id == superadmin.sub:
        raise _bad_request("Cannot change your own role")

    previous_role = user.role or "organizer"
    if previous_role == role_in.new_role:
        raise _bad_request(f"User already has role: {role_in.new_role}")

    user = crud_user.user.update(db, db_obj=user, obj_in={"role": role_in.new_role})
    crud_moderation_log.moderation_log.log_action(
        db,
        admin_id=superadmin.sub,
        action="user_role_changed",
        target_type="user",
        target_id=user.id,
        reason=role_in.reason or f"Role changed from {previous_role} to {role_in.new_role}",
        metadata={
            "email": user.email,
            "previous_role": previous_role,
            "new_role": role_in.new_role,
        },
    )
    return user


@router.get("/events/flagged", response_model=List[EventSchema])
def list_flagged_events(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    admin: TokenPayload = Depends(deps.require_admin),
):
    return crud_event.event.get_flagged(db, skip=skip, limit=limit)


@router.post("/events/{eventId}/flag", response_model=EventSchema)
def flag_event(
    eventId: str,
    flag_in: FlagEventRequest,
    db: Session = Depends(get_db),
    admin: TokenPayload = Depends(deps.require_admin),
):
    event = _get_event(db, eventId)
    if event.is_flagged:
        raise _bad_request("Event is already flagged")

    event = crud_event.event.flag(
        db,
        db_obj=event,
        reason=flag_in.reason,
        severity=flag_in.severity.value,
        admin_id=admin.sub,
    )
    crud_moderation_log.moderation_log.log_action(
        db,
        admin_id=admin.sub,
        action="event_flagged",
        target_type="event",
        target_id=event.id,
        reason=flag_in.reason,
        metadata={"title": event.title, "severity": flag_in.severity.value},
    )
    return event


@router.post("/events/{eventId}/unflag", response_model=EventSchema)
def unflag_event(
    eventId: str,
    db: Session = Depends(get_db),
    admin: TokenPayload = Depends(deps.require_admin),
):
    event = _get_event(db, eventId)
    if not event.is_flagged:
        raise _bad_request("Event is not flagged")

    previous_reason = event.flagged_reason
    event = crud_event.event.unflag(db, db_obj=event)
    crud_moderation_log.moderation_log.log_action(
        db,
        admin_id=admin.sub,
        action="event_unflagged",
        target_type="event",
        target_id=event.id,
        metadata={"title": event.title, "previous_reason": previous_reason},
    )
    return event


@router.get("/logs", response_model=List[ModerationLog])
def list_moderation_logs(
    target_type: Optional[str] = Query(None),
    target_id: Optional[str] = Query(None),
    action: Optional[str] = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    admin: TokenPayload = Depends(deps.require_admin),
):
    return crud_moderation_log.moderation_log.get_multi(
        db, target_type=target_type, target_id=target_id, action=action, skip=skip, limit=limit
    )
