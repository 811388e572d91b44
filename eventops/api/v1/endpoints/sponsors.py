# eventops/api/v1/endpoints/sponsors.py
"""
Sponsor catalog: public listing of approved sponsors, self-registration
(pending until an admin reviews it), admin review, and the links between
sponsors and an organizer's events.
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from eventops.api import deps
from eventops.crud import crud_event, crud_moderation_log, crud_sponsor
from eventops.db.session import get_db
from eventops.schemas.sponsor import (
    EventSponsor as EventSponsorSchema,
    EventSponsorCreate,
    EventSponsorUpdate,
    ReviewDecision,
    ReviewStatus,
    Sponsor as SponsorSchema,
    SponsorAdmin,
    SponsorCreate,
)
from eventops.schemas.token import TokenPayload
from eventops.services.event_access import ADMIN_ROLES, get_owned_event

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sponsors", tags=["Sponsors"])
event_router = APIRouter(prefix="/events/{eventId}/sponsors", tags=["Sponsors"])


def _get_sponsor(db: Session, sponsor_id: str):
    sponsor = crud_sponsor.sponsor.get(db, id=sponsor_id)
    if not sponsor:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sponsor not found")
    return sponsor


@router.get("", response_model=List[SponsorSchema])
def list_sponsors(
    industry: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """Approved sponsors, optionally filtered by industry or a name/description search."""
    return crud_sponsor.sponsor.get_approved(
        db, facet=industry, search=search, skip=skip, limit=limit
    )


@router.get("/industries", response_model=List[str])
def list_industries(db: Session = Depends(get_db)):
    return crud_sponsor.sponsor.get_facets(db)


@router.post("", response_model=SponsorSchema, status_code=status.HTTP_201_CREATED)
def register_sponsor(
    sponsor_in: SponsorCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Submit a sponsor profile. It stays hidden until an admin approves it."""
    sponsor = crud_sponsor.sponsor.create_pending(
        db, obj_in=sponsor_in, submitted_by=current_user.sub
    )
    logger.info(f"Sponsor {sponsor.id} submitted for review by {current_user.sub}")
    return sponsor


@router.get("/admin", response_model=List[SponsorAdmin])
def admin_list_sponsors(
    status_filter: Optional[ReviewStatus] = Query(None, alias="status"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    admin: TokenPayload = Depends(deps.require_admin),
):
    return crud_sponsor.sponsor.get_by_status(
        db, status=status_filter.value if status_filter else None, skip=skip, limit=limit
    )


@router.get("/{sponsorId}", response_model=SponsorSchema)
def get_sponsor(
    sponsorId: str,
    db: Session = Depends(get_db),
    current_user: Optional[TokenPayload] = Depends(deps.get_current_user_optional),
):
    """Approved sponsors are public; pending or rejected ones only to the submitter and admins."""
    sponsor = _get_sponsor(db, sponsorId)
    if sponsor.status != "approved":
        allowed = current_user is not None and (
            current_user.sub == sponsor.submitted_by or current_user.role in ADMIN_ROLES
        )
        if not allowed:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sponsor not found")
    return sponsor


@router.post("/{sponsorId}/approve", response_model=SponsorAdmin)
def approve_sponsor(
    sponsorId: str,
    decision: Optional[ReviewDecision] = None,
    db: Session = Depends(get_db),
    admin: TokenPayload = Depends(deps.require_admin),
):
    sponsor = _get_sponsor(db, sponsorId)
    if sponsor.status == "approved":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Sponsor is already approved"
        )

    sponsor = crud_sponsor.sponsor.approve(
        db, db_obj=sponsor, admin_id=admin.sub, notes=decision.notes if decision else None
    )
    crud_moderation_log.moderation_log.log_action(
        db,
        admin_id=admin.sub,
        action="approve_sponsor",
        target_type="sponsor",
        target_id=sponsor.id,
        reason=decision.notes if decision else None,
        metadata={"name": sponsor.name},
    )
    return sponsor


@router.post("/{sponsorId}/reject", response_model=SponsorAdmin)
def reject_sponsor(
    sponsorId: str,
    decision: Optional[ReviewDecision] = None,
    db: Session = Depends(get_db),
    admin: TokenPayload = Depends(deps.require_admin),
):
    sponsor = _get_sponsor(db, sponsorId)
    if sponsor.status == "rejected":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Sponsor is already rejected"
        )

    sponsor = crud_sponsor.sponsor.reject(
        db, db_obj=sponsor, admin_id=admin.sub, reason=decision.reason if decision else None
    )
    crud_moderation_log.moderation_log.log_action(
        db,
        admin_id=admin.sub,
        action="reject_sponsor",
        target_type="sponsor",
        target_id=sponsor.id,
        reason=decision.reason if decision else None,
        metadata={"name": sponsor.name},
    )
    return sponsor


# ---- event links ----


def _get_link(db: Session, event_id: str, link_id: str, current_user: TokenPayload):
    link = crud_sponsor.event_sponsor.get(db, id=link_id)
    if not link or link.event_id != event_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Sponsor relationship not found"
        )
    event = crud_event.event.get(db, id=event_id)
    if not event or event.owner_id != current_user.sub:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to modify this relationship",
        )
    return link


@event_router.get("", response_model=List[EventSponsorSchema])
def list_event_sponsors(
    eventId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    event = get_owned_event(db, eventId, current_user, allow_admin=True)
    return crud_sponsor.event_sponsor.get_by_event(db, event_id=event.id)


@event_router.post("", response_model=EventSponsorSchema, status_code=status.HTTP_201_CREATED)
def add_event_sponsor(
    eventId: str,
    link_in: EventSponsorCreate,
    response: Response,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Link an approved sponsor to the event. An existing link is returned unchanged."""
    event = get_owned_event(db, eventId, current_user)
    sponsor = crud_sponsor.sponsor.get(db, id=link_in.sponsor_id)
    if not sponsor or sponsor.status != "approved":
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sponsor not found")

    link, existed = crud_sponsor.event_sponsor.create_link(
        db,
        event_id=event.id,
        target_id=sponsor.id,
        tier=link_in.tier,
        proposed_amount=link_in.proposed_amount,
        notes=link_in.notes,
    )
    if existed:
        response.status_code = status.HTTP_200_OK
    return link


@event_router.patch("/{linkId}", response_model=EventSponsorSchema)
def update_event_sponsor(
    eventId: str,
    linkId: str,
    link_in: EventSponsorUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    link = _get_link(db, eventId, linkId, current_user)
    return crud_sponsor.event_sponsor.update(db, db_obj=link, obj_in=link_in)


@event_router.delete("/{linkId}", status_code=status.HTTP_204_NO_CONTENT)
def remove_event_sponsor(
    eventId: str,
    linkId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    link = _get_link(db, eventId, linkId, current_user)
    crud_sponsor.event_sponsor.remove(db, db_obj=link)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
