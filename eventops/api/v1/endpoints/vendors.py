# eventops/api/v1/endpoints/vendors.py
"""
Vendor catalog: public listing of approved vendors, self-registration
(pending until an admin reviews it), admin review, and the links between
vendors and an organizer's events.
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from eventops.api import deps
from eventops.crud import crud_event, crud_moderation_log, crud_vendor
from eventops.db.session import get_db
from eventops.schemas.sponsor import ReviewDecision, ReviewStatus
from eventops.schemas.vendor import (
    EventVendor as EventVendorSchema,
    EventVendorCreate,
    EventVendorUpdate,
    Vendor as VendorSchema,
    VendorAdmin,
    VendorCreate,
)
from eventops.schemas.token import TokenPayload
from eventops.services.event_access import ADMIN_ROLES, get_owned_event

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vendors", tags=["Vendors"])
event_router = APIRouter(prefix="/events/{eventId}/vendors", tags=["Vendors"])


def _get_vendor(db: Session, vendor_id: str):
    vendor = crud_vendor.vendor.get(db, id=vendor_id)
    if not vendor:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Vendor not found")
    return vendor


@router.get("", response_model=List[VendorSchema])
def list_vendors(
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """Approved vendors, optionally filtered by category or a name/description search."""
    return crud_vendor.vendor.get_approved(
        db, facet=category, search=search, skip=skip, limit=limit
    )


@router.get("/categories", response_model=List[str])
def list_categories(db: Session = Depends(get_db)):
    return crud_vendor.vendor.get_facets(db)


@router.post("", response_model=VendorSchema, status_code=status.HTTP_201_CREATED)
def register_vendor(
    vendor_in: VendorCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Submit a vendor profile. It stays hidden until an admin approves it."""
    vendor = crud_vendor.vendor.create_pending(
        db, obj_in=vendor_in, submitted_by=current_user.sub
    )
    logger.info(f"Vendor {vendor.id} submitted for review by {current_user.sub}")
    return vendor


@router.get("/admin", response_model=List[VendorAdmin])
def admin_list_vendors(
    status_filter: Optional[ReviewStatus] = Query(None, alias="status"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    admin: TokenPayload = Depends(deps.require_admin),
):
    return crud_vendor.vendor.get_by_status(
        db, status=status_filter.value if status_filter else None, skip=skip, limit=limit
    )


@router.get("/{vendorId}", response_model=VendorSchema)
def get_vendor(
    vendorId: str,
    db: Session = Depends(get_db),
    current_user: Optional[TokenPayload] = Depends(deps.get_current_user_optional),
):
    """Approved vendors are public; pending or rejected ones only to the submitter and admins."""
    vendor = _get_vendor(db, vendorId)
    if vendor.status != "approved":
        allowed = current_user is not None and (
            current_user.sub == vendor.submitted_by or current_user.role in ADMIN_ROLES
        )
        if not allowed:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Vendor not found")
    return vendor


@router.post("/{vendorId}/approve", response_model=VendorAdmin)
def approve_vendor(
    vendorId: str,
    decision: Optional[ReviewDecision] = None,
    db: Session = Depends(get_db),
    admin: TokenPayload = Depends(deps.require_admin),
):
    vendor = _get_vendor(db, vendorId)
    if vendor.status == "approved":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Vendor is already approved"
        )

    vendor = crud_vendor.vendor.approve(
        db, db_obj=vendor, admin_id=admin.sub, notes=decision.notes if decision else None
    )
    crud_moderation_log.moderation_log.log_action(
        db,
        admin_id=admin.sub,
        action="approve_vendor",
        target_type="vendor",
        target_id=vendor.id,
        reason=decision.notes if decision else None,
        metadata={"name": vendor.name},
    )
    return vendor


@router.post("/{vendorId}/reject", response_model=VendorAdmin)
def reject_vendor(
    vendorId: str,
    decision: Optional[ReviewDecision] = None,
    db: Session = Depends(get_db),
    admin: TokenPayload = Depends(deps.require_admin),
):
    vendor = _get_vendor(db, vendorId)
    if vendor.status == "rejected":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Vendor is already rejected"
        )

    vendor = crud_vendor.vendor.reject(
        db, db_obj=vendor, admin_id=admin.sub, reason=decision.reason if decision else None
    )
    crud_moderation_log.moderation_log.log_action(
        db,
        admin_id=admin.sub,
        action="reject_vendor",
        target_type="vendor",
        target_id=vendor.id,
        reason=decision.reason if decision else None,
        metadata={"name": vendor.name},
    )
    return vendor


# ---- event links ----


def _get_link(db: Session, event_id: str, link_id: str, current_user: TokenPayload):
    link = crud_vendor.event_vendor.get(db, id=link_id)
    if not link or link.event_id != event_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Vendor relationship not found"
        )
    event = crud_event.event.get(db, id=event_id)
    if not event or event.owner_id != current_user.sub:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to modify this relationship",
        )
    return link


@event_router.get("", response_model=List[EventVendorSchema])
def list_event_vendors(
    eventId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    event = get_owned_event(db, eventId, current_user, allow_admin=True)
    return crud_vendor.event_vendor.get_by_event(db, event_id=event.id)


@event_router.post("", response_model=EventVendorSchema, status_code=status.HTTP_201_CREATED)
def add_event_vendor(
    eventId: str,
    link_in: EventVendorCreate,
    response: Response,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Link an approved vendor to the event. An existing link is returned unchanged."""
    event = get_owned_event(db, eventId, current_user)
    vendor = crud_vendor.vendor.get(db, id=link_in.vendor_id)
    if not vendor or vendor.status != "approved":
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Vendor not found")

    link, existed = crud_vendor.event_vendor.create_link(
        db,
        event_id=event.id,
        target_id=vendor.id,
        proposed_budget=link_in.proposed_budget,
        notes=link_in.notes,
    )
    if existed:
        response.status_code = status.HTTP_200_OK
    return link


@event_router.patch("/{linkId}", response_model=EventVendorSchema)
def update_event_vendor(
    eventId: str,
    linkId: str,
    link_in: EventVendorUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    link = _get_link(db, eventId, linkId, current_user)
    return crud_vendor.event_vendor.update(db, db_obj=link, obj_in=link_in)


@event_router.delete("/{linkId}", status_code=status.HTTP_204_NO_CONTENT)
def remove_event_vendor(
    eventId: str,
    linkId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    link = _get_link(db, eventId, linkId, current_user)
    crud_vendor.event_vendor.remove(db, db_obj=link)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
