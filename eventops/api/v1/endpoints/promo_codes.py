# eventops/api/v1/endpoints/promo_codes.py
import logging
import re
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from eventops.api import deps
from eventops.core.errors import ConflictError, ForbiddenError, ValidationError, not_found
from eventops.crud import crud_event, crud_promo_code
from eventops.crud.crud_promo_code import normalize_code
from eventops.db.session import get_db
from eventops.models.promo_code import PromoCode
from eventops.schemas.promo_code import (
    DiscountType,
    PromoCode as PromoCodeSchema,
    PromoCodeCreate,
    PromoCodeRedeemRequest,
    PromoCodeUpdate,
    PromoCodeUsage,
    PromoCodeValidateRequest,
    PromoCodeValidation,
)
from eventops.schemas.token import TokenPayload
from eventops.services import promo_validation
from eventops.utils.time_utils import utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/promo-codes", tags=["Promo Codes"])

CODE_PATTERN = re.compile(r"^[A-Z0-9_-]+$")


def _check_code(code: str) -> str:
    code = normalize_code(code)
    if not code:
        raise ValidationError("Promo code cannot be empty", field="code")
    if not CODE_PATTERN.match(code):
        raise ValidationError(
            "Promo code can only contain letters, numbers, hyphens, and underscores",
            field="code",
        )
    return code


def _check_discount(discount_type: str, discount_value: int) -> None:
    if discount_type == DiscountType.PERCENTAGE.value:
        if discount_value <= 0 or discount_value > 100:
            raise ValidationError(
                "Percentage discount must be between 1 and 100", field="discount_value"
            )
    elif discount_value <= 0:
        raise ValidationError("Fixed discount must be greater than 0", field="discount_value")


def _get_own_promo(db: Session, promo_id: str, current_user: TokenPayload) -> PromoCode:
    promo = crud_promo_code.promo_code.get(db, id=promo_id)
    if not promo:
        raise not_found("Promo code")
    if promo.organizer_id != current_user.sub:
        raise ForbiddenError()
    return promo


@router.get("", response_model=List[PromoCodeSchema])
def list_promo_codes(
    event_id: Optional[str] = Query(None),
    include_inactive: bool = Query(True),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """The caller's promo codes, optionally narrowed to one event."""
    return crud_promo_code.promo_code.get_by_organizer(
        db,
        organizer_id=current_user.sub,
        event_id=event_id,
        include_inactive=include_inactive,
    )


@router.post("/validate", response_model=PromoCodeValidation)
def validate_promo_code(
    validate_in: PromoCodeValidateRequest,
    db: Session = Depends(get_db),
):
    """
    Check a code at checkout. Public; business failures come back as
    `valid: false` with a reason rather than an error status.
    """
    result = promo_validation.validate(
        db,
        code=validate_in.code,
        event_id=validate_in.event_id,
        order_amount=validate_in.order_amount,
        buyer_email=validate_in.buyer_email,
    )
    return result.to_dict()


@router.post("", response_model=PromoCodeSchema, status_code=status.HTTP_201_CREATED)
def create_promo_code(
    promo_in: PromoCodeCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    code = _check_code(promo_in.code)
    _check_discount(promo_in.discount_type.value, promo_in.discount_value)

    if promo_in.event_id:
        event = crud_event.event.get(db, id=promo_in.event_id)
        if not event or event.owner_id != current_user.sub:
            raise ForbiddenError("Not authorized to create promo codes for this event")

    if crud_promo_code.promo_code.get_by_code(db, organizer_id=current_user.sub, code=code):
        raise ConflictError("A promo code with this code already exists")

    promo = crud_promo_code.promo_code.create_for_organizer(
        db, obj_in=promo_in, organizer_id=current_user.sub
    )
    logger.info(f"Organizer {current_user.sub} created promo code {promo.code}")
    return promo


@router.get("/{promoId}", response_model=PromoCodeSchema)
def get_promo_code(
    promoId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return _get_own_promo(db, promoId, current_user)


@router.patch("/{promoId}", response_model=PromoCodeSchema)
def update_promo_code(
    promoId: str,
    promo_in: PromoCodeUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    promo = _get_own_promo(db, promoId, current_user)

    if promo_in.code is not None:
        code = _check_code(promo_in.code)
        if crud_promo_code.promo_code.get_by_code(
            db, organizer_id=current_user.sub, code=code, exclude_id=promo.id
        ):
            raise ConflictError("A promo code with this code already exists")

    if promo_in.discount_value is not None or promo_in.discount_type is not None:
        discount_type = (
            promo_in.discount_type.value if promo_in.discount_type else promo.discount_type
        )
        discount_value = (
            promo_in.discount_value
            if promo_in.discount_value is not None
            else promo.discount_value
        )
        _check_discount(discount_type, discount_value)

    return crud_promo_code.promo_code.update(db, db_obj=promo, obj_in=promo_in)


@router.delete("/{promoId}", status_code=status.HTTP_204_NO_CONTENT)
def delete_promo_code(
    promoId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Only unused codes can be deleted; used ones should be deactivated."""
    promo = _get_own_promo(db, promoId, current_user)
    if (promo.used_count or 0) > 0:
        raise ValidationError(
            "Cannot delete promo code that has been used. Deactivate it instead."
        )
    crud_promo_code.promo_code.remove(db, id=promo.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{promoId}/redeem", response_model=PromoCodeUsage, status_code=status.HTTP_201_CREATED)
def redeem_promo_code(
    promoId: str,
    redeem_in: PromoCodeRedeemRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Record a completed order that used the code and bump its usage count."""
    promo = _get_own_promo(db, promoId, current_user)

    email_usage_count = None
    if redeem_in.buyer_email and promo.max_uses_per_email is not None:
        email_usage_count = crud_promo_code.promo_code.count_email_usage(
            db, promo_code_id=promo.id, email=redeem_in.buyer_email
        )

    result = promo_validation.evaluate(
        promo, redeem_in.order_amount, utcnow(), email_usage_count
    )
    if not result.valid:
        raise ValidationError(result.error, field="code")

    return crud_promo_code.promo_code.record_usage(
        db,
        promo=promo,
        order_id=redeem_in.order_id,
        discount_applied=result.discount_amount,
        buyer_email=redeem_in.buyer_email,
    )


@router.get("/{promoId}/usages", response_model=List[PromoCodeUsage])
def list_promo_code_usages(
    promoId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    promo = _get_own_promo(db, promoId, current_user)
    return crud_promo_code.promo_code.get_usages(db, promo_code_id=promo.id)
