# eventops/services/promo_validation.py
"""
Checkout-time promo code validation.

`evaluate` holds the rules and the discount arithmetic and touches no
database; `validate` loads the event, the code and the buyer's usage count
and hands them to it.
"""
import logging
import math
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session

from eventops.crud import crud_promo_code
from eventops.models.event import Event
from eventops.models.promo_code import PromoCode
from eventops.utils.time_utils import as_utc, utcnow

logger = logging.getLogger(__name__)

EVENT_NOT_FOUND = "Event not found"
INVALID_CODE = "Invalid promo code"
INACTIVE = "This promo code is no longer active"
NOT_YET_VALID = "This promo code is not yet valid"
EXPIRED = "This promo code has expired"
USAGE_LIMIT_REACHED = "This promo code has reached its usage limit"
ALREADY_USED = "You have already used this promo code"


@dataclass
class PromoValidationResult:
    valid: bool
    error: Optional[str] = None
    promo_code_id: Optional[str] = None
    code: Optional[str] = None
    discount_type: Optional[str] = None
    discount_value: Optional[int] = None
    discount_amount: Optional[int] = None
    description: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


def _invalid(error: str) -> PromoValidationResult:
    return PromoValidationResult(valid=False, error=error)


def format_cents(amount: int) -> str:
    return f"${amount / 100:.2f}"


def calculate_discount(discount_type: str, discount_value: int, order_amount: int) -> int:
    """Discount in cents. Percentages round half up to the nearest cent; fixed amounts never exceed the order."""
    if discount_type == "percentage":
        return math.floor(order_amount * discount_value / 100 + 0.5)
    return min(discount_value, order_amount)


def evaluate(
    promo_code: PromoCode,
    order_amount: int,
    now: datetime,
    email_usage_count: Optional[int] = None,
) -> PromoValidationResult:
    """
    Apply the promo rules to an already-located code.

    Checks run in a fixed order and the first failure wins: active flag,
    validity window, global usage cap, per-email cap (only when the buyer's
    usage count is known) and minimum order amount.
    """
    now = as_utc(now)

    if not promo_code.is_active:
        return _invalid(INACTIVE)

    valid_from = as_utc(promo_code.valid_from)
    if valid_from and now < valid_from:
        return _invalid(NOT_YET_VALID)

    valid_until = as_utc(promo_code.valid_until)
    if valid_until and now > valid_until:
        return _invalid(EXPIRED)

    if promo_code.max_uses is not None and (promo_code.used_count or 0) >= promo_code.max_uses:
        return _invalid(USAGE_LIMIT_REACHED)

    if (
        email_usage_count is not None
        and promo_code.max_uses_per_email is not None
        and email_usage_count >= promo_code.max_uses_per_email
    ):
        return _invalid(ALREADY_USED)

    if promo_code.min_order_amount is not None and order_amount < promo_code.min_order_amount:
        return _invalid(
            f"Minimum order amount is {format_cents(promo_code.min_order_amount)} for this promo code"
        )

    return PromoValidationResult(
        valid=True,
        promo_code_id=promo_code.id,
        code=promo_code.code,
        discount_type=promo_code.discount_type,
        discount_value=promo_code.discount_value,
        discount_amount=calculate_discount(
            promo_code.discount_type, promo_code.discount_value, order_amount
        ),
        description=promo_code.description,
    )


def validate(
    db: Session,
    code: str,
    event_id: str,
    order_amount: int,
    buyer_email: Optional[str] = None,
    now: Optional[datetime] = None,
) -> PromoValidationResult:
    """Validate `code` for a checkout on `event_id`. Never raises for business failures."""
    event = db.query(Event).filter(Event.id == event_id).first()
    if not event:
        return _invalid(EVENT_NOT_FOUND)

    promo = crud_promo_code.promo_code.find_for_event(
        db, code=code, event_id=event_id, organizer_id=event.owner_id
    )
    if not promo:
        logger.info(f"Unknown promo code attempted on event {event_id}")
        return _invalid(INVALID_CODE)

    email_usage_count = None
    if buyer_email and promo.max_uses_per_email is not None:
        email_usage_count = crud_promo_code.promo_code.count_email_usage(
            db, promo_code_id=promo.id, email=buyer_email
        )

    return evaluate(promo, order_amount, now or utcnow(), email_usage_count)
