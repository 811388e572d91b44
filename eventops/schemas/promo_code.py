# eventops/schemas/promo_code.py
from datetime import datetime
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, EmailStr, Field


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


# Bounds on discount values and the code format are checked by the
# endpoint so callers get the domain error messages, not a 422.
class PromoCodeBase(BaseModel):
    code: str = Field(..., max_length=50)
    description: Optional[str] = None
    discount_type: DiscountType
    discount_value: int
    max_uses: Optional[int] = Field(None, ge=1)
    max_uses_per_email: Optional[int] = Field(None, ge=1)
    min_order_amount: Optional[int] = Field(None, ge=0)  # In cents
    valid_from: Optional[datetime] = None
    valid_until: Optional[datetime] = None
    is_active: bool = True


class PromoCodeCreate(PromoCodeBase):
    event_id: Optional[str] = None


class PromoCodeUpdate(BaseModel):
    code: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = None
    discount_type: Optional[DiscountType] = None
    discount_value: Optional[int] = None
    max_uses: Optional[int] = Field(None, ge=1)
    max_uses_per_email: Optional[int] = Field(None, ge=1)
    min_order_amount: Optional[int] = Field(None, ge=0)
    valid_from: Optional[datetime] = None
    valid_until: Optional[datetime] = None
    is_active: Optional[bool] = None


class PromoCode(PromoCodeBase):
    id: str
    organizer_id: str
    event_id: Optional[str] = None
    used_count: int = 0
    remaining_uses: Optional[int] = None
    discount_formatted: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class PromoCodeValidateRequest(BaseModel):
    code: str
    event_id: str
    order_amount: int = Field(..., ge=0)
    buyer_email: Optional[EmailStr] = None


class PromoCodeValidation(BaseModel):
    valid: bool
    error: Optional[str] = None
    promo_code_id: Optional[str] = None
    code: Optional[str] = None
    discount_type: Optional[DiscountType] = None
    discount_value: Optional[int] = None
    discount_amount: Optional[int] = None
    description: Optional[str] = None


class PromoCodeRedeemRequest(BaseModel):
    order_id: str = Field(..., min_length=1)
    order_amount: int = Field(..., ge=0)
    buyer_email: Optional[EmailStr] = None


class PromoCodeUsage(BaseModel):
    id: str
    promo_code_id: str
    order_id: str
    buyer_email: Optional[str] = None
    discount_applied: int
    used_at: datetime

    model_config = {"from_attributes": True}


class PromoCodeList(BaseModel):
    data: List[PromoCode]
