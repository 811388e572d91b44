# eventops/schemas/vendor.py
from datetime import datetime
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, EmailStr, Field, HttpUrl, model_validator

from eventops.schemas.sponsor import ReviewStatus


class EventVendorStatus(str, Enum):
    inquiry = "inquiry"
    negotiating = "negotiating"
    confirmed = "confirmed"
    declined = "declined"
    completed = "completed"


class VendorCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    category: str = Field(..., min_length=1, max_length=100)
    services: List[str] = Field(default_factory=list)
    location: Optional[str] = Field(None, max_length=200)
    price_min: Optional[int] = Field(None, ge=0)
    price_max: Optional[int] = Field(None, ge=0)
    contact_name: Optional[str] = Field(None, max_length=200)
    contact_email: Optional[EmailStr] = None
    website: Optional[HttpUrl] = None

    @model_validator(mode="after")
    def check_price_range(self):
        if (
            self.price_min is not None
            and self.price_max is not None
            and self.price_min > self.price_max
        ):
            raise ValueError("Minimum price cannot exceed maximum price")
        return self


class Vendor(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    category: str
    services: Optional[List[str]] = None
    location: Optional[str] = None
    price_min: Optional[int] = None
    price_max: Optional[int] = None
    rating: Optional[float] = None
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    website: Optional[str] = None
    status: ReviewStatus
    verified: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class VendorAdmin(Vendor):
    submitted_by: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    review_notes: Optional[str] = None
    rejection_reason: Optional[str] = None


class EventVendorCreate(BaseModel):
    vendor_id: str
    proposed_budget: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None


class EventVendorUpdate(BaseModel):
    status: Optional[EventVendorStatus] = None
    final_budget: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None


class EventVendor(BaseModel):
    id: str
    event_id: str
    vendor_id: str
    status: EventVendorStatus
    proposed_budget: Optional[int] = None
    final_budget: Optional[int] = None
    notes: Optional[str] = None
    vendor: Optional[Vendor] = None
    created_at: datetime

    model_config = {"from_attributes": True}
