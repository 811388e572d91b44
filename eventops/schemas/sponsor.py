# eventops/schemas/sponsor.py
"""
Pydantic schemas for the sponsor catalog and event-sponsor links.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, EmailStr, Field, HttpUrl, model_validator


class ReviewStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class EventSponsorStatus(str, Enum):
    inquiry = "inquiry"
    negotiating = "negotiating"
    confirmed = "confirmed"
    declined = "declined"


# ============================================
# Sponsor Schemas
# ============================================

class SponsorCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    industry: str = Field(..., min_length=1, max_length=100)
    sponsorship_tiers: List[str] = Field(default_factory=list)
    budget_min: Optional[int] = Field(None, ge=0)
    budget_max: Optional[int] = Field(None, ge=0)
    target_event_types: List[str] = Field(default_factory=list)
    target_audience: Optional[str] = Field(None, max_length=2000)
    contact_name: Optional[str] = Field(None, max_length=200)
    contact_email: Optional[EmailStr] = None
    website: Optional[HttpUrl] = None

    @model_validator(mode="after")
    def check_budget_range(self):
        if (
            self.budget_min is not None
            and self.budget_max is not None
            and self.budget_min > self.budget_max
        ):
            raise ValueError("Minimum budget cannot exceed maximum budget")
        return self


class Sponsor(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    industry: str
    sponsorship_tiers: Optional[List[str]] = None
    budget_min: Optional[int] = None
    budget_max: Optional[int] = None
    target_event_types: Optional[List[str]] = None
    target_audience: Optional[str] = None
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    website: Optional[str] = None
    status: ReviewStatus
    verified: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class SponsorAdmin(Sponsor):
    submitted_by: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    review_notes: Optional[str] = None
    rejection_reason: Optional[str] = None


class ReviewDecision(BaseModel):
    """Body for approve/reject; shared with vendors."""
    notes: Optional[str] = Field(None, max_length=2000)
    reason: Optional[str] = Field(None, max_length=2000)


# ============================================
# Event Sponsor Schemas
# ============================================

class EventSponsorCreate(BaseModel):
    sponsor_id: str
    tier: Optional[str] = Field(None, max_length=50)
    proposed_amount: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None


class EventSponsorUpdate(BaseModel):
    status: Optional[EventSponsorStatus] = None
    tier: Optional[str] = Field(None, max_length=50)
    final_amount: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None


class EventSponsor(BaseModel):
    id: str
    event_id: str
    sponsor_id: str
    status: EventSponsorStatus
    tier: Optional[str] = None
    proposed_amount: Optional[int] = None
    final_amount: Optional[int] = None
    notes: Optional[str] = None
    sponsor: Optional[Sponsor] = None
    created_at: datetime

    model_config = {"from_attributes": True}
