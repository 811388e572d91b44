# eventops/schemas/attendee.py
from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class AttendeeStatus(str, Enum):
    registered = "registered"
    confirmed = "confirmed"
    checked_in = "checked_in"
    cancelled = "cancelled"
    no_show = "no_show"


class AttendeeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=50)
    ticket_type: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None


class AttendeeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    ticket_type: Optional[str] = Field(None, max_length=100)
    status: Optional[AttendeeStatus] = None
    notes: Optional[str] = None


class Attendee(BaseModel):
    id: str
    event_id: str
    name: str
    email: str
    phone: Optional[str] = None
    ticket_type: Optional[str] = None
    ticket_number: str
    status: AttendeeStatus
    notes: Optional[str] = None
    checked_in_at: Optional[datetime] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class CheckInRequest(BaseModel):
    """Check in by attendee id or by the ticket number printed on the ticket."""
    attendee_id: Optional[str] = None
    ticket_number: Optional[str] = None


class AttendeeStats(BaseModel):
    total: int
    registered: int
    confirmed: int
    checked_in: int
    cancelled: int
    no_show: int
    check_in_rate: int


class CheckInResult(BaseModel):
    success: bool
    message: str
    attendee: Optional[Attendee] = None
