# eventops/schemas/event.py
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from enum import Enum


class EventStatus(str, Enum):
    draft = "draft"
    planning = "planning"
    active = "active"
    completed = "completed"
    cancelled = "cancelled"


class EventBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200, json_schema_extra={"example": "Global AI Summit"})
    description: Optional[str] = Field(
        None, json_schema_extra={"example": "The premier event for AI enthusiasts"}
    )
    event_type: Optional[str] = Field(None, max_length=50, json_schema_extra={"example": "conference"})
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    location: Optional[str] = Field(None, max_length=500)
    budget: Optional[int] = Field(None, ge=0, description="Total budget in cents")
    expected_attendees: Optional[int] = Field(None, ge=0)


class EventCreate(EventBase):
    status: EventStatus = EventStatus.draft
    organization_id: Optional[str] = None


# Schema for updating an event. All fields are optional.
class EventUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    event_type: Optional[str] = Field(None, max_length=50)
    status: Optional[EventStatus] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    location: Optional[str] = Field(None, max_length=500)
    budget: Optional[int] = Field(None, ge=0)
    expected_attendees: Optional[int] = Field(None, ge=0)


class Event(EventBase):
    id: str = Field(..., json_schema_extra={"example": "evt_c5a6d8e0f9b1"})
    owner_id: str
    organization_id: Optional[str] = None
    status: EventStatus
    is_flagged: bool = False
    flagged_reason: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class Pagination(BaseModel):
    totalItems: int
    totalPages: int
    currentPage: int


class PaginatedEvent(BaseModel):
    data: List[Event]
    pagination: Pagination
