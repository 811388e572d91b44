# eventops/schemas/moderation.py
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any
from pydantic import BaseModel, Field


class FlagSeverity(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class SuspendRequest(BaseModel):
    reason: str = Field(..., min_length=1, max_length=1000)


class RoleChangeRequest(BaseModel):
    new_role: str = Field(..., pattern=r"^(admin|organizer|vendor|sponsor|volunteer)$")
    reason: Optional[str] = Field(None, max_length=1000)


class FlagEventRequest(BaseModel):
    reason: str = Field(..., min_length=1, max_length=1000)
    severity: FlagSeverity = FlagSeverity.medium


class ModerationLog(BaseModel):
    id: str
    admin_id: str
    action: str
    target_type: str
    target_id: str
    reason: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = Field(None, validation_alias="metadata_")
    created_at: datetime

    model_config = {"from_attributes": True}
