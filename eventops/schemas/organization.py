# eventops/schemas/organization.py
from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, EmailStr, Field


class OrganizationPlan(str, Enum):
    free = "free"
    pro = "pro"
    business = "business"
    enterprise = "enterprise"


class AssignableRole(str, Enum):
    """Roles that can be granted by invitation or role change (never owner)."""
    admin = "admin"
    manager = "manager"
    member = "member"
    viewer = "viewer"


class OrganizationCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    logo_url: Optional[str] = Field(None, max_length=500)
    website: Optional[str] = Field(None, max_length=500)
    plan: OrganizationPlan = OrganizationPlan.free


class OrganizationUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    logo_url: Optional[str] = Field(None, max_length=500)
    website: Optional[str] = Field(None, max_length=500)
    settings: Optional[Dict[str, Any]] = None


class Organization(BaseModel):
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    logo_url: Optional[str] = None
    website: Optional[str] = None
    owner_id: str
    plan: OrganizationPlan
    max_members: int
    max_events: Optional[int] = None
    settings: Optional[Dict[str, Any]] = None
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}


class MyOrganization(Organization):
    member_role: str


class Member(BaseModel):
    id: str
    organization_id: str
    user_id: str
    role: str
    status: str
    joined_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class InvitationCreate(BaseModel):
    email: EmailStr
    role: AssignableRole = AssignableRole.member
    message: Optional[str] = Field(None, max_length=1000)


class Invitation(BaseModel):
    id: str
    organization_id: str
    email: str
    role: str
    status: str
    token: str
    expires_at: datetime
    created_at: datetime

    model_config = {"from_attributes": True}


class InvitationAccept(BaseModel):
    token: str


class MemberRoleUpdate(BaseModel):
    role: AssignableRole


class OwnershipTransfer(BaseModel):
    new_owner_id: str
