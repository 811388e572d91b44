# eventops/schemas/user.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from eventops.core.security import password_policy_errors
from eventops.schemas.token import Token


class UserRegister(BaseModel):
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=200)
    password: str = Field(..., max_length=128)
    # Self-registration is limited to the non-admin roles
    role: str = Field(default="organizer", pattern=r"^(organizer|vendor|sponsor|volunteer)$")

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        errors = password_policy_errors(v)
        if errors:
            raise ValueError(f"Password must have: {', '.join(errors)}")
        return v


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    avatar_url: Optional[str] = Field(None, max_length=500)


class User(BaseModel):
    id: str
    email: str
    name: str
    role: str
    avatar_url: Optional[str] = None
    is_suspended: bool = False
    created_at: datetime

    model_config = {"from_attributes": True}


class AuthResponse(Token):
    user: User
