from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from models.user import User


def _required_text(value: str, field: str, max_len: int) -> str:
    text = (value or "").strip()
    if not text or len(text) > max_len:
        raise ValueError(f"{field} must be 1-{max_len} characters")
    return text


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    first_name: str
    last_name: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("first_name", "last_name")
    @classmethod
    def validate_names(cls, value: str, info) -> str:
        return _required_text(value, info.field_name, 100)


class UserLogin(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return (value or "").strip().lower()


class ProfileUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    password: Optional[str] = Field(None, min_length=6)

    @model_validator(mode="after")
    def at_least_one_field(self) -> "ProfileUpdate":
        if self.first_name is None and self.last_name is None and self.password is None:
            raise ValueError("at least one of first_name, last_name, password is required")
        return self


class BusinessDetailsUpdate(BaseModel):
    industry: str
    location: str

    @field_validator("industry", "location")
    @classmethod
    def validate_text(cls, value: str, info) -> str:
        return _required_text(value, info.field_name, 120)


class BusinessDetailsOut(BaseModel):
    industry: Optional[str] = None
    location: Optional[str] = None
    category: Optional[str] = None


class UserOut(BaseModel):
    id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    business_details: BusinessDetailsOut = Field(default_factory=BusinessDetailsOut)
    setup_completed: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def to_user_out(u: User) -> UserOut:
    # Never expose hashed_password
    return UserOut(
        id=u.id,
        email=u.email,
        first_name=u.first_name,
        last_name=u.last_name,
        business_details=BusinessDetailsOut(
            industry=u.business_industry,
            location=u.business_location,
            category=u.industry_category,
        ),
        setup_completed=bool(u.setup_completed),
        created_at=u.created_at,
        updated_at=u.updated_at,
    )


class UserResponse(BaseModel):
    success: bool = True
    data: UserOut


class AuthPayload(BaseModel):
    user: UserOut
    token: str


class AuthResponse(BaseModel):
    success: bool = True
    data: AuthPayload
