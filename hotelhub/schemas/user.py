
from typing import Optional
from pydantic import BaseModel, EmailStr, UUID4, Field
from datetime import datetime

from hotelhub.models.user import UserRole


# Properties to receive via API on guest registration (POST /auth/register)
class UserCreate(BaseModel):
    email: EmailStr
    full_name: str
    phone: Optional[str] = None
    password: str = Field(min_length=6)


# Staff created by an owner or manager (POST /hotels/{hotel_id}/staff)
class StaffCreate(BaseModel):
    email: EmailStr
    full_name: str
    username: Optional[str] = None
    phone: Optional[str] = None
    role: UserRole
    pin_code: str = Field(min_length=4, max_length=12)


# Owner account created alongside a new hotel (POST /admin/hotels)
class OwnerCreate(BaseModel):
    email: EmailStr
    full_name: str
    phone: Optional[str] = None
    password: str = Field(min_length=6)


# Properties to receive via API on update (PATCH /me)
class UserUpdate(BaseModel):
    full_name: Optional[str] = None
    phone: Optional[str] = None


class User(BaseModel):
    id: UUID4
    email: EmailStr
    username: Optional[str] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None
    role: UserRole
    hotel_id: Optional[UUID4] = None
    force_password_reset: Optional[bool] = False
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class Token(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str
    user: User


class Landing(BaseModel):
    route: str
    hotel_slug: Optional[str] = None


class TokenRefresh(BaseModel):
    refresh_token: str


# POST /me/password
class PasswordChange(BaseModel):
    current_password: str
    new_password: str = Field(min_length=6)
