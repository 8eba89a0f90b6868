
from typing import Optional
from pydantic import BaseModel, EmailStr, UUID4, Field, field_validator, model_validator
from datetime import datetime

from hotelhub.models.hotel import HotelStatus
from hotelhub.schemas.user import OwnerCreate


class HotelBase(BaseModel):
    name: str
    domain: Optional[str] = None
    address: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    total_rooms: int = Field(default=1, ge=1)
    max_staff: int = Field(default=10, ge=1)
    description: Optional[str] = None
    currency: str = "NGN"
    default_language: str = "en"
    website: Optional[str] = None


# POST /admin/hotels: either a new owner account or an existing unassigned owner
class HotelCreate(HotelBase):
    slug: Optional[str] = Field(default=None, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    owner_id: Optional[UUID4] = None
    owner: Optional[OwnerCreate] = None

    @model_validator(mode="after")
    def one_owner_source(self):
        if self.owner_id and self.owner:
            raise ValueError("Provide either owner_id or owner, not both")
        return self


# PATCH /hotels/{hotel_id}: no slug, it is immutable
class HotelUpdate(BaseModel):
    name: Optional[str] = None
    domain: Optional[str] = None
    address: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    description: Optional[str] = None
    currency: Optional[str] = None
    default_language: Optional[str] = None
    website: Optional[str] = None
    status: Optional[HotelStatus] = None

    # Omit a field to keep it; these columns cannot be cleared.
    @field_validator("name", "currency", "default_language", "status")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("cannot be null")
        if isinstance(value, str) and not value.strip():
            raise ValueError("cannot be blank")
        return value

    # "" clears the custom domain
    @field_validator("domain")
    @classmethod
    def normalize_domain(cls, value):
        if value is None or not value.strip():
            return None
        return value.strip().lower()


class Hotel(HotelBase):
    id: UUID4
    slug: str
    email: Optional[str] = None
    total_rooms: Optional[int] = None
    max_staff: Optional[int] = None
    owner_id: Optional[UUID4] = None
    status: HotelStatus
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# Public storefront view (GET /public/hotels/{slug})
class HotelPublic(BaseModel):
    id: UUID4
    name: str
    slug: str
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    description: Optional[str] = None
    currency: Optional[str] = None
    website: Optional[str] = None

    class Config:
        from_attributes = True


class HostContext(BaseModel):
    type: str # platform, hotel, public
    hotel_slug: Optional[str] = None


class DashboardAccess(BaseModel):
    hotel_id: UUID4
    hotel_slug: str
    hotel_name: str
    segment: str
    scope: str
