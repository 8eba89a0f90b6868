
from typing import Optional
from pydantic import BaseModel, EmailStr, UUID4, Field
from decimal import Decimal
from datetime import datetime

from hotelhub.models.booking import BookingStatus


# Booking: Create (POST /public/hotels/{slug}/bookings, POST /hotels/{hotel_id}/bookings)
class BookingCreate(BaseModel):
    room_id: UUID4
    check_in: datetime
    check_out: datetime
    guest_name: str = Field(min_length=1, max_length=255)
    guest_email: EmailStr
    guest_phone: Optional[str] = None
    number_of_guests: int = Field(default=1, ge=1)
    special_requests: Optional[str] = None


# Booking: Confirm (POST /hotels/{hotel_id}/bookings/{id}/confirm)
class BookingConfirm(BaseModel):
    payment_method: Optional[str] = None
    payment_reference: Optional[str] = None


class Booking(BaseModel):
    id: UUID4
    reference: str
    hotel_id: UUID4
    room_id: Optional[UUID4] = None
    guest_name: str
    guest_email: str
    guest_phone: Optional[str] = None
    number_of_guests: Optional[int] = None
    check_in: datetime
    check_out: datetime
    total_amount: Optional[Decimal] = None
    payment_status: Optional[str] = None
    payment_method: Optional[str] = None
    status: BookingStatus
    special_requests: Optional[str] = None
    hold_expires: Optional[datetime] = None
    confirmed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class HoldSweepResponse(BaseModel):
    expired: int
