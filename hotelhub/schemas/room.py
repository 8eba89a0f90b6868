
from typing import Optional
from pydantic import BaseModel, UUID4, Field
from decimal import Decimal
from datetime import datetime

from hotelhub.models.room import RoomStatus


class RoomCreate(BaseModel):
    number: str = Field(min_length=1, max_length=20)
    label: Optional[str] = None
    type: str
    price: Decimal = Field(ge=0)
    capacity: int = Field(default=2, ge=1)
    description: Optional[str] = None


class RoomStatusUpdate(BaseModel):
    status: RoomStatus


class Room(BaseModel):
    id: UUID4
    hotel_id: UUID4
    number: str
    label: Optional[str] = None
    type: str
    price: Decimal
    capacity: Optional[int] = None
    description: Optional[str] = None
    status: RoomStatus
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RoomAvailability(BaseModel):
    room_id: UUID4
    check_in: datetime
    check_out: datetime
    available: bool
    conflicting_booking_ids: list[UUID4] = []
