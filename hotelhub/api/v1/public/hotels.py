from uuid import UUID
from typing import List, Optional
from datetime import datetime

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from hotelhub.db.session import get_db
from hotelhub.api.deps import get_principal
from hotelhub.core.errors import NotFoundError
from hotelhub.models.hotel import Hotel, HotelStatus
from hotelhub.models.room import Room, RoomStatus
from hotelhub.schemas.booking import BookingCreate, Booking as BookingSchema
from hotelhub.schemas.common import ConflictErrorResponse, ErrorResponse
from hotelhub.schemas.hotel import HotelPublic, HostContext
from hotelhub.schemas.room import Room as RoomSchema, RoomAvailability
from hotelhub.services import availability
from hotelhub.services.authorization import Principal
from hotelhub.services.tenancy import resolve_host

router = APIRouter(prefix="/public", tags=["Public - Booking"])


def _get_active_hotel(slug: str, db: Session) -> Hotel:
    hotel = (
        db.query(Hotel)
        .filter(Hotel.slug == slug, Hotel.status == HotelStatus.ACTIVE)
        .first()
    )
    if not hotel:
        raise NotFoundError("Hotel not found")
    return hotel


def _get_hotel_room(hotel: Hotel, room_id: UUID, db: Session) -> Room:
    room = db.query(Room).filter(Room.id == room_id, Room.hotel_id == hotel.id).first()
    if not room:
        raise NotFoundError("Room not found")
    return room


@router.get("/resolve-host", response_model=HostContext)
def resolve_request_host(
    request: Request,
    host: Optional[str] = Query(None, description="Host name to resolve; defaults to the request's Host header"),
    db: Session = Depends(get_db),
):
    """Tell the client whether a host is the platform console, a hotel, or the public portal."""
    return resolve_host(db, host or request.headers.get("host"))


@router.get("/hotels/{slug}", response_model=HotelPublic)
def get_public_hotel(slug: str, db: Session = Depends(get_db)):
    return _get_active_hotel(slug, db)


@router.get("/hotels/{slug}/rooms", response_model=List[RoomSchema])
def list_public_rooms(slug: str, db: Session = Depends(get_db)):
    """Bookable rooms of a hotel, ordered by room number."""
    hotel = _get_active_hotel(slug, db)
    return (
        db.query(Room)
        .filter(Room.hotel_id == hotel.id, Room.status != RoomStatus.OUT_OF_SERVICE)
        .order_by(Room.number)
        .all()
    )


@router.get("/hotels/{slug}/rooms/{room_id}/availability", response_model=RoomAvailability)
def get_room_availability(
    slug: str,
    room_id: UUID,
    check_in: datetime = Query(...),
    check_out: datetime = Query(...),
    db: Session = Depends(get_db),
):
    hotel = _get_active_hotel(slug, db)
    room = _get_hotel_room(hotel, room_id, db)
    result = availability.check_availability(db, room.id, check_in, check_out)
    start, end = availability.validate_interval(check_in, check_out)
    return RoomAvailability(
        room_id=room.id,
        check_in=start,
        check_out=end,
        available=result.available,
        conflicting_booking_ids=result.conflicting_ids,
    )


@router.post(
    "/hotels/{slug}/bookings",
    response_model=BookingSchema,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ConflictErrorResponse}, 404: {"model": ErrorResponse}},
)
def create_public_booking(
    slug: str,
    data: BookingCreate,
    db: Session = Depends(get_db),
    principal: Optional[Principal] = Depends(get_principal),
):
    """
    Guest booking flow: places a time-limited hold on the room.

    The hold blocks the room until it is confirmed (after payment) or expires.
    A 409 lists the conflicting stays and other free rooms of the same type.
    A signed-in caller is recorded as the booking's creator.
    """
    hotel = _get_active_hotel(slug, db)
    return availability.reserve(
        db,
        data.room_id,
        data.check_in,
        data.check_out,
        availability.GuestInfo(
            name=data.guest_name,
            email=data.guest_email,
            phone=data.guest_phone,
            number_of_guests=data.number_of_guests,
            special_requests=data.special_requests,
        ),
        hotel_id=hotel.id,
        created_by=principal.user_id if principal else None,
    )
