from uuid import UUID
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from hotelhub.db.session import get_db
from hotelhub.api.deps import require_hotel_scope
from hotelhub.core.errors import NotFoundError
from hotelhub.models.booking import Booking, BookingStatus
from hotelhub.schemas.booking import BookingCreate, BookingConfirm, Booking as BookingSchema
from hotelhub.schemas.common import PaginatedResponse, ConflictErrorResponse, paginate
from hotelhub.services import availability
from hotelhub.services.authorization import Principal, Scope

router = APIRouter(prefix="/hotels/{hotel_id}/bookings", tags=["Hotel - Bookings"])

front_desk = require_hotel_scope(Scope.FRONT_DESK)


@router.get("/", response_model=PaginatedResponse[BookingSchema])
def list_bookings(
    hotel_id: UUID,
    status: Optional[BookingStatus] = Query(None, description="Filter by status: pending, confirmed, cancelled, completed"),
    room_id: Optional[UUID] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    principal: Principal = Depends(front_desk),
):
    """Return the hotel's bookings, soonest check-in first."""
    query = db.query(Booking).filter(Booking.hotel_id == hotel_id)
    if status:
        query = query.filter(Booking.status == status)
    if room_id:
        query = query.filter(Booking.room_id == room_id)
    return paginate(query.order_by(Booking.check_in), page, limit, BookingSchema.model_validate)


@router.post(
    "/",
    response_model=BookingSchema,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ConflictErrorResponse}},
)
def create_booking(
    hotel_id: UUID,
    data: BookingCreate,
    hold_seconds: Optional[int] = Query(None, ge=1, description="Hold duration; defaults to the configured value"),
    db: Session = Depends(get_db),
    principal: Principal = Depends(front_desk),
):
    """Walk-in / phone reservation placed by the front desk."""
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
        hold_seconds,
        hotel_id=hotel_id,
        created_by=principal.user_id,
    )


@router.get("/{booking_id}", response_model=BookingSchema)
def get_booking(
    hotel_id: UUID,
    booking_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(front_desk),
):
    booking = db.query(Booking).filter(Booking.id == booking_id, Booking.hotel_id == hotel_id).first()
    if not booking:
        raise NotFoundError("Booking not found")
    return booking


@router.post("/{booking_id}/confirm", response_model=BookingSchema)
def confirm_booking(
    hotel_id: UUID,
    booking_id: UUID,
    data: Optional[BookingConfirm] = None,
    db: Session = Depends(get_db),
    principal: Principal = Depends(front_desk),
):
    data = data or BookingConfirm()
    return availability.confirm(
        db,
        booking_id,
        hotel_id=hotel_id,
        payment_method=data.payment_method,
        payment_reference=data.payment_reference,
    )


@router.post("/{booking_id}/cancel", response_model=BookingSchema)
def cancel_booking(
    hotel_id: UUID,
    booking_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(front_desk),
):
    return availability.cancel(db, booking_id, hotel_id=hotel_id)


@router.post("/{booking_id}/check-out", response_model=BookingSchema)
def check_out_booking(
    hotel_id: UUID,
    booking_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(front_desk),
):
    return availability.complete(db, booking_id, hotel_id=hotel_id)
