"""
Room availability engine.

A room is blocked for ``[check_in, check_out)`` by every booking that is confirmed,
or pending with a hold that has not expired yet. Intervals are half-open, so a
stay ending at 12:00 does not collide with one starting at 12:00.

Reservations for one room are linearized by bumping ``rooms.booking_version``
before the overlap check: the UPDATE holds the room's write lock until commit,
so a concurrent attempt waits and then sees the committed booking.
"""
import logging
import math
import random
import string
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import and_, exists, or_, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hotelhub.core.config import settings
from hotelhub.core.errors import (
    ConflictError,
    InvalidHoldDurationError,
    InvalidIntervalError,
    InvalidStateError,
    NotFoundError,
)
from hotelhub.models.booking import Booking, BookingStatus
from hotelhub.models.room import Room, RoomStatus

logger = logging.getLogger(__name__)


@dataclass
class GuestInfo:
    name: str
    email: str
    phone: Optional[str] = None
    number_of_guests: int = 1
    special_requests: Optional[str] = None


@dataclass
class AvailabilityResult:
    available: bool
    conflicts: List[Booking] = field(default_factory=list)

    @property
    def conflicting_ids(self) -> List[uuid.UUID]:
        return [b.id for b in self.conflicts]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC (SQLite hands them back naive)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def validate_interval(start: Optional[datetime], end: Optional[datetime]):
    if start is None or end is None:
        raise InvalidIntervalError("Both check-in and check-out are required")
    start, end = ensure_utc(start), ensure_utc(end)
    if end <= start:
        raise InvalidIntervalError()
    return start, end


def _active_at(now: datetime):
    return or_(
        Booking.status == BookingStatus.CONFIRMED,
        and_(Booking.status == BookingStatus.PENDING, Booking.hold_expires > now),
    )


def _overlaps(start: datetime, end: datetime):
    return and_(Booking.check_in < end, Booking.check_out > start)


def _blocking_bookings(db: Session, room_id, start: datetime, end: datetime, now: datetime) -> List[Booking]:
    return (
        db.query(Booking)
        .filter(Booking.room_id == room_id, _active_at(now), _overlaps(start, end))
        .order_by(Booking.check_in)
        .all()
    )


def _describe(bookings: List[Booking]) -> List[Dict[str, Any]]:
    return [
        {
            "booking_id": b.id,
            "check_in": ensure_utc(b.check_in),
            "check_out": ensure_utc(b.check_out),
            "status": BookingStatus(b.status).value,
        }
        for b in bookings
    ]


def _generate_reference(db: Session) -> str:
    """Generate a unique 'HTL-XXXXXXXX' booking reference."""
    chars = string.ascii_uppercase + string.digits
    while True:
        reference = "HTL-" + "".join(random.choices(chars, k=8))
        if not db.query(Booking.id).filter(Booking.reference == reference).first():
            return reference


def stay_total(price: Optional[Decimal], start: datetime, end: datetime) -> Optional[Decimal]:
    """Room price times nights; part nights count as a full night."""
    if price is None:
        return None
    nights = max(1, math.ceil((end - start).total_seconds() / 86400))
    return Decimal(price) * nights


def _lock_room(db: Session, room_id) -> None:
    result = db.execute(
        update(Room)
        .where(Room.id == room_id)
        .values(booking_version=Room.booking_version + 1)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise NotFoundError("Room not found")


def _get_booking(db: Session, booking_id, hotel_id=None) -> Booking:
    query = db.query(Booking).filter(Booking.id == booking_id)
    if hotel_id is not None:
        query = query.filter(Booking.hotel_id == hotel_id)
    booking = query.first()
    if not booking:
        raise NotFoundError("Booking not found")
    return booking


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def check_availability(
    db: Session,
    room_id,
    start: datetime,
    end: datetime,
    now: Optional[datetime] = None,
) -> AvailabilityResult:
    start, end = validate_interval(start, end)
    now = ensure_utc(now) if now else utcnow()

    if not db.query(Room.id).filter(Room.id == room_id).first():
        raise NotFoundError("Room not found")

    conflicts = _blocking_bookings(db, room_id, start, end, now)
    return AvailabilityResult(available=not conflicts, conflicts=conflicts)


def suggest_alternatives(
    db: Session,
    room: Room,
    start: datetime,
    end: datetime,
    now: Optional[datetime] = None,
    limit: int = 5,
) -> List[Dict[str, Any]]:
    """Other rooms of the same hotel and type that are free for the interval."""
    start, end = validate_interval(start, end)
    now = ensure_utc(now) if now else utcnow()

    taken = exists().where(
        Booking.room_id == Room.id,
        _active_at(now),
        _overlaps(start, end),
    )
    rooms = (
        db.query(Room)
        .filter(
            Room.hotel_id == room.hotel_id,
            Room.id != room.id,
            Room.type == room.type,
            Room.status != RoomStatus.OUT_OF_SERVICE,
            ~taken,
        )
        .order_by(Room.number)
        .limit(limit)
        .all()
    )
    return [
        {"room_id": r.id, "number": r.number, "type": r.type, "price": r.price}
        for r in rooms
    ]


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


def reserve(
    db: Session,
    room_id,
    start: datetime,
    end: datetime,
    guest: GuestInfo,
    hold_duration_seconds: Optional[int] = None,
    *,
    hotel_id=None,
    created_by=None,
    now: Optional[datetime] = None,
) -> Booking:
    """
    Place a pending hold on a room, or raise ConflictError.

    The overlap check and the insert run in one transaction behind the room
    lock; the transaction is committed here. ``hotel_id`` restricts the room to
    one tenant.
    """
    start, end = validate_interval(start, end)
    now = ensure_utc(now) if now else utcnow()
    if hold_duration_seconds is None:
        hold_duration_seconds = settings.HOLD_DURATION_SECONDS
    if hold_duration_seconds <= 0:
        raise InvalidHoldDurationError()

    try:
        _lock_room(db, room_id)
        room = db.query(Room).populate_existing().filter(Room.id == room_id).one()
        if hotel_id is not None and room.hotel_id != hotel_id:
            raise NotFoundError("Room not found")
        if room.status == RoomStatus.OUT_OF_SERVICE:
            raise InvalidStateError("Room is out of service")

        conflicts = _blocking_bookings(db, room.id, start, end, now)
        if conflicts:
            raise ConflictError(
                _describe(conflicts),
                alternatives=suggest_alternatives(db, room, start, end, now=now),
            )

        booking = Booking(
            reference=_generate_reference(db),
            hotel_id=room.hotel_id,
            room_id=room.id,
            guest_name=guest.name,
            guest_email=guest.email,
            guest_phone=guest.phone,
            number_of_guests=guest.number_of_guests,
            special_requests=guest.special_requests,
            check_in=start,
            check_out=end,
            total_amount=stay_total(room.price, start, end),
            status=BookingStatus.PENDING,
            hold_expires=now + timedelta(seconds=hold_duration_seconds),
            created_by=created_by,
        )
        db.add(booking)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(booking)
    logger.info(
        "Reserved room %s for %s - %s (booking %s, hold until %s)",
        room_id, start.isoformat(), end.isoformat(), booking.reference,
        booking.hold_expires,
    )
    return booking


def confirm(
    db: Session,
    booking_id,
    *,
    hotel_id=None,
    payment_method: Optional[str] = None,
    payment_reference: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Booking:
    """Turn a pending hold into a confirmed booking. Expired holds cannot be confirmed."""
    now = ensure_utc(now) if now else utcnow()
    booking = _get_booking(db, booking_id, hotel_id)

    if booking.status != BookingStatus.PENDING:
        raise InvalidStateError(
            f"Only pending bookings can be confirmed (current status: '{BookingStatus(booking.status).value}')"
        )
    if booking.hold_expires is not None and ensure_utc(booking.hold_expires) <= now:
        raise InvalidStateError("Hold has expired")

    values = {
        "status": BookingStatus.CONFIRMED,
        "hold_expires": None,
        "confirmed_at": now,
    }
    if payment_method:
        values["payment_method"] = payment_method
    if payment_reference:
        values["payment_reference"] = payment_reference
        values["payment_status"] = "paid"

    # Guarded so a sweep or a second confirm running alongside cannot double-apply.
    result = db.execute(
        update(Booking)
        .where(
            Booking.id == booking.id,
            Booking.status == BookingStatus.PENDING,
            or_(Booking.hold_expires.is_(None), Booking.hold_expires > now),
        )
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        db.rollback()
        raise InvalidStateError("Booking is no longer pending")
    db.commit()
    db.refresh(booking)

    logger.info("Confirmed booking %s", booking.reference)
    return booking


def cancel(db: Session, booking_id, *, hotel_id=None, now: Optional[datetime] = None) -> Booking:
    now = ensure_utc(now) if now else utcnow()
    booking = _get_booking(db, booking_id, hotel_id)
    if booking.status not in (BookingStatus.PENDING, BookingStatus.CONFIRMED):
        raise InvalidStateError(
            f"Only pending or confirmed bookings can be cancelled (current status: '{BookingStatus(booking.status).value}')"
        )

    booking.status = BookingStatus.CANCELLED
    booking.hold_expires = None
    booking.cancelled_at = now
    db.commit()
    db.refresh(booking)

    logger.info("Cancelled booking %s", booking.reference)
    return booking


def complete(db: Session, booking_id, *, hotel_id=None, now: Optional[datetime] = None) -> Booking:
    """Check the guest out of a confirmed booking."""
    now = ensure_utc(now) if now else utcnow()
    booking = _get_booking(db, booking_id, hotel_id)
    if booking.status != BookingStatus.CONFIRMED:
        raise InvalidStateError(
            f"Only confirmed bookings can be checked out (current status: '{BookingStatus(booking.status).value}')"
        )

    booking.status = BookingStatus.COMPLETED
    booking.completed_at = now
    db.commit()
    db.refresh(booking)
    return booking


def expire_holds(db: Session, now: Optional[datetime] = None) -> int:
    """
    Cancel every pending booking whose hold expired before ``now``.

    Each booking is expired in its own transaction; a failure is logged and the
    sweep moves on. Returns the number of bookings cancelled by this run.
    """
    now = ensure_utc(now) if now else utcnow()
    expired_ids = [
        booking_id
        for (booking_id,) in db.query(Booking.id).filter(
            Booking.status == BookingStatus.PENDING,
            Booking.hold_expires < now,
        ).all()
    ]

    count = 0
    for booking_id in expired_ids:
        try:
            result = db.execute(
                update(Booking)
                .where(
                    Booking.id == booking_id,
                    Booking.status == BookingStatus.PENDING,
                    Booking.hold_expires < now,
                )
                .values(status=BookingStatus.CANCELLED, cancelled_at=now)
                .execution_options(synchronize_session=False)
            )
            db.commit()
            count += result.rowcount
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Failed to expire hold on booking %s", booking_id)

    if count:
        logger.info("Expired %d booking hold(s).", count)
    return count
