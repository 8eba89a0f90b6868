
import uuid
import enum
from sqlalchemy import Column, String, DateTime, func, DECIMAL, Integer, ForeignKey, Text, CheckConstraint, Uuid, Enum as SAEnum
from sqlalchemy.orm import relationship
from hotelhub.db.session import Base

class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"

class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("check_out > check_in", name="ck_bookings_interval"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    reference = Column(String(20), unique=True, nullable=False, index=True)
    hotel_id = Column(Uuid, ForeignKey("hotels.id"), nullable=False, index=True)
    room_id = Column(Uuid, ForeignKey("rooms.id"), nullable=True, index=True)
    guest_name = Column(String(255), nullable=False)
    guest_email = Column(String(255), nullable=False)
    guest_phone = Column(String(20), nullable=True)
    number_of_guests = Column(Integer, default=1)
    check_in = Column(DateTime(timezone=True), nullable=False, index=True)
    check_out = Column(DateTime(timezone=True), nullable=False, index=True)
    total_amount = Column(DECIMAL(10, 2), nullable=True)
    payment_status = Column(String(50), default="pending") # pending, paid, failed, refunded
    payment_method = Column(String(50), nullable=True) # PAYSTACK, FLUTTERWAVE, STRIPE, CASH, CARD, TRANSFER
    payment_reference = Column(String(255), nullable=True)
    status = Column(SAEnum(BookingStatus, native_enum=False), nullable=False, default=BookingStatus.PENDING, index=True)
    special_requests = Column(Text, nullable=True)
    hold_expires = Column(DateTime(timezone=True), nullable=True, index=True)
    created_by = Column(Uuid, ForeignKey("users.id"), nullable=True) # null for anonymous guest bookings
    confirmed_at = Column(DateTime(timezone=True), nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    hotel = relationship("Hotel", back_populates="bookings")
    room = relationship("Room", back_populates="bookings")
