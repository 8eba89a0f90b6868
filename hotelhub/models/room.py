
import uuid
import enum
from sqlalchemy import Column, String, DateTime, func, Text, Integer, DECIMAL, ForeignKey, UniqueConstraint, Uuid, Enum as SAEnum
from sqlalchemy.orm import relationship
from hotelhub.db.session import Base

class RoomStatus(str, enum.Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"
    OUT_OF_SERVICE = "out_of_service"

class Room(Base):
    __tablename__ = "rooms"
    __table_args__ = (
        UniqueConstraint("hotel_id", "number", name="uq_rooms_hotel_number"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    hotel_id = Column(Uuid, ForeignKey("hotels.id"), nullable=False, index=True)
    number = Column(String(20), nullable=False)
    label = Column(String(100), nullable=True)
    type = Column(String(50), nullable=False) # standard, deluxe, suite...
    price = Column(DECIMAL(10, 2), nullable=False)
    capacity = Column(Integer, default=2)
    description = Column(Text, nullable=True)
    status = Column(SAEnum(RoomStatus, native_enum=False), nullable=False, default=RoomStatus.AVAILABLE)
    # Bumped by every reservation attempt; the UPDATE serializes reservations per room.
    booking_version = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    hotel = relationship("Hotel", back_populates="rooms")
    bookings = relationship("Booking", back_populates="room")
