
import uuid
import enum
from sqlalchemy import Column, String, DateTime, func, Text, Integer, ForeignKey, Uuid, Enum as SAEnum
from sqlalchemy.orm import relationship
from hotelhub.db.session import Base

class HotelStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"

class Hotel(Base):
    __tablename__ = "hotels"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    slug = Column(String(100), unique=True, nullable=False, index=True) # immutable after creation
    domain = Column(String(255), unique=True, nullable=True)
    owner_id = Column(Uuid, ForeignKey("users.id", use_alter=True, name="fk_hotels_owner_id"), nullable=True)
    address = Column(Text, nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(20), nullable=True)
    total_rooms = Column(Integer, default=0)
    max_staff = Column(Integer, default=10)
    description = Column(Text, nullable=True)
    currency = Column(String(10), default="NGN")
    default_language = Column(String(10), default="en")
    website = Column(String(255), nullable=True)
    status = Column(SAEnum(HotelStatus, native_enum=False), nullable=False, default=HotelStatus.ACTIVE)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    owner = relationship("User", foreign_keys=[owner_id], post_update=True)
    staff = relationship("User", foreign_keys="User.hotel_id", back_populates="hotel")
    rooms = relationship("Room", back_populates="hotel", cascade="all, delete-orphan")
    bookings = relationship("Booking", back_populates="hotel")
    generator_logs = relationship("GeneratorLog", back_populates="hotel")
    attendance_logs = relationship("AttendanceLog", back_populates="hotel")
