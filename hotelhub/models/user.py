
import uuid
import enum
from sqlalchemy import Column, String, Boolean, DateTime, func, Text, ForeignKey, Uuid, Enum as SAEnum
from sqlalchemy.orm import relationship
from hotelhub.db.session import Base

class UserRole(str, enum.Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    DEVELOPER_ADMIN = "DEVELOPER_ADMIN"
    HOTEL_OWNER = "HOTEL_OWNER"
    HOTEL_MANAGER = "HOTEL_MANAGER"
    FRONT_DESK = "FRONT_DESK"
    HOUSEKEEPING = "HOUSEKEEPING"
    MAINTENANCE = "MAINTENANCE"
    ACCOUNTING = "ACCOUNTING"
    POS_STAFF = "POS_STAFF"
    GUEST = "GUEST"

class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    username = Column(String(100), nullable=True)
    full_name = Column(String(255), nullable=True)
    phone = Column(String(20), nullable=True)
    password_hash = Column(Text, nullable=True)
    pin_hash = Column(Text, nullable=True)
    role = Column(SAEnum(UserRole, native_enum=False), nullable=False, index=True)
    hotel_id = Column(Uuid, ForeignKey("hotels.id"), nullable=True, index=True) # null for platform admins and guests
    force_password_reset = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    hotel = relationship("Hotel", foreign_keys=[hotel_id], back_populates="staff")
    attendance_logs = relationship("AttendanceLog", back_populates="user")

    @property
    def is_active(self) -> bool:
        return self.deleted_at is None
