
import uuid
import enum
from sqlalchemy import Column, String, DateTime, func, DECIMAL, ForeignKey, Text, Uuid, Enum as SAEnum
from sqlalchemy.orm import relationship
from hotelhub.db.session import Base

class GeneratorLogType(str, enum.Enum):
    FUEL_PURCHASE = "FUEL_PURCHASE"
    USAGE = "USAGE"
    MAINTENANCE = "MAINTENANCE"

class GeneratorLog(Base):
    __tablename__ = "generator_logs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    hotel_id = Column(Uuid, ForeignKey("hotels.id"), nullable=False, index=True)
    log_type = Column(SAEnum(GeneratorLogType, native_enum=False), nullable=False)
    fuel_amount = Column(DECIMAL(8, 2), nullable=True)
    fuel_consumed = Column(DECIMAL(8, 2), nullable=True)
    hours_run = Column(DECIMAL(6, 2), nullable=True)
    cost_per_liter = Column(DECIMAL(8, 2), nullable=True)
    total_cost = Column(DECIMAL(10, 2), nullable=True)
    supplier = Column(String(255), nullable=True)
    maintenance_type = Column(String(50), nullable=True)
    maintenance_notes = Column(Text, nullable=True)
    recorded_by = Column(Uuid, ForeignKey("users.id"), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    hotel = relationship("Hotel", back_populates="generator_logs")

class AttendanceLog(Base):
    __tablename__ = "attendance_logs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    hotel_id = Column(Uuid, ForeignKey("hotels.id"), nullable=False, index=True)
    punch_in = Column(DateTime(timezone=True), nullable=True)
    punch_out = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="attendance_logs")
    hotel = relationship("Hotel", back_populates="attendance_logs")
