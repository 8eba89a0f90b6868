
from typing import Optional
from pydantic import BaseModel, UUID4
from decimal import Decimal
from datetime import datetime

from hotelhub.models.operational_log import GeneratorLogType


class GeneratorLogCreate(BaseModel):
    log_type: GeneratorLogType
    fuel_amount: Optional[Decimal] = None
    fuel_consumed: Optional[Decimal] = None
    hours_run: Optional[Decimal] = None
    cost_per_liter: Optional[Decimal] = None
    total_cost: Optional[Decimal] = None
    supplier: Optional[str] = None
    maintenance_type: Optional[str] = None
    maintenance_notes: Optional[str] = None
    notes: Optional[str] = None


class GeneratorLog(GeneratorLogCreate):
    id: UUID4
    hotel_id: UUID4
    recorded_by: Optional[UUID4] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AttendanceLog(BaseModel):
    id: UUID4
    user_id: UUID4
    hotel_id: UUID4
    punch_in: Optional[datetime] = None
    punch_out: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
