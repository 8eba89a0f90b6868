from uuid import UUID
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from hotelhub.db.session import get_db
from hotelhub.api.deps import require_hotel_scope
from hotelhub.models.operational_log import GeneratorLog, AttendanceLog
from hotelhub.schemas.common import PaginatedResponse, paginate
from hotelhub.schemas.operational_log import (
    GeneratorLogCreate,
    GeneratorLog as GeneratorLogSchema,
    AttendanceLog as AttendanceLogSchema,
)
from hotelhub.services.authorization import Principal, Scope

generator_router = APIRouter(prefix="/hotels/{hotel_id}/generator-logs", tags=["Hotel - Generator"])
attendance_router = APIRouter(prefix="/hotels/{hotel_id}/attendance", tags=["Hotel - Attendance"])


# ---------------------------------------------------------------------------
# Generator tracker
# ---------------------------------------------------------------------------


@generator_router.get("/", response_model=PaginatedResponse[GeneratorLogSchema])
def list_generator_logs(
    hotel_id: UUID,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_hotel_scope(Scope.MAINTENANCE)),
):
    query = (
        db.query(GeneratorLog)
        .filter(GeneratorLog.hotel_id == hotel_id)
        .order_by(GeneratorLog.created_at.desc())
    )
    return paginate(query, page, limit, GeneratorLogSchema.model_validate)


@generator_router.post("/", response_model=GeneratorLogSchema, status_code=status.HTTP_201_CREATED)
def create_generator_log(
    hotel_id: UUID,
    data: GeneratorLogCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_hotel_scope(Scope.MAINTENANCE)),
):
    values = data.model_dump()
    # Fuel purchases without an explicit total are priced per liter.
    if values["total_cost"] is None and values["fuel_amount"] is not None and values["cost_per_liter"] is not None:
        values["total_cost"] = values["fuel_amount"] * values["cost_per_liter"]

    log = GeneratorLog(**values, hotel_id=hotel_id, recorded_by=principal.user_id)
    db.add(log)
    db.commit()
    db.refresh(log)
    return log


# ---------------------------------------------------------------------------
# Staff attendance
# ---------------------------------------------------------------------------


def _open_shift(db: Session, hotel_id: UUID, user_id: UUID):
    return db.query(AttendanceLog).filter(
        AttendanceLog.hotel_id == hotel_id,
        AttendanceLog.user_id == user_id,
        AttendanceLog.punch_out.is_(None),
    ).first()


@attendance_router.post("/punch-in", response_model=AttendanceLogSchema, status_code=status.HTTP_201_CREATED)
def punch_in(
    hotel_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_hotel_scope(Scope.STAFF)),
):
    if _open_shift(db, hotel_id, principal.user_id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Already punched in")
    log = AttendanceLog(
        user_id=principal.user_id,
        hotel_id=hotel_id,
        punch_in=datetime.now(timezone.utc),
    )
    db.add(log)
    db.commit()
    db.refresh(log)
    return log


@attendance_router.post("/punch-out", response_model=AttendanceLogSchema)
def punch_out(
    hotel_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_hotel_scope(Scope.STAFF)),
):
    log = _open_shift(db, hotel_id, principal.user_id)
    if not log:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Not punched in")
    log.punch_out = datetime.now(timezone.utc)
    db.commit()
    db.refresh(log)
    return log


@attendance_router.get("/", response_model=PaginatedResponse[AttendanceLogSchema])
def list_attendance(
    hotel_id: UUID,
    user_id: UUID = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_hotel_scope(Scope.ACCOUNTING)),
):
    query = db.query(AttendanceLog).filter(AttendanceLog.hotel_id == hotel_id)
    if user_id:
        query = query.filter(AttendanceLog.user_id == user_id)
    return paginate(query.order_by(AttendanceLog.created_at.desc()), page, limit, AttendanceLogSchema.model_validate)
