from uuid import UUID
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hotelhub.db.session import get_db
from hotelhub.api.deps import require_hotel_scope
from hotelhub.api.v1.hotel.hotels import get_hotel_or_404
from hotelhub.core.errors import NotFoundError
from hotelhub.models.room import Room, RoomStatus
from hotelhub.schemas.room import RoomCreate, RoomStatusUpdate, Room as RoomSchema
from hotelhub.services.authorization import Principal, Scope

router = APIRouter(prefix="/hotels/{hotel_id}/rooms", tags=["Hotel - Rooms"])


@router.get("/", response_model=List[RoomSchema])
def list_rooms(
    hotel_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_hotel_scope(Scope.STAFF)),
):
    return db.query(Room).filter(Room.hotel_id == hotel_id).order_by(Room.number).all()


@router.post("/", response_model=RoomSchema, status_code=status.HTTP_201_CREATED)
def create_room(
    hotel_id: UUID,
    data: RoomCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_hotel_scope(Scope.OWNER)),
):
    get_hotel_or_404(hotel_id, db)
    if db.query(Room.id).filter(Room.hotel_id == hotel_id, Room.number == data.number).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Room {data.number} already exists",
        )
    room = Room(**data.model_dump(), hotel_id=hotel_id, status=RoomStatus.AVAILABLE)
    db.add(room)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Room {data.number} already exists",
        )
    db.refresh(room)
    return room


@router.patch("/{room_id}/status", response_model=RoomSchema)
def update_room_status(
    hotel_id: UUID,
    room_id: UUID,
    data: RoomStatusUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_hotel_scope(Scope.HOUSEKEEPING)),
):
    room = db.query(Room).filter(Room.id == room_id, Room.hotel_id == hotel_id).first()
    if not room:
        raise NotFoundError("Room not found")
    room.status = data.status
    db.commit()
    db.refresh(room)
    return room
