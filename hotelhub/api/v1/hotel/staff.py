from uuid import UUID
from typing import List
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from hotelhub.db.session import get_db
from hotelhub.api.deps import require_hotel_scope
from hotelhub.api.v1.hotel.hotels import get_hotel_or_404
from hotelhub.core.errors import NotFoundError
from hotelhub.core.security import get_pin_hash
from hotelhub.models.user import User, UserRole
from hotelhub.schemas.user import StaffCreate, User as UserSchema
from hotelhub.services.authorization import (
    STAFF_ROLES,
    Principal,
    Scope,
    authorize,
    validate_affiliation,
)

router = APIRouter(prefix="/hotels/{hotel_id}/staff", tags=["Hotel - Staff"])

owner_scope = require_hotel_scope(Scope.OWNER)

# Roles an owner or manager may create; managers themselves need HOTEL_SETTINGS.
CREATABLE_ROLES = frozenset(STAFF_ROLES) | {UserRole.HOTEL_MANAGER}


@router.get("/", response_model=List[UserSchema])
def list_staff(
    hotel_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(owner_scope),
):
    return (
        db.query(User)
        .filter(User.hotel_id == hotel_id, User.deleted_at.is_(None))
        .order_by(User.created_at)
        .all()
    )


@router.post("/", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
def create_staff(
    hotel_id: UUID,
    data: StaffCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(owner_scope),
):
    """Create a staff account; the PIN is also the initial password."""
    if data.role not in CREATABLE_ROLES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Role {data.role.value} cannot be created as hotel staff",
        )
    if data.role == UserRole.HOTEL_MANAGER:
        authorize(principal, hotel_id, Scope.HOTEL_SETTINGS)
    try:
        validate_affiliation(data.role, hotel_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    hotel = get_hotel_or_404(hotel_id, db)
    if db.query(User.id).filter(User.email == data.email).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )
    active_staff = db.query(User).filter(User.hotel_id == hotel_id, User.deleted_at.is_(None)).count()
    if hotel.max_staff is not None and active_staff >= hotel.max_staff:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Staff limit of {hotel.max_staff} reached",
        )

    pin_hash = get_pin_hash(data.pin_code)
    staff = User(
        email=data.email,
        username=data.username,
        full_name=data.full_name,
        phone=data.phone,
        role=data.role,
        hotel_id=hotel_id,
        pin_hash=pin_hash,
        password_hash=pin_hash,
        force_password_reset=True,
    )
    db.add(staff)
    db.commit()
    db.refresh(staff)
    return staff


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_staff(
    hotel_id: UUID,
    user_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(owner_scope),
):
    """Soft-delete a staff account. Owners cannot be removed here."""
    staff = db.query(User).filter(
        User.id == user_id,
        User.hotel_id == hotel_id,
        User.deleted_at.is_(None),
    ).first()
    if not staff:
        raise NotFoundError("Staff member not found")
    if staff.role == UserRole.HOTEL_OWNER or staff.id == principal.user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="This account cannot be removed",
        )
    if staff.role == UserRole.HOTEL_MANAGER:
        authorize(principal, hotel_id, Scope.HOTEL_SETTINGS)

    staff.deleted_at = datetime.now(timezone.utc)
    db.commit()
