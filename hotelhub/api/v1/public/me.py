from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from hotelhub.db.session import get_db
from hotelhub.api.deps import get_current_user
from hotelhub.core.security import get_password_hash, verify_password
from hotelhub.models.booking import Booking
from hotelhub.models.user import User
from hotelhub.schemas.booking import Booking as BookingSchema
from hotelhub.schemas.common import PaginatedResponse, paginate
from hotelhub.schemas.user import User as UserSchema, UserUpdate, Landing, PasswordChange
from hotelhub.services.authorization import Principal, Scope, authorize, resolve_landing_dashboard

router = APIRouter(prefix="/me", tags=["Me"])


@router.get("/", response_model=UserSchema)
def get_me(current_user: User = Depends(get_current_user)):
    """Return the authenticated user's profile."""
    return current_user


@router.patch("/", response_model=UserSchema)
def update_me(
    data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update the authenticated user's profile (full_name, phone)."""
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(current_user, field, value)
    db.commit()
    db.refresh(current_user)
    return current_user


@router.post("/password", response_model=UserSchema)
def change_password(
    data: PasswordChange,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Replace the caller's password. Staff start with their PIN as password and
    ``force_password_reset`` set; a successful change clears the flag.
    The PIN itself is kept for PIN login.
    """
    if not verify_password(data.current_password, current_user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect",
        )
    if data.new_password == data.current_password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="New password must differ from the current one",
        )
    current_user.password_hash = get_password_hash(data.new_password)
    current_user.force_password_reset = False
    db.commit()
    db.refresh(current_user)
    return current_user


@router.get("/bookings", response_model=PaginatedResponse[BookingSchema])
def list_my_bookings(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Guest booking history: stays placed while signed in or under the account's email."""
    authorize(Principal.from_user(current_user), None, Scope.PUBLIC_BOOKING)
    query = db.query(Booking).filter(
        or_(Booking.created_by == current_user.id, Booking.guest_email == current_user.email)
    )
    return paginate(query.order_by(Booking.check_in.desc()), page, limit, BookingSchema.model_validate)


@router.get("/landing", response_model=Landing)
def get_landing(current_user: User = Depends(get_current_user)):
    """Where the client should send the user right after login."""
    dashboard = resolve_landing_dashboard(Principal.from_user(current_user))
    return Landing(
        route=dashboard.value,
        hotel_slug=current_user.hotel.slug if current_user.hotel else None,
    )
