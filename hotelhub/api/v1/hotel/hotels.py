from uuid import UUID
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from hotelhub.db.session import get_db
from hotelhub.api.deps import get_principal, require_hotel_scope
from hotelhub.core.errors import NotFoundError, TenantMismatchError, UnauthenticatedError
from hotelhub.models.hotel import Hotel
from hotelhub.schemas.hotel import Hotel as HotelSchema, HotelUpdate, DashboardAccess
from hotelhub.services.authorization import DASHBOARD_SEGMENTS, Principal, Scope, authorize

router = APIRouter(prefix="/hotels", tags=["Hotel"])


def get_hotel_or_404(hotel_id: UUID, db: Session) -> Hotel:
    hotel = db.query(Hotel).filter(Hotel.id == hotel_id).first()
    if not hotel:
        raise NotFoundError("Hotel not found")
    return hotel


@router.get("/by-slug/{slug}/dashboards/{segment}", response_model=DashboardAccess)
def open_dashboard(
    slug: str,
    segment: str,
    db: Session = Depends(get_db),
    principal: Optional[Principal] = Depends(get_principal),
):
    """
    Gate for the tenant dashboard router (/<hotel-slug>/<segment>).

    Unknown hotels look the same as foreign ones to non-admins, so the
    response never reveals which hotels exist.
    """
    if principal is None:
        raise UnauthenticatedError()
    scope = DASHBOARD_SEGMENTS.get(segment)
    if scope is None:
        raise NotFoundError("Dashboard not found")

    hotel = db.query(Hotel).filter(Hotel.slug == slug).first()
    if not hotel:
        if principal.is_platform_admin:
            raise NotFoundError("Hotel not found")
        raise TenantMismatchError()

    granted = authorize(principal, hotel.id, scope)
    return DashboardAccess(
        hotel_id=hotel.id,
        hotel_slug=hotel.slug,
        hotel_name=hotel.name,
        segment=segment,
        scope=granted.value,
    )


@router.get("/{hotel_id}", response_model=HotelSchema)
def get_hotel(
    hotel_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_hotel_scope(Scope.STAFF)),
):
    return get_hotel_or_404(hotel_id, db)


@router.patch("/{hotel_id}", response_model=HotelSchema)
def update_hotel(
    hotel_id: UUID,
    data: HotelUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_hotel_scope(Scope.HOTEL_SETTINGS)),
):
    """Update the hotel profile. The slug cannot be changed."""
    hotel = get_hotel_or_404(hotel_id, db)
    updates = data.model_dump(exclude_unset=True)

    if updates.get("domain"):
        taken = db.query(Hotel.id).filter(
            Hotel.domain == updates["domain"], Hotel.id != hotel.id
        ).first()
        if taken:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Domain already in use")

    for field, value in updates.items():
        setattr(hotel, field, value)
    db.commit()
    db.refresh(hotel)
    return hotel
