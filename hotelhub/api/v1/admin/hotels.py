import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from hotelhub.db.session import get_db
from hotelhub.api.deps import require_platform_admin
from hotelhub.core.security import get_password_hash
from hotelhub.models.hotel import Hotel
from hotelhub.models.user import User, UserRole
from hotelhub.schemas.booking import HoldSweepResponse
from hotelhub.schemas.common import PaginatedResponse, paginate
from hotelhub.schemas.hotel import HotelCreate, Hotel as HotelSchema
from hotelhub.schemas.user import User as UserSchema
from hotelhub.services.authorization import Principal
from hotelhub.services.availability import expire_holds
from hotelhub.utils.slug import make_unique_slug, slug_taken

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


def _resolve_owner(db: Session, data: HotelCreate):
    """Return the user who will own the new hotel, or None to create one."""
    if data.owner_id is None:
        return None
    owner = db.query(User).filter(User.id == data.owner_id, User.deleted_at.is_(None)).first()
    if not owner:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Owner not found")
    # Only guests or owners without a hotel can take over a new one.
    if owner.role == UserRole.GUEST or (owner.role == UserRole.HOTEL_OWNER and owner.hotel_id is None):
        return owner
    raise HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="User cannot be assigned as owner of a new hotel",
    )


@router.get("/hotels", response_model=PaginatedResponse[HotelSchema])
def list_hotels(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    admin: Principal = Depends(require_platform_admin),
):
    query = db.query(Hotel).order_by(Hotel.created_at.desc())
    return paginate(query, page, limit, HotelSchema.model_validate)


@router.post("/hotels", response_model=HotelSchema, status_code=status.HTTP_201_CREATED)
def create_hotel(
    data: HotelCreate,
    db: Session = Depends(get_db),
    admin: Principal = Depends(require_platform_admin),
):
    """Onboard a hotel together with its owner account."""
    if data.owner_id is None and data.owner is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Either owner_id or owner is required",
        )

    if data.slug:
        if slug_taken(db, data.slug):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Slug already in use")
        slug = data.slug
    else:
        slug = make_unique_slug(db, data.name)

    domain = data.domain.lower() if data.domain else None
    if domain and db.query(Hotel.id).filter(Hotel.domain == domain).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Domain already in use")

    owner = _resolve_owner(db, data)
    if owner is None and db.query(User.id).filter(User.email == data.owner.email).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")

    values = data.model_dump(exclude={"slug", "owner_id", "owner", "domain"})
    hotel = Hotel(**values, slug=slug, domain=domain)
    db.add(hotel)
    db.flush()

    if owner is None:
        owner = User(
            email=data.owner.email,
            full_name=data.owner.full_name,
            phone=data.owner.phone,
            password_hash=get_password_hash(data.owner.password),
            role=UserRole.HOTEL_OWNER,
            hotel_id=hotel.id,
        )
        db.add(owner)
    else:
        owner.role = UserRole.HOTEL_OWNER
        owner.hotel_id = hotel.id
    db.flush()

    hotel.owner_id = owner.id
    db.commit()
    db.refresh(hotel)

    logger.info("Hotel %s created by %s with owner %s", hotel.slug, admin.user_id, owner.id)
    return hotel


@router.get("/users", response_model=PaginatedResponse[UserSchema])
def list_users(
    role: UserRole = Query(None),
    hotel_id: UUID = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    admin: Principal = Depends(require_platform_admin),
):
    query = db.query(User).filter(User.deleted_at.is_(None))
    if role:
        query = query.filter(User.role == role)
    if hotel_id:
        query = query.filter(User.hotel_id == hotel_id)
    return paginate(query.order_by(User.created_at.desc()), page, limit, UserSchema.model_validate)


@router.post("/holds/expire", response_model=HoldSweepResponse)
def run_hold_sweep(
    db: Session = Depends(get_db),
    admin: Principal = Depends(require_platform_admin),
):
    """Run the expired-hold sweep now instead of waiting for the background task."""
    return HoldSweepResponse(expired=expire_holds(db))
