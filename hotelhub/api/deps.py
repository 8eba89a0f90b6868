
import uuid
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from hotelhub.core.config import settings
from hotelhub.core.security import decode_token
from hotelhub.db.session import get_db
from hotelhub.models.user import User
from hotelhub.services.authorization import Principal, Scope, authorize

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_STR}/auth/login", auto_error=False
)


def _load_user(token: Optional[str], db: Session) -> Optional[User]:
    if not token:
        return None
    user_id = decode_token(token)
    if not user_id:
        return None
    try:
        user_uuid = uuid.UUID(user_id)
    except ValueError:
        return None
    return (
        db.query(User)
        .filter(User.id == user_uuid, User.deleted_at.is_(None))
        .first()
    )


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    user = _load_user(token, db)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_principal(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> Optional[Principal]:
    """The caller as an explicit Principal, or None when unauthenticated."""
    user = _load_user(token, db)
    return Principal.from_user(user) if user else None


def require_hotel_scope(scope: Scope):
    """
    Dependency factory for routes under /hotels/{hotel_id}: authorizes the
    caller for ``scope`` on the hotel in the path and returns the Principal.
    """

    def dependency(
        hotel_id: uuid.UUID,
        principal: Optional[Principal] = Depends(get_principal),
    ) -> Principal:
        authorize(principal, hotel_id, scope)
        return principal

    return dependency


def require_platform_admin(
    principal: Optional[Principal] = Depends(get_principal),
) -> Principal:
    authorize(principal, None, Scope.PLATFORM_ADMIN)
    return principal
