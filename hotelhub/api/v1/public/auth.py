import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from hotelhub.db.session import get_db
from hotelhub.core.security import (
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
    get_password_hash,
    verify_password,
)

from hotelhub.api.deps import get_current_user
from hotelhub.models.user import User, UserRole
from hotelhub.schemas.user import UserCreate, Token, TokenRefresh, User as UserSchema

router = APIRouter(prefix="/auth", tags=["auth"])

_INVALID_CREDENTIALS = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Incorrect email or password",
    headers={"WWW-Authenticate": "Bearer"},
)


def _issue_tokens(user: User) -> Token:
    return Token(
        access_token=create_access_token(subject=str(user.id)),
        refresh_token=create_refresh_token(subject=str(user.id)),
        token_type="bearer",
        user=UserSchema.model_validate(user),
    )


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register(body: UserCreate, db: Session = Depends(get_db)):
    """Self-service sign-up creates guests only; hotel staff are added by their hotel."""
    if db.query(User.id).filter(User.email == body.email).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )
    guest = User(
        email=body.email,
        full_name=body.full_name,
        phone=body.phone,
        password_hash=get_password_hash(body.password),
        role=UserRole.GUEST,
    )
    db.add(guest)
    db.commit()
    db.refresh(guest)
    return _issue_tokens(guest)


@router.post("/login", response_model=Token)
def login(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    """Email + password (or staff PIN) login."""
    user = db.query(User).filter(User.email == form_data.username).first()
    if user is None or not verify_password(form_data.password, user.password_hash):
        raise _INVALID_CREDENTIALS
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive",
        )
    return _issue_tokens(user)


@router.post("/refresh", response_model=Token)
def refresh(body: TokenRefresh, db: Session = Depends(get_db)):
    """Exchange a refresh token for a new token pair."""
    subject = decode_refresh_token(body.refresh_token)
    user = None
    if subject:
        try:
            user = db.query(User).filter(
                User.id == uuid.UUID(subject),
                User.deleted_at.is_(None),
            ).first()
        except ValueError:
            user = None
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _issue_tokens(user)


@router.post("/logout", status_code=status.HTTP_200_OK)
def logout(current_user: User = Depends(get_current_user)):
    """JWTs are stateless; the client drops both tokens."""
    return {"message": "Successfully logged out"}
