"""
Pytest configuration and shared fixtures.
"""
import os

# Must be set before hotelhub.core.config is imported.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("HOLD_SWEEP_ENABLED", "false")
os.environ.setdefault("SECRET_KEY", "test-secret")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hotelhub.db.base import Base
from hotelhub.db.session import get_db
from hotelhub.core.security import create_access_token
from hotelhub.models import Hotel, Room, User, UserRole
from hotelhub.main import app


@pytest.fixture(scope="function")
def db_engine():
    """In-memory database engine."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine):
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ============== Tenants ==============

def _make_hotel(db, name: str, slug: str, **kwargs) -> Hotel:
    hotel = Hotel(name=name, slug=slug, **kwargs)
    db.add(hotel)
    db.commit()
    db.refresh(hotel)
    return hotel


def _make_room(db, hotel: Hotel, number: str, type: str = "deluxe", price: str = "100.00") -> Room:
    room = Room(hotel_id=hotel.id, number=number, type=type, price=Decimal(price))
    db.add(room)
    db.commit()
    db.refresh(room)
    return room


@pytest.fixture
def hotel_a(db_session):
    return _make_hotel(db_session, "Hotel Alpha", "alpha", domain="alpha-hotel.com")


@pytest.fixture
def hotel_b(db_session):
    return _make_hotel(db_session, "Hotel Bravo", "bravo")


@pytest.fixture
def room(db_session, hotel_a):
    return _make_room(db_session, hotel_a, "101")


@pytest.fixture
def other_room(db_session, hotel_a):
    return _make_room(db_session, hotel_a, "102")


@pytest.fixture
def suite(db_session, hotel_a):
    return _make_room(db_session, hotel_a, "301", type="suite", price="250.00")


@pytest.fixture
def room_b(db_session, hotel_b):
    return _make_room(db_session, hotel_b, "101")


# ============== Users & auth ==============

@pytest.fixture
def make_user(db_session):
    counter = {"n": 0}

    def factory(role: UserRole, hotel=None, **kwargs) -> User:
        counter["n"] += 1
        user = User(
            email=kwargs.pop("email", f"{role.value.lower()}{counter['n']}@example.com"),
            full_name=kwargs.pop("full_name", role.value.title()),
            role=role,
            hotel_id=hotel.id if hotel is not None else None,
            **kwargs,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return factory


@pytest.fixture
def auth_headers():
    """Bearer headers for a user."""
    def build(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token(subject=str(user.id))}"}

    return build


@pytest.fixture
def owner_a(make_user, hotel_a, db_session):
    owner = make_user(UserRole.HOTEL_OWNER, hotel_a)
    hotel_a.owner_id = owner.id
    db_session.commit()
    return owner


@pytest.fixture
def super_admin(make_user):
    return make_user(UserRole.SUPER_ADMIN)


@pytest.fixture
def front_desk_a(make_user, hotel_a):
    return make_user(UserRole.FRONT_DESK, hotel_a)


@pytest.fixture
def housekeeping_a(make_user, hotel_a):
    return make_user(UserRole.HOUSEKEEPING, hotel_a)


@pytest.fixture
def front_desk_b(make_user, hotel_b):
    return make_user(UserRole.FRONT_DESK, hotel_b)
