"""
Pytest Fixtures für die Tischreservierung.

Jeder Test bekommt eine frische SQLite-Datenbank. Die App baut
ihren AppState beim Start mit der Test-Session-Factory.
"""
from datetime import date, datetime, timezone, timedelta
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.main import app
from app.database import Base
from app.models import User, UserRole, Restaurant
from app.models.booking import BookingStatus
from app.schemas.booking import BookingRead
from app.utils.security import hash_password


# ============ DATENBANK SETUP ============

# Datei statt In-Memory: AppState lädt parallel aus mehreren Threads
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///./test_reservations.db"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# ============ BASIS FIXTURES ============

@pytest.fixture(scope="function")
def db():
    """Frische Datenbank für jeden Test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """
    TestClient mit Test-Datenbank. Der Startup lädt den AppState,
    Daten die ein Test vorher in die DB schreibt sind also schon da.
    """
    app.state.session_factory = TestingSessionLocal
    with TestClient(app) as test_client:
        yield test_client
    del app.state.session_factory


# ============ STAMMDATEN FIXTURES ============

@pytest.fixture
def restaurant(db):
    """Restaurant mit 50 Plätzen"""
    r = Restaurant(name="Zur Linde", address="Hauptstraße 1", capacity=50)
    db.add(r)
    db.commit()
    db.refresh(r)
    return r


@pytest.fixture
def small_restaurant(db):
    """Restaurant mit nur 4 Plätzen"""
    r = Restaurant(name="Kleines Bistro", address="Hafenweg 3", capacity=4)
    db.add(r)
    db.commit()
    db.refresh(r)
    return r


@pytest.fixture
def owner_user(db, restaurant):
    """Betreiber von 'Zur Linde'"""
    user = User(
        id=str(uuid4()),
        name="Wirtin Wilma",
        email="owner@test.com",
        password_hash=hash_password("ownerpass123"),
        role=UserRole.OWNER,
        restaurant_id=restaurant.id,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def guest_user(db):
    user = User(
        id=str(uuid4()),
        name="Gast Gustav",
        email="guest@test.com",
        password_hash=hash_password("guestpass123"),
        role=UserRole.GUEST,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


# ============ HELPER FUNKTIONEN ============

def days_from_today(days: int) -> str:
    return (date.today() + timedelta(days=days)).isoformat()


def make_booking(**overrides) -> BookingRead:
    """BookingRead für Unit-Tests ohne Datenbank"""
    data = {
        "id": str(uuid4()),
        "restaurant_id": 1,
        "user_id": None,
        "guest_name": "Test Gast",
        "guest_phone": "0151 1234567",
        "date": "2024-06-01",
        "time": "18:00",
        "party_size": 2,
        "status": BookingStatus.CONFIRMED,
        "confirmation_number": "BKTEST0001",
        "created_at": datetime.now(timezone.utc),
    }
    data.update(overrides)
    return BookingRead(**data)


def login(client, email: str, password: str):
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, f"Login failed: {response.json()}"
    return response.json()


def scheduled_booking_payload(restaurant_id: int, **overrides) -> dict:
    payload = {
        "restaurant_id": restaurant_id,
        "mode": "scheduled",
        "guest_name": "Max Mustermann",
        "guest_phone": "0151 1234567",
        "date": days_from_today(3),
        "time": "19:00",
        "party_size": 4,
    }
    payload.update(overrides)
    return payload
