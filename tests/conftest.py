# Imports for testing tools
import datetime
import os

# Settings are read at import time, so the test environment goes first
os.environ["DATABASE_URL"] = "sqlite:///./test_stayfinder.db"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ALGORITHM", "HS256")

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Import your application code
from stayfinder.main import app
from stayfinder.config import settings
from stayfinder.database import Base, get_db
from stayfinder import models

# --- Test Database Setup ---
SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"]

engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

BASE_TIME = datetime.datetime(2024, 1, 1, 12, 0, 0)


# --- Database Management Fixtures ---
@pytest.fixture(scope="session", autouse=True)
def setup_db():
    """Creates and drops the test database tables."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Provides a clean database session for each test."""
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)
    yield session
    session.close()
    transaction.rollback()
    connection.close()


# --- Data Helpers ---
def create_test_token(user_id: str) -> str:
    """Creates a bearer token for the given user."""
    token = jwt.encode({"sub": user_id}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return f"Bearer {token}"


@pytest.fixture
def make_user(db_session):
    def _make_user(name: str = "host", email: str = None) -> models.User:
        user = models.User(name=name, email=email or f"{name}@example.com")
        db_session.add(user)
        db_session.commit()
        return user
    return _make_user


@pytest.fixture
def make_listing(db_session):
    """
    Inserts a listing. `minutes` offsets created_at from BASE_TIME so tests
    control the newest-first order.
    """
    def _make_listing(owner: models.User, minutes: int = 0, **overrides) -> models.Listing:
        values = {
            "title": "Cabin",
            "description": "A quiet cabin",
            "image_src": "https://img.example.com/cabin.png",
            "category": "Countryside",
            "room_count": 2,
            "bathroom_count": 1,
            "guest_count": 4,
            "country": "Portugal",
            "region": "Europe",
            "latlng": [38.7, -9.1],
            "price": 120,
            "user_id": owner.id,
            "created_at": BASE_TIME + datetime.timedelta(minutes=minutes),
        }
        values.update(overrides)
        listing = models.Listing(**values)
        db_session.add(listing)
        db_session.commit()
        return listing
    return _make_listing


@pytest.fixture
def make_reservation(db_session):
    def _make_reservation(
            listing: models.Listing,
            guest: models.User,
            start_date: datetime.date,
            end_date: datetime.date,
            minutes: int = 0,
    ) -> models.Reservation:
        reservation = models.Reservation(
            listing_id=listing.id,
            user_id=guest.id,
            start_date=start_date,
            end_date=end_date,
            total_price=500,
            created_at=BASE_TIME + datetime.timedelta(minutes=minutes),
        )
        db_session.add(reservation)
        db_session.commit()
        return reservation
    return _make_reservation


@pytest.fixture
def small_batch(mocker):
    """Shrinks the page size so pagination is easy to exercise."""
    mocker.patch.object(settings, "LISTINGS_BATCH", 3)
    return 3


# --- API Test Client Fixture ---
@pytest.fixture(scope="function")
def client(db_session):
    """Provides a TestClient bound to the test session."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
