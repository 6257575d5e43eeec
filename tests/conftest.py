import os
import uuid
from datetime import timedelta

# Settings are read on import, so the test environment goes in first
os.environ["DATABASE_URL"] = "sqlite:///./.pytest_unipool.db"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine, event  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from app.main import app  # noqa: E402
from app.core.config import settings  # noqa: E402
from app.core.security import createAccessToken, hashPassword  # noqa: E402
from app.db.database import Base, getDb, utcNow  # noqa: E402
from app.models.user import User  # noqa: E402
from app.models.ride import Ride  # noqa: E402

DEFAULT_PASSWORD = "password123"
CAMPUS = {"name": "FCCU, Ferozepur Road, Lahore", "lat": 31.5225, "lng": 74.3318}


@pytest.fixture
def engine(tmp_path):
    # A file database so that threads get separate connections to the same data
    engine = create_engine(
        f"sqlite:///{tmp_path / 'unipool_test.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )

    # SQLite leaves foreign keys off unless asked, PostgreSQL always enforces them
    @event.listens_for(engine, "connect")
    def enableForeignKeys(dbapiConnection, connectionRecord):
        cursor = dbapiConnection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def sessionFactory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(sessionFactory):
    session = sessionFactory()
    yield session
    session.close()


@pytest.fixture
def client(sessionFactory):
    def overrideGetDb():
        session = sessionFactory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[getDb] = overrideGetDb
    with TestClient(app) as testClient:
        yield testClient
    app.dependency_overrides.clear()


@pytest.fixture
def makeUser(db):
    counter = {"n": 0}

    def _make(name="Test Student", handle=None):
        counter["n"] += 1
        handle = handle or f"student{counter['n']}"
        user = User(
            id=uuid.uuid4(),
            email=f"{handle}@{settings.ALLOWED_EMAIL_DOMAIN}",
            password=hashPassword(DEFAULT_PASSWORD),
            name=name,
            roll_number=f"2610000{counter['n']:02d}",
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def makeRide(db):
    def _make(driver, seats=3, available=None, hoursAhead=2, pickupName="Gulberg III, Lahore"):
        pickup = {"name": pickupName, "lat": 31.52, "lng": 74.35}
        ride = Ride(
            id=uuid.uuid4(),
            driver_id=driver.id,
            pickup=pickup,
            dropoff=CAMPUS,
            pickup_name=pickupName,
            departure_time=utcNow().replace(second=0, microsecond=0) + timedelta(hours=hoursAhead),
            total_seats=seats,
            available_seats=seats if available is None else available,
            route=f"{pickupName.split(',')[0]} → FCCU",
            recurring_days=[],
        )
        db.add(ride)
        db.commit()
        db.refresh(ride)
        return ride

    return _make


@pytest.fixture
def authHeaders():
    def _headers(user):
        return {"Authorization": f"Bearer {createAccessToken(user.id, user.email)}"}

    return _headers
