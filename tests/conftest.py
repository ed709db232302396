"""
Test configuration for the front-desk portal backend.
"""
import os

# Settings are read at import time, so the environment must be ready first
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import datetime as dt

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from frontdesk.appointments.models import Appointment, AppointmentStatus
from frontdesk.auth.dependencies import get_password_hasher
from frontdesk.auth.models import User, UserRole
from frontdesk.auth.repository import UserRepository
from frontdesk.auth.service import AuthService
from frontdesk.core.security import PasswordHasher
from frontdesk.core.tokens import TokenService
from frontdesk.database import Base, get_db
from frontdesk.main import app
from frontdesk.patients.models import Patient

TEST_SECRET_KEY = "test-secret-key"
DEFAULT_PASSWORD = "password123"

# Create test database engine
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session factory
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Lowest work factor bcrypt accepts keeps the suite fast
test_hasher = PasswordHasher(rounds=4)


@pytest.fixture(scope="function")
def db():
    """
    Create a fresh database for each test.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def hasher():
    return test_hasher


@pytest.fixture
def tokens():
    return TokenService(TEST_SECRET_KEY)


@pytest.fixture
def users(db):
    return UserRepository(db)


@pytest.fixture
def auth_service(users, hasher, tokens):
    return AuthService(users, hasher, tokens)


@pytest.fixture(scope="function")
def client(db):
    """
    Create a test client with a test database session.
    """
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_password_hasher] = lambda: test_hasher

    with TestClient(app) as client:
        yield client

    app.dependency_overrides = {}


@pytest.fixture
def make_user(db, hasher):
    """Factory that stores a user directly, bypassing the API."""
    def _make_user(
        email,
        password=DEFAULT_PASSWORD,
        role=UserRole.FRONT_DESK,
        name="Test User",
        is_active=True,
    ):
        user = User(
            email=email,
            password_hash=hasher.hash(password),
            name=name,
            role=role,
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture
def front_desk(make_user):
    return make_user("desk@clinic.com", name="Front Desk")


@pytest.fixture
def clinician(make_user):
    return make_user("doctor@clinic.com", role=UserRole.CLINICIAN, name="Dr. Who")


@pytest.fixture
def make_patient(db):
    def _make_patient(first_name="Jane", last_name="Doe", email=None, phone="555-0100"):
        patient = Patient(
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone=phone,
            date_of_birth=dt.date(1990, 5, 17),
            gender="female",
        )
        db.add(patient)
        db.commit()
        db.refresh(patient)
        return patient
    return _make_patient


@pytest.fixture
def patient(make_patient):
    return make_patient()


@pytest.fixture
def make_appointment(db):
    def _make_appointment(patient_id, doctor_id, date, time_slot, status=AppointmentStatus.SCHEDULED):
        appointment = Appointment(
            patient_id=patient_id,
            doctor_id=doctor_id,
            date=date,
            time_slot=time_slot,
            status=status,
        )
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment
    return _make_appointment


@pytest.fixture
def login(client):
    """Log in through the API and return bearer headers."""
    def _login(email, password=DEFAULT_PASSWORD):
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}
    return _login


@pytest.fixture
def front_desk_headers(front_desk, login):
    return login(front_desk.email)


@pytest.fixture
def clinician_headers(clinician, login):
    return login(clinician.email)
