"""
Tests for request deadlines and storage error mapping.
"""
import datetime as dt
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from frontdesk.appointments.models import Appointment, AppointmentStatus
from frontdesk.appointments.repository import AppointmentRepository
from frontdesk.appointments.service import BookingService
from frontdesk.auth.models import User
from frontdesk.auth.repository import UserRepository
from frontdesk.auth.service import AuthService
from frontdesk.core.deadline import Deadline, check_deadline
from frontdesk.core.storage import is_statement_timeout, storage_errors
from frontdesk.exceptions import RequestTimeoutException, StorageException


class FakeMonotonic:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def test_deadline_counts_down():
    clock = FakeMonotonic()
    deadline = Deadline(5, clock=clock)
    assert deadline.remaining() == 5
    clock.now += 2
    assert deadline.remaining() == 3
    assert not deadline.expired
    deadline.check()


def test_expired_deadline_raises():
    clock = FakeMonotonic()
    deadline = Deadline(1, clock=clock)
    clock.now += 1
    assert deadline.expired
    assert deadline.remaining() == 0
    with pytest.raises(RequestTimeoutException):
        deadline.check()


@pytest.mark.parametrize("seconds", [None, 0, -1])
def test_no_deadline_without_positive_timeout(seconds):
    assert Deadline.after(seconds) is None


def test_check_deadline_ignores_none():
    check_deadline(None)


def test_expired_deadline_stops_login_before_any_lookup(auth_service, front_desk):
    clock = FakeMonotonic()
    deadline = Deadline(1, clock=clock)
    clock.now += 5
    with pytest.raises(RequestTimeoutException):
        auth_service.login(front_desk.email, "password123", deadline=deadline)


class SlowHasher:
    """Hasher whose hashing burns through the remaining deadline."""

    def __init__(self, inner, clock, seconds):
        self.inner = inner
        self.clock = clock
        self.seconds = seconds

    def hash(self, password):
        hashed = self.inner.hash(password)
        self.clock.now += self.seconds
        return hashed

    def verify(self, hashed_password, plain_password):
        return self.inner.verify(hashed_password, plain_password)


def test_deadline_expiring_during_registration_hash_saves_nothing(db, users, hasher, tokens):
    clock = FakeMonotonic()
    deadline = Deadline(1, clock=clock)
    service = AuthService(users, SlowHasher(hasher, clock, 5), tokens)

    with pytest.raises(RequestTimeoutException):
        service.register("late@clinic.com", "secret1", "Late", "clinician", deadline=deadline)

    assert users.find_by_email("late@clinic.com") is None
    assert db.query(User).count() == 0


def test_deadline_expiring_after_availability_check_books_nothing(db, patient, clinician, monkeypatch):
    clock = FakeMonotonic()
    deadline = Deadline(1, clock=clock)
    original_is_available = BookingService.is_available

    def slow_is_available(self, *args, **kwargs):
        available = original_is_available(self, *args, **kwargs)
        clock.now += 5
        return available

    monkeypatch.setattr(BookingService, "is_available", slow_is_available)
    booking = BookingService(AppointmentRepository(db), UserRepository(db))
    appointment = Appointment(
        patient_id=patient.id,
        doctor_id=clinician.id,
        date=dt.date(2024, 3, 1),
        time_slot="09:00",
        status=AppointmentStatus.SCHEDULED,
    )

    with pytest.raises(RequestTimeoutException):
        booking.create_appointment(appointment, deadline=deadline)

    assert db.query(Appointment).count() == 0


class FakePgError(Exception):
    pgcode = "57014"


def test_statement_timeout_is_recognised():
    error = OperationalError("SELECT 1", {}, FakePgError())
    assert is_statement_timeout(error)


def test_storage_errors_map_to_timeout_and_roll_back():
    session = MagicMock()
    with pytest.raises(RequestTimeoutException):
        with storage_errors(session, "testing"):
            raise OperationalError("SELECT 1", {}, FakePgError())
    session.rollback.assert_called_once()


def test_other_storage_errors_become_storage_exception():
    session = MagicMock()
    with pytest.raises(StorageException) as exc_info:
        with storage_errors(session, "testing"):
            raise OperationalError("SELECT 1", {}, Exception("disk I/O error"))
    assert exc_info.value.status_code == 503
    session.rollback.assert_called_once()
