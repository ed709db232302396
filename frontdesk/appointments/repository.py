"""
Appointment repository - persistence of bookings.
"""
import datetime as dt
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from ..core.deadline import Deadline
from ..core.storage import apply_deadline, storage_errors
from ..exceptions import StorageException
from ..patients.models import Patient
from .exceptions import SlotUnavailableException
from .models import Appointment, AppointmentStatus

# Set up logging
logger = logging.getLogger(__name__)


def _is_slot_conflict(error: IntegrityError) -> bool:
    # SQLite reports "UNIQUE constraint failed", PostgreSQL names the index
    message = str(error.orig).lower()
    return "unique" in message or "uq_appointments" in message


class AppointmentRepository:
    """Reads and writes appointments."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_date(self, day: dt.date, deadline: Optional[Deadline] = None) -> List[Appointment]:
        """
        All appointments on a calendar date, cancelled ones included.

        Ordered by slot label so callers get a stable day view.
        """
        with storage_errors(self.db, "listing appointments by date"):
            apply_deadline(self.db, deadline)
            return (
                self.db.query(Appointment)
                .filter(Appointment.date == day)
                .order_by(Appointment.time_slot.asc(), Appointment.id.asc())
                .all()
            )

    def find_by_id(self, appointment_id: int) -> Optional[Appointment]:
        with storage_errors(self.db, "loading appointment"):
            return self.db.query(Appointment).filter(Appointment.id == appointment_id).first()

    def list_query(self) -> Query:
        """Most recent date first, later slots first within a date."""
        return self.db.query(Appointment).order_by(
            Appointment.date.desc(), Appointment.time_slot.desc(), Appointment.id.desc()
        )

    def find_by_patient(self, patient_id: int) -> List[Appointment]:
        with storage_errors(self.db, "listing appointments by patient"):
            return self.list_query().filter(Appointment.patient_id == patient_id).all()

    def find_by_doctor(self, doctor_id: int) -> List[Appointment]:
        with storage_errors(self.db, "listing appointments by doctor"):
            return self.list_query().filter(Appointment.doctor_id == doctor_id).all()

    def patient_exists(self, patient_id: int, deadline: Optional[Deadline] = None) -> bool:
        with storage_errors(self.db, "checking patient"):
            apply_deadline(self.db, deadline)
            return self.db.query(Patient.id).filter(Patient.id == patient_id).first() is not None

    def insert(self, appointment: Appointment, deadline: Optional[Deadline] = None) -> Appointment:
        """
        Insert a booking and commit.

        Raises:
            SlotUnavailableException: If the active-slot unique index rejects the row
        """
        with storage_errors(self.db, "creating appointment"):
            apply_deadline(self.db, deadline)
            self.db.add(appointment)
            self._commit(appointment)
            self.db.refresh(appointment)
            return appointment

    def save(self, appointment: Appointment) -> Appointment:
        """
        Commit changes to an existing booking.

        Raises:
            SlotUnavailableException: If re-activating the booking collides with another
        """
        with storage_errors(self.db, "updating appointment"):
            self._commit(appointment)
            self.db.refresh(appointment)
            return appointment

    def delete(self, appointment: Appointment) -> None:
        with storage_errors(self.db, "deleting appointment"):
            self.db.delete(appointment)
            self.db.commit()

    def _commit(self, appointment: Appointment) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if _is_slot_conflict(e):
                logger.warning(
                    f"Slot {appointment.date} {appointment.time_slot} already booked "
                    f"for doctor {appointment.doctor_id}"
                )
                raise SlotUnavailableException()
            logger.error(f"Appointment rejected by constraint: {str(e.orig)}")
            raise StorageException()


def active_appointments(appointments: List[Appointment]) -> List[Appointment]:
    return [a for a in appointments if a.status != AppointmentStatus.CANCELLED]
