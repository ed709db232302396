"""
Booking Service - conflict checking and appointment lifecycle.

``is_available`` is the read-only pre-check used to answer availability
questions and to reject obvious conflicts early. The check-then-insert pair
is not relied on for correctness: the partial unique index on
(doctor_id, date, time_slot) over non-cancelled rows makes the insert itself
fail when a concurrent booking won the slot, and that failure surfaces as
``SlotUnavailableException`` just like a failed pre-check.
"""
import datetime as dt
import logging
from typing import List, Optional

from sqlalchemy.orm import Query

from ..auth.models import UserRole
from ..auth.repository import UserRepository
from ..core.deadline import Deadline
from ..exceptions import ResourceNotFoundException
from .exceptions import InvalidDoctorException, SlotUnavailableException
from .models import Appointment, AppointmentStatus
from .repository import AppointmentRepository, active_appointments
from .schemas import AppointmentCreate

# Set up logging
logger = logging.getLogger(__name__)


class BookingService:
    def __init__(self, appointments: AppointmentRepository, users: UserRepository):
        self.appointments = appointments
        self.users = users

    def is_available(
        self,
        doctor_id: int,
        day: dt.date,
        time_slot: str,
        deadline: Optional[Deadline] = None
    ) -> bool:
        """
        True unless the doctor already holds a non-cancelled booking for the slot.

        Slot labels are compared by exact equality; "09:00" and "9:00" are
        different slots. Storage failures propagate instead of reading as
        "unavailable".
        """
        booked = active_appointments(self.appointments.find_by_date(day, deadline))
        return not any(
            a.doctor_id == doctor_id and a.time_slot == time_slot
            for a in booked
        )

    def create_appointment(self, appointment: Appointment, deadline: Optional[Deadline] = None) -> Appointment:
        """
        Persist a booking unless its slot is taken.

        Raises:
            SlotUnavailableException: If the pre-check or the unique index finds a conflict
        """
        if not self.is_available(appointment.doctor_id, appointment.date, appointment.time_slot, deadline):
            logger.info(
                f"Booking refused: doctor {appointment.doctor_id} busy on "
                f"{appointment.date} at {appointment.time_slot}"
            )
            raise SlotUnavailableException()
        created = self.appointments.insert(appointment, deadline)
        logger.info(
            f"Appointment {created.id} booked for doctor {created.doctor_id} "
            f"on {created.date} at {created.time_slot}"
        )
        return created

    def book(
        self,
        data: AppointmentCreate,
        created_by: int,
        deadline: Optional[Deadline] = None
    ) -> Appointment:
        """
        Validate the participants and create a scheduled booking.

        Raises:
            ResourceNotFoundException: If the patient does not exist
            InvalidDoctorException: If the doctor is not an active clinician
            SlotUnavailableException: If the slot is taken
        """
        if not self.appointments.patient_exists(data.patient_id, deadline):
            raise ResourceNotFoundException("Patient not found")

        doctor = self.users.find_by_id(data.doctor_id, deadline)
        if not doctor or doctor.role != UserRole.CLINICIAN or not doctor.is_active:
            raise InvalidDoctorException()

        appointment = Appointment(
            patient_id=data.patient_id,
            doctor_id=data.doctor_id,
            date=data.date,
            time_slot=data.time_slot,
            notes=data.notes,
            status=AppointmentStatus.SCHEDULED,
            created_by=created_by,
        )
        return self.create_appointment(appointment, deadline)

    def get_appointment(self, appointment_id: int) -> Appointment:
        appointment = self.appointments.find_by_id(appointment_id)
        if not appointment:
            raise ResourceNotFoundException("Appointment not found")
        return appointment

    def list_query(self) -> Query:
        return self.appointments.list_query()

    def appointments_on(self, day: dt.date) -> List[Appointment]:
        return self.appointments.find_by_date(day)

    def appointments_for_patient(self, patient_id: int) -> List[Appointment]:
        return self.appointments.find_by_patient(patient_id)

    def appointments_for_doctor(self, doctor_id: int) -> List[Appointment]:
        return self.appointments.find_by_doctor(doctor_id)

    def update_status(self, appointment_id: int, new_status: AppointmentStatus) -> Appointment:
        """
        Move a booking to a new status.

        Re-activating a cancelled booking needs its slot to be free again.

        Raises:
            ResourceNotFoundException: If the appointment does not exist
            SlotUnavailableException: If re-activation collides with another booking
        """
        appointment = self.get_appointment(appointment_id)
        reactivating = appointment.is_cancelled and new_status != AppointmentStatus.CANCELLED
        if reactivating and not self.is_available(
            appointment.doctor_id, appointment.date, appointment.time_slot
        ):
            raise SlotUnavailableException()

        appointment.update_status(new_status)
        updated = self.appointments.save(appointment)
        logger.info(f"Appointment {appointment_id} status changed to {new_status.value}")
        return updated

    def delete_appointment(self, appointment_id: int) -> None:
        appointment = self.get_appointment(appointment_id)
        self.appointments.delete(appointment)
        logger.info(f"Appointment {appointment_id} deleted")
