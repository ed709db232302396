"""
Appointment Model - Stores appointment bookings.

A booking ties a patient to a clinician on a calendar date and an opaque
time-slot label. Among appointments that are not cancelled, a doctor holds at
most one booking per (date, slot); the partial unique index below enforces
that in the database so concurrent bookings cannot both succeed.
"""
from sqlalchemy import Column, Integer, String, Date, DateTime, Text, ForeignKey, Enum, Index, func, text
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
import enum
from ..database import Base
from ..auth.models import enum_values

class AppointmentStatus(str, enum.Enum):
    """Enum for appointment status"""
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

ACTIVE_SLOT_INDEX = "uq_appointments_doctor_date_slot_active"
ACTIVE_SLOT_PREDICATE = text("status != 'cancelled'")

class Appointment(Base):
    """
    Appointment Model - Stores appointment information

    Fields:
    - id: Primary key for appointment
    - patient_id: Foreign key to Patient model
    - doctor_id: Foreign key to the clinician's User row
    - date: Calendar date of the appointment
    - time_slot: Slot label within the date (compared by equality only)
    - status: Current status of the appointment
    - notes: Additional notes about the appointment
    - created_by: Front-desk user who booked it
    - created_at: When the appointment was created
    - updated_at: When the appointment was last updated
    """
    __tablename__ = "appointments"
    __table_args__ = (
        Index(
            ACTIVE_SLOT_INDEX,
            "doctor_id",
            "date",
            "time_slot",
            unique=True,
            sqlite_where=ACTIVE_SLOT_PREDICATE,
            postgresql_where=ACTIVE_SLOT_PREDICATE,
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=False, index=True)
    doctor_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    time_slot = Column(String(10), nullable=False)
    status = Column(
        Enum(AppointmentStatus, name="appointment_status", values_callable=enum_values),
        nullable=False,
        default=AppointmentStatus.SCHEDULED,
    )
    notes = Column(Text, nullable=True)
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    patient = relationship("Patient", back_populates="appointments")

    def __repr__(self):
        """String representation of the Appointment model"""
        return (
            f"<Appointment(id={self.id}, doctor_id={self.doctor_id}, patient_id={self.patient_id}, "
            f"date='{self.date}', time_slot='{self.time_slot}')>"
        )

    @property
    def is_cancelled(self) -> bool:
        return self.status == AppointmentStatus.CANCELLED

    def update_status(self, status: AppointmentStatus) -> None:
        """
        Update appointment status

        Args:
            status: New appointment status
        """
        self.status = status
        self.updated_at = datetime.now(timezone.utc)
