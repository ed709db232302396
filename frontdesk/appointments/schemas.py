"""
Appointment Schemas - Pydantic models for booking requests and responses.
"""
import datetime as dt
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from .models import AppointmentStatus

class AppointmentCreate(BaseModel):
    """
    Appointment Creation Schema

    Fields:
    - patient_id: Patient being booked
    - doctor_id: Clinician's user id
    - date: Calendar date (YYYY-MM-DD)
    - time_slot: Slot label, e.g. "09:00"
    - notes: Optional booking notes
    """
    patient_id: int
    doctor_id: int
    date: dt.date
    time_slot: str = Field(..., min_length=1, max_length=10)
    notes: Optional[str] = None

class AppointmentStatusUpdate(BaseModel):
    status: AppointmentStatus

class AppointmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    patient_id: int
    doctor_id: int
    date: dt.date
    time_slot: str
    status: AppointmentStatus
    notes: Optional[str] = None
    created_by: Optional[int] = None
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

class AvailabilityResponse(BaseModel):
    doctor_id: int
    date: dt.date
    time_slot: str
    available: bool
