"""
Appointment Router - API endpoints for booking and managing appointments.

Booking and deletion are front-desk only; both roles may read and change
an appointment's status.
"""
import datetime as dt
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..auth.dependencies import (
    get_current_claims,
    get_request_deadline,
    require_front_desk,
    require_front_desk_or_clinician,
)
from ..auth.repository import UserRepository
from ..core.deadline import Deadline
from ..core.pagination import PageParams, PageResponse, paginate
from ..core.tokens import TokenClaims
from ..database import get_db
from .repository import AppointmentRepository
from .schemas import (
    AppointmentCreate,
    AppointmentResponse,
    AppointmentStatusUpdate,
    AvailabilityResponse,
)
from .service import BookingService

router = APIRouter()


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    return BookingService(AppointmentRepository(db), UserRepository(db))


@router.get("", response_model=PageResponse[AppointmentResponse])
def list_appointments(
    page_params: PageParams = Depends(),
    booking: BookingService = Depends(get_booking_service),
    claims: TokenClaims = Depends(get_current_claims)
):
    """Paginated appointments, most recent date first."""
    return paginate(booking.list_query(), page_params, AppointmentResponse)

@router.get("/date", response_model=List[AppointmentResponse])
def appointments_by_date(
    date: dt.date = Query(..., description="Calendar date (YYYY-MM-DD)"),
    booking: BookingService = Depends(get_booking_service),
    claims: TokenClaims = Depends(get_current_claims)
):
    """Day view ordered by slot, cancelled bookings included."""
    return booking.appointments_on(date)

@router.get("/availability", response_model=AvailabilityResponse)
def check_availability(
    doctor_id: int = Query(...),
    date: dt.date = Query(...),
    time_slot: str = Query(..., min_length=1, max_length=10),
    booking: BookingService = Depends(get_booking_service),
    claims: TokenClaims = Depends(get_current_claims),
    deadline: Optional[Deadline] = Depends(get_request_deadline),
):
    available = booking.is_available(doctor_id, date, time_slot, deadline)
    return AvailabilityResponse(doctor_id=doctor_id, date=date, time_slot=time_slot, available=available)

@router.get("/patient/{patient_id}", response_model=List[AppointmentResponse])
def appointments_for_patient(
    patient_id: int,
    booking: BookingService = Depends(get_booking_service),
    claims: TokenClaims = Depends(get_current_claims)
):
    return booking.appointments_for_patient(patient_id)

@router.get("/doctor/{doctor_id}", response_model=List[AppointmentResponse])
def appointments_for_doctor(
    doctor_id: int,
    booking: BookingService = Depends(get_booking_service),
    claims: TokenClaims = Depends(get_current_claims)
):
    return booking.appointments_for_doctor(doctor_id)

@router.get("/{appointment_id}", response_model=AppointmentResponse)
def get_appointment_route(
    appointment_id: int,
    booking: BookingService = Depends(get_booking_service),
    claims: TokenClaims = Depends(get_current_claims)
):
    return booking.get_appointment(appointment_id)

@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
def create_appointment_route(
    appointment_data: AppointmentCreate,
    booking: BookingService = Depends(get_booking_service),
    claims: TokenClaims = Depends(require_front_desk),
    deadline: Optional[Deadline] = Depends(get_request_deadline),
):
    """
    Book an appointment (front-desk only).

    Returns 409 when the doctor already has a non-cancelled booking for the
    same date and slot, including when a concurrent request took it first.
    """
    return booking.book(appointment_data, created_by=claims.user_id, deadline=deadline)

@router.patch("/{appointment_id}/status", response_model=AppointmentResponse)
def update_appointment_status(
    appointment_id: int,
    status_data: AppointmentStatusUpdate,
    booking: BookingService = Depends(get_booking_service),
    claims: TokenClaims = Depends(require_front_desk_or_clinician)
):
    return booking.update_status(appointment_id, status_data.status)

@router.delete("/{appointment_id}", status_code=status.HTTP_200_OK)
def delete_appointment_route(
    appointment_id: int,
    booking: BookingService = Depends(get_booking_service),
    claims: TokenClaims = Depends(require_front_desk)
):
    """Delete an appointment (front-desk only)."""
    booking.delete_appointment(appointment_id)
    return {"message": "Appointment deleted successfully"}
