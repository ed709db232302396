"""
Patient Service - Business logic for patient record management.
"""
from typing import List
from sqlalchemy.orm import Session, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy import or_
import logging

from ..core.storage import storage_errors
from ..exceptions import ResourceConflictException, ResourceNotFoundException
from .models import Patient
from .schemas import PatientCreate, PatientUpdate

# Set up logging
logger = logging.getLogger(__name__)

def _commit(db: Session, action: str) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(f"Patient {action} rejected: email already registered")
        raise ResourceConflictException("A patient with this email already exists")

def get_patient(db: Session, patient_id: int) -> Patient:
    """
    Get a patient by ID.

    Raises:
        ResourceNotFoundException: If the patient does not exist
    """
    with storage_errors(db, "loading patient"):
        patient = db.query(Patient).filter(Patient.id == patient_id).first()
    if not patient:
        raise ResourceNotFoundException("Patient not found")
    return patient

def list_patients_query(db: Session) -> Query:
    """Newest patients first."""
    return db.query(Patient).order_by(Patient.created_at.desc(), Patient.id.desc())

def search_patients(db: Session, term: str) -> List[Patient]:
    """
    Case-insensitive substring search over name, email and phone.

    Args:
        db: Database session
        term: Text to look for

    Returns:
        List[Patient]: Matching patients ordered by last name, first name
    """
    pattern = f"%{term}%"
    with storage_errors(db, "searching patients"):
        return (
            db.query(Patient)
            .filter(
                or_(
                    Patient.first_name.ilike(pattern),
                    Patient.last_name.ilike(pattern),
                    Patient.email.ilike(pattern),
                    Patient.phone.ilike(pattern),
                )
            )
            .order_by(Patient.last_name, Patient.first_name)
            .all()
        )

def create_patient(db: Session, patient_data: PatientCreate, current_user_id: int) -> Patient:
    """
    Register a new patient.

    Args:
        db: Database session
        patient_data: Validated patient fields
        current_user_id: Front-desk user creating the record

    Returns:
        Patient: Stored patient
    """
    patient = Patient(
        **patient_data.model_dump(),
        registered_by=current_user_id,
        last_updated_by=current_user_id,
    )
    with storage_errors(db, "creating patient"):
        db.add(patient)
        _commit(db, "creation")
        db.refresh(patient)
    logger.info(f"Patient {patient.id} registered by user {current_user_id}")
    return patient

def update_patient(
    db: Session,
    patient_id: int,
    patient_data: PatientUpdate,
    current_user_id: int
) -> Patient:
    """
    Apply a partial update to a patient.

    Raises:
        ResourceNotFoundException: If the patient does not exist
    """
    patient = get_patient(db, patient_id)

    update_data = patient_data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(patient, field, value)
    patient.last_updated_by = current_user_id

    with storage_errors(db, "updating patient"):
        _commit(db, "update")
        db.refresh(patient)
    logger.info(f"Patient {patient_id} updated by user {current_user_id}")
    return patient

def delete_patient(db: Session, patient_id: int) -> None:
    """
    Delete a patient together with their appointments.

    Raises:
        ResourceNotFoundException: If the patient does not exist
    """
    patient = get_patient(db, patient_id)
    with storage_errors(db, "deleting patient"):
        db.delete(patient)
        db.commit()
    logger.info(f"Patient {patient_id} deleted")
