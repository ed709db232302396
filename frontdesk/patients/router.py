"""
Patient Router - API endpoints for patient records.

Any signed-in user may read; only front-desk staff create and delete;
front-desk staff and clinicians may update.
"""
from typing import List
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..auth.dependencies import get_current_claims, require_front_desk, require_front_desk_or_clinician
from ..core.pagination import PageParams, PageResponse, paginate
from ..core.tokens import TokenClaims
from ..database import get_db
from .schemas import PatientCreate, PatientResponse, PatientUpdate
from .service import (
    create_patient,
    delete_patient,
    get_patient,
    list_patients_query,
    search_patients,
    update_patient,
)

router = APIRouter()

@router.get("", response_model=PageResponse[PatientResponse])
def list_patients(
    page_params: PageParams = Depends(),
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims)
):
    """Get a paginated list of patients, newest first."""
    return paginate(list_patients_query(db), page_params, PatientResponse)

@router.get("/search", response_model=List[PatientResponse])
def search_patients_route(
    q: str = Query(..., min_length=1, description="Name, email or phone fragment"),
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims)
):
    return search_patients(db, q)

@router.get("/{patient_id}", response_model=PatientResponse)
def get_patient_route(
    patient_id: int,
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims)
):
    return get_patient(db, patient_id)

@router.post("", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
def create_patient_route(
    patient_data: PatientCreate,
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(require_front_desk)
):
    """Register a new patient (front-desk only)."""
    return create_patient(db, patient_data, claims.user_id)

@router.put("/{patient_id}", response_model=PatientResponse)
def update_patient_route(
    patient_id: int,
    patient_data: PatientUpdate,
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(require_front_desk_or_clinician)
):
    """Update a patient record (front-desk or clinician)."""
    return update_patient(db, patient_id, patient_data, claims.user_id)

@router.delete("/{patient_id}", status_code=status.HTTP_200_OK)
def delete_patient_route(
    patient_id: int,
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(require_front_desk)
):
    """Delete a patient record (front-desk only)."""
    delete_patient(db, patient_id)
    return {"message": "Patient deleted successfully"}
