"""
Patient Schemas - Pydantic models for patient data validation and serialization.
"""
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field

class PatientBase(BaseModel):
    """Fields shared by create requests and responses."""
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: str = Field(..., min_length=1, max_length=50)
    date_of_birth: date
    gender: str = Field(..., min_length=1, max_length=20)
    address: Optional[str] = None
    medical_history: Optional[str] = None
    current_medication: Optional[str] = None
    allergies: Optional[str] = None
    emergency_contact: Optional[str] = None
    blood_group: Optional[str] = Field(None, max_length=10)
    insurance_number: Optional[str] = Field(None, max_length=50)

class PatientCreate(PatientBase):
    pass

class PatientUpdate(BaseModel):
    """
    Patient Update Schema - Partial update

    Only fields present in the request body are changed.
    """
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=1, max_length=50)
    date_of_birth: Optional[date] = None
    gender: Optional[str] = Field(None, min_length=1, max_length=20)
    address: Optional[str] = None
    medical_history: Optional[str] = None
    current_medication: Optional[str] = None
    allergies: Optional[str] = None
    emergency_contact: Optional[str] = None
    blood_group: Optional[str] = Field(None, max_length=10)
    insurance_number: Optional[str] = Field(None, max_length=50)

class PatientResponse(PatientBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    registered_by: Optional[int] = None
    last_updated_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
