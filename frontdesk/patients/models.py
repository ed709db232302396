"""
Patient Model - Stores patient demographics and clinical summary.
"""
from sqlalchemy import Column, Integer, String, Date, DateTime, Text, ForeignKey, func
from sqlalchemy.orm import relationship
from ..database import Base

class Patient(Base):
    """
    Patient Model - Stores patient information

    Fields:
    - id: Primary key for patient
    - first_name / last_name: Patient's name
    - email: Contact email (unique when present)
    - phone: Contact phone number
    - date_of_birth: Calendar date of birth
    - gender, address, emergency_contact: Demographics
    - medical_history, current_medication, allergies, blood_group: Clinical summary
    - insurance_number: Insurance policy reference
    - registered_by: User who created the record
    - last_updated_by: User who last changed the record
    - created_at / updated_at: Timestamps
    """
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=True)
    phone = Column(String(50), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    gender = Column(String(20), nullable=False)
    address = Column(String, nullable=True)
    medical_history = Column(Text, nullable=True)
    current_medication = Column(Text, nullable=True)
    allergies = Column(Text, nullable=True)
    emergency_contact = Column(String, nullable=True)
    blood_group = Column(String(10), nullable=True)
    insurance_number = Column(String(50), nullable=True)
    registered_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    last_updated_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    appointments = relationship("Appointment", back_populates="patient", cascade="all, delete-orphan")

    def __repr__(self):
        """String representation of the Patient model"""
        return f"<Patient(id={self.id}, name='{self.first_name} {self.last_name}')>"
