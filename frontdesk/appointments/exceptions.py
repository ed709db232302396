"""
Appointment-specific exceptions.
"""
from fastapi import HTTPException, status

class SlotUnavailableException(HTTPException):
    """Raised when the doctor already holds a non-cancelled booking for the date and slot."""
    def __init__(self, detail: str = "Doctor is not available at this time"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)

class InvalidDoctorException(HTTPException):
    """Raised when the doctor id does not belong to an active clinician."""
    def __init__(self, detail: str = "Doctor not found or not an active clinician"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
