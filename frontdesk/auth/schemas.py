"""
User Schemas - Pydantic models for authentication requests and responses.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from datetime import datetime
from .models import UserRole

class UserLogin(BaseModel):
    """
    User Login Schema - Used for authentication

    Fields:
    - email: User's email address
    - password: User's plain text password
    """
    email: EmailStr
    password: str

class UserRegister(BaseModel):
    """
    User Registration Schema - Used when creating a portal account

    Fields:
    - email: Unique login email
    - password: Plain text password (hashed before storage)
    - name: Display name
    - role: "front-desk" or "clinician"; other values are rejected by the service
    """
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=1)
    role: str

class UserResponse(BaseModel):
    """
    User Response Schema - Used when returning user data

    The password hash is deliberately absent.
    """
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: EmailStr
    name: str
    role: UserRole
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class LoginResponse(BaseModel):
    """
    Login Response Schema - Returned after successful authentication

    Fields:
    - access_token: Session token
    - token_type: Type of token (always "bearer")
    - user: User information
    """
    access_token: str
    token_type: str = "bearer"
    user: UserResponse

class TokenResponse(BaseModel):
    """Returned by the refresh endpoint."""
    access_token: str
    token_type: str = "bearer"

class PasswordChange(BaseModel):
    """
    Password Change Schema - Used by an authenticated user

    Fields:
    - current_password: Password currently on file
    - new_password: Replacement password
    """
    current_password: str
    new_password: str

class ForgotPassword(BaseModel):
    """Forgot Password Schema - Starts the reset flow for an email."""
    email: EmailStr

class ForgotPasswordResponse(BaseModel):
    """
    Identical for registered and unknown emails.

    ``reset_token`` is only populated when reset tokens are exposed for
    development.
    """
    message: str
    reset_token: Optional[str] = None

class PasswordReset(BaseModel):
    """
    Password Reset Schema - Completes the reset flow

    Fields:
    - token: Reset token issued by forgot-password
    - new_password: Replacement password
    """
    token: str
    new_password: str

class MessageResponse(BaseModel):
    message: str
