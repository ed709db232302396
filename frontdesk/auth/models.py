"""
User Model - Stores the portal's authenticated principals.

Front-desk staff and clinicians sign in with their email and password. Accounts
are never physically deleted; deactivation is a soft state toggled through
``is_active``.
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum
from sqlalchemy.sql import func
import enum
from ..database import Base

class UserRole(str, enum.Enum):
    """
    Enumeration for user roles in the front-desk portal.

    Roles:
    - FRONT_DESK: Reception staff who register patients and book appointments
    - CLINICIAN: Doctors who update patient records and appointment status
    """
    FRONT_DESK = "front-desk"
    CLINICIAN = "clinician"


def enum_values(enum_cls):
    """Persist enum values rather than member names."""
    return [member.value for member in enum_cls]


class User(Base):
    """
    User Model - Stores all user information in the system

    Fields:
    - id: Primary key for user identification
    - email: Unique email address used as the login handle
    - password_hash: Securely hashed password (never store or return raw passwords)
    - name: Display name
    - role: User role (front-desk or clinician)
    - is_active: Whether the account may sign in
    - created_at: Timestamp when user was created
    - updated_at: Timestamp when user was last updated
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    role = Column(Enum(UserRole, name="user_role", values_callable=enum_values), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        """String representation of the User model"""
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
