"""
Authentication-specific exceptions.
"""
from fastapi import HTTPException, status

class AuthException(HTTPException):
    """Base class for authentication exceptions."""
    def __init__(self, status_code: int, detail: str, headers: dict = None):
        super().__init__(status_code=status_code, detail=detail, headers=headers)

class InvalidCredentialsException(AuthException):
    """
    Exception raised when a login cannot be completed.

    Unknown email, deactivated account and wrong password all raise this with
    the same detail.
    """
    def __init__(self):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

class AccountDeactivatedException(AuthException):
    """Exception raised when an authenticated account has been deactivated."""
    def __init__(self, detail: str = "User account is deactivated"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)

class UserNotFoundException(AuthException):
    """Exception raised when a user id does not resolve."""
    def __init__(self, detail: str = "User not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)

class EmailAlreadyExistsException(AuthException):
    """Exception raised when email already exists."""
    def __init__(self, detail: str = "Email already registered"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)

class InvalidRoleException(AuthException):
    """Exception raised when registering with a role outside the recognized set."""
    def __init__(self, detail: str = "Invalid role"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

class WeakPasswordException(AuthException):
    """Exception raised when a new password is too short."""
    def __init__(self, min_length: int = 6):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at least {min_length} characters long"
        )

class IncorrectPasswordException(AuthException):
    """Exception raised when the current password does not match on change."""
    def __init__(self, detail: str = "Incorrect current password"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

class InvalidResetTokenException(AuthException):
    """Exception raised when a password-reset token cannot be used."""
    def __init__(self, detail: str = "Invalid or expired reset token"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

class InvalidTokenException(AuthException):
    """Exception raised when a bearer token is invalid or expired."""
    def __init__(self, detail: str = "Invalid or expired token"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"}
        )

class RoleDeniedException(AuthException):
    """Exception raised when user doesn't have required role."""
    def __init__(self, required_roles: list, user_role: str):
        detail = f"Access denied. Required roles: {required_roles}. Your role: {user_role}"
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
