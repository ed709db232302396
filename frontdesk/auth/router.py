"""
Authentication routes for the front-desk portal.

Handlers are synchronous so password hashing runs in FastAPI's threadpool
rather than on the event loop.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, status

from ..config import settings
from ..core.deadline import Deadline
from ..core.tokens import TokenClaims
from .dependencies import (
    get_auth_service,
    get_current_active_user,
    get_current_claims,
    get_request_deadline,
)
from .models import User
from .schemas import (
    ForgotPassword,
    ForgotPasswordResponse,
    LoginResponse,
    MessageResponse,
    PasswordChange,
    PasswordReset,
    TokenResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from .service import AuthService

# Set up logging
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter()

FORGOT_PASSWORD_MESSAGE = "If the email is registered, password reset instructions have been issued"


@router.post("/login", response_model=LoginResponse, summary="User Login")
def login_route(
    login_data: UserLogin,
    auth_service: AuthService = Depends(get_auth_service),
    deadline: Optional[Deadline] = Depends(get_request_deadline),
):
    """
    Exchange email and password for a session token.

    Every failure cause returns the same 401 response.
    """
    token, user = auth_service.login(login_data.email, login_data.password, deadline=deadline)
    return LoginResponse(access_token=token, user=user)


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register Portal Account",
)
def register_route(
    register_data: UserRegister,
    auth_service: AuthService = Depends(get_auth_service),
    deadline: Optional[Deadline] = Depends(get_request_deadline),
):
    """Create an active front-desk or clinician account."""
    return auth_service.register(
        email=register_data.email,
        password=register_data.password,
        name=register_data.name,
        role=register_data.role,
        deadline=deadline,
    )


@router.get("/me", response_model=UserResponse, summary="Get Current User Profile")
def get_current_user_profile(current_user: User = Depends(get_current_active_user)):
    return current_user


@router.post("/refresh", response_model=TokenResponse, summary="Refresh Access Token")
def refresh_token_route(
    claims: TokenClaims = Depends(get_current_claims),
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Issue a new session token with a fresh validity window.

    The presented token is not revoked and stays usable until it expires.
    """
    return TokenResponse(access_token=auth_service.refresh_token(claims.user_id))


@router.put("/change-password", response_model=MessageResponse, summary="Change Own Password")
def change_password_route(
    password_data: PasswordChange,
    current_user: User = Depends(get_current_active_user),
    auth_service: AuthService = Depends(get_auth_service),
):
    auth_service.change_password(
        current_user.id, password_data.current_password, password_data.new_password
    )
    return MessageResponse(message="Password changed successfully")


@router.post("/forgot-password", response_model=ForgotPasswordResponse, summary="Request Password Reset")
def forgot_password_route(
    forgot_data: ForgotPassword,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Start a password reset.

    The response does not reveal whether the email is registered.
    """
    reset_token = auth_service.reset_password(forgot_data.email)
    return ForgotPasswordResponse(
        message=FORGOT_PASSWORD_MESSAGE,
        reset_token=reset_token if settings.expose_reset_tokens else None,
    )


@router.post("/reset-password", response_model=MessageResponse, summary="Reset Password with Token")
def reset_password_route(
    reset_data: PasswordReset,
    auth_service: AuthService = Depends(get_auth_service),
):
    user = auth_service.verify_reset_token(reset_data.token)
    auth_service.update_password(user.id, reset_data.new_password)
    return MessageResponse(message="Password has been reset successfully")
