"""
FastAPI dependencies for authentication and authorization.
"""
from functools import lru_cache
from typing import Iterable, Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from ..config import settings
from ..core.deadline import Deadline
from ..core.permissions import FRONT_DESK_ONLY, FRONT_DESK_OR_CLINICIAN, authorize
from ..core.security import PasswordHasher
from ..core.tokens import TokenClaims, TokenService
from ..database import get_db
from .exceptions import RoleDeniedException
from .models import User
from .repository import UserRepository
from .service import AuthService

# OAuth2 scheme for bearer token authentication
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


@lru_cache()
def get_password_hasher() -> PasswordHasher:
    """Process-wide hasher configured with the settings' work factor."""
    return PasswordHasher(rounds=settings.bcrypt_rounds)


@lru_cache()
def get_token_service() -> TokenService:
    """Process-wide token service; its secrets are read once, here."""
    return TokenService.from_settings(settings)


def get_request_deadline() -> Optional[Deadline]:
    """Deadline for storage-bound operations in the current request."""
    return Deadline.after(settings.request_timeout_seconds)


def get_auth_service(
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(
        UserRepository(db),
        hasher,
        tokens,
        min_password_length=settings.min_password_length,
    )


def get_current_claims(
    token: str = Depends(oauth2_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """
    Validate the bearer token without touching the database.

    Raises:
        InvalidTokenException: If the token is invalid or expired
    """
    return tokens.validate_session(token)


def get_current_active_user(
    token: str = Depends(oauth2_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """
    Resolve the bearer token to a user that still exists and is active.

    Raises:
        InvalidTokenException: If the token is invalid or its user is gone
        AccountDeactivatedException: If the user has been deactivated
    """
    _, user = auth_service.validate_token(token)
    return user


def require_roles(allowed_roles: Iterable[str]):
    """
    Dependency factory to require specific roles.

    Args:
        allowed_roles: Roles allowed access

    Returns:
        Function that checks the token's role claim and returns its claims
    """
    allowed_roles = frozenset(allowed_roles)

    def role_checker(claims: TokenClaims = Depends(get_current_claims)) -> TokenClaims:
        if not authorize(claims.role, allowed_roles):
            raise RoleDeniedException(
                required_roles=sorted(str(getattr(role, "value", role)) for role in allowed_roles),
                user_role=claims.role,
            )
        return claims
    return role_checker


# Convenience dependencies for the portal's two access levels
require_front_desk = require_roles(FRONT_DESK_ONLY)
require_front_desk_or_clinician = require_roles(FRONT_DESK_OR_CLINICIAN)
