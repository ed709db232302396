"""
Bootstrap utilities for the first front-desk account.

Patient intake and appointment booking need a signed-in front-desk user, so
a fresh database can get one from the BOOTSTRAP_FRONT_DESK_* settings.
"""
import logging
from typing import Optional

from fastapi import HTTPException

from ..auth.models import User, UserRole
from ..auth.repository import UserRepository
from ..config import Settings
from ..exceptions import AppException
from .security import PasswordHasher

logger = logging.getLogger(__name__)

def create_bootstrap_front_desk(
    users: UserRepository,
    hasher: PasswordHasher,
    settings: Settings
) -> Optional[User]:
    """
    Create the first front-desk account from settings.

    Returns:
        Optional[User]: The new account, or None when nothing was created
    """
    if not settings.bootstrap_front_desk_email or not settings.bootstrap_front_desk_password:
        logger.warning("Bootstrap front-desk credentials not provided in environment variables")
        return None

    if users.find_by_email(settings.bootstrap_front_desk_email):
        logger.warning(f"Bootstrap skipped: email {settings.bootstrap_front_desk_email} already exists")
        return None

    user = User(
        email=settings.bootstrap_front_desk_email,
        name=settings.bootstrap_front_desk_name,
        password_hash=hasher.hash(settings.bootstrap_front_desk_password),
        role=UserRole.FRONT_DESK,
        is_active=True,
    )
    user = users.save(user)
    logger.info(f"Bootstrap front-desk account created: {user.email} (ID: {user.id})")
    return user

def bootstrap_front_desk_if_needed(
    users: UserRepository,
    hasher: PasswordHasher,
    settings: Settings
) -> Optional[User]:
    """
    Create the first front-desk account unless one already exists.

    Failures are logged and the application keeps starting; an operator can
    fix the settings and restart.
    """
    if users.exists_with_role(UserRole.FRONT_DESK):
        logger.info("Front-desk account found. Bootstrap not needed.")
        return None

    logger.info("No front-desk account found. Attempting bootstrap...")
    try:
        return create_bootstrap_front_desk(users, hasher, settings)
    except (AppException, HTTPException) as e:
        logger.error(f"Bootstrap front-desk creation failed: {e.detail}")
        return None
