"""
Authentication service layer for business logic.

Login, registration, token refresh and the password change/reset flows. The
service composes the password hasher, the token service and the user
repository; none of them are reached through globals.
"""
import logging
from typing import Optional, Tuple, Union

from ..core.deadline import Deadline, check_deadline
from ..core.security import PasswordHasher
from ..core.tokens import TokenClaims, TokenService
from .exceptions import (
    AccountDeactivatedException,
    EmailAlreadyExistsException,
    IncorrectPasswordException,
    InvalidCredentialsException,
    InvalidResetTokenException,
    InvalidRoleException,
    InvalidTokenException,
    UserNotFoundException,
    WeakPasswordException,
)
from .models import User, UserRole
from .repository import UserRepository
from .schemas import UserResponse

# Set up logging
logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class AuthService:
    """
    Authentication use cases over a user repository.

    Args:
        users: Credential store
        hasher: Password hasher
        tokens: Session and reset token issuer
        min_password_length: Minimum length for changed or reset passwords
    """

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
        min_password_length: int = MIN_PASSWORD_LENGTH,
    ):
        self.users = users
        self.hasher = hasher
        self.tokens = tokens
        self.min_password_length = min_password_length

    def login(
        self, email: str, password: str, deadline: Optional[Deadline] = None
    ) -> Tuple[str, UserResponse]:
        """
        Authenticate a user and issue a session token.

        An unknown email, a deactivated account and a wrong password all raise
        the same ``InvalidCredentialsException``.

        Returns:
            Tuple of the session token and the user without its password hash
        """
        user = self.users.find_by_email(email, deadline=deadline)
        if user is None:
            self.hasher.verify_dummy(password)
            logger.warning(f"Login failed for {email}")
            raise InvalidCredentialsException()

        password_ok = self.hasher.verify(user.password_hash, password)
        if not user.is_active or not password_ok:
            logger.warning(f"Login failed for {email}")
            raise InvalidCredentialsException()

        check_deadline(deadline)
        token = self.tokens.issue_session(user.id, user.email, user.role.value)
        logger.info(f"Login successful: User {user.id} ({email})")
        return token, UserResponse.model_validate(user)

    def register(
        self,
        email: str,
        password: str,
        name: str,
        role: Union[str, UserRole],
        deadline: Optional[Deadline] = None,
    ) -> UserResponse:
        """
        Create an active account.

        Password length is not checked here; the registration request schema
        enforces it.

        Raises:
            EmailAlreadyExistsException: If the email belongs to any account, active or not
            InvalidRoleException: If the role is not front-desk or clinician
        """
        logger.info(f"Registration attempt for email: {email}")
        if self.users.find_by_email(email, deadline=deadline) is not None:
            logger.warning(f"Registration failed: Email {email} already registered")
            raise EmailAlreadyExistsException()

        try:
            role = UserRole(role)
        except ValueError:
            logger.warning(f"Registration failed: invalid role {role!r}")
            raise InvalidRoleException()

        user = User(
            email=email,
            password_hash=self.hasher.hash(password),
            name=name,
            role=role,
            is_active=True,
        )
        user = self.users.save(user, deadline=deadline)
        logger.info(f"Account created: {user.id} ({role.value})")
        return UserResponse.model_validate(user)

    def validate_token(self, token: str) -> Tuple[TokenClaims, User]:
        """
        Validate a session token and confirm its user still exists and is active.

        Raises:
            InvalidTokenException: If the token fails validation or the user is gone
            AccountDeactivatedException: If the user has been deactivated
        """
        claims = self.tokens.validate_session(token)
        user = self.users.find_by_id(claims.user_id)
        if user is None:
            raise InvalidTokenException()
        if not user.is_active:
            raise AccountDeactivatedException()
        return claims, user

    def get_user(self, user_id: int) -> User:
        user = self.users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundException()
        if not user.is_active:
            raise AccountDeactivatedException()
        return user

    def refresh_token(self, user_id: int) -> str:
        """
        Issue a fresh session token for an existing, active user.

        Previously issued tokens stay valid until they expire.
        """
        user = self.get_user(user_id)
        token = self.tokens.issue_session(user.id, user.email, user.role.value)
        logger.info(f"Token refreshed for user {user.id} ({user.email})")
        return token

    def change_password(self, user_id: int, old_password: str, new_password: str) -> None:
        """
        Replace a password after checking the current one.

        Raises:
            UserNotFoundException: If the user does not exist
            IncorrectPasswordException: If the current password does not match
            WeakPasswordException: If the new password is too short
        """
        user = self.users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundException()
        if not self.hasher.verify(user.password_hash, old_password):
            logger.warning(f"Password change rejected for user {user_id}: incorrect current password")
            raise IncorrectPasswordException()
        self._store_password(user, new_password)
        logger.info(f"User {user.email} successfully changed their password.")

    def reset_password(self, email: str) -> Optional[str]:
        """
        Start a password reset.

        Returns a reset token, or None when the email is unknown or the
        account is deactivated. The two outcomes are indistinguishable to
        callers that do not see the token.
        """
        user = self.users.find_by_email(email)
        if user is None or not user.is_active:
            logger.info("Password reset requested for an unusable email")
            return None
        logger.info(f"Password reset token issued for user {user.id}")
        return self.tokens.issue_reset(user.id, user.email)

    def verify_reset_token(self, token: str) -> User:
        """
        Resolve the user a reset token was issued for.

        Raises:
            InvalidResetTokenException: On any token failure, or when the user is missing or inactive
        """
        try:
            claims = self.tokens.validate_reset(token)
        except InvalidTokenException:
            raise InvalidResetTokenException()

        user = self.users.find_by_id(claims.user_id)
        if user is None or not user.is_active:
            raise InvalidResetTokenException()
        return user

    def update_password(self, user_id: int, new_password: str) -> None:
        """
        Replace a password without the current one.

        Only call this after ``verify_reset_token`` has authenticated the request.
        """
        user = self.users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundException()
        self._store_password(user, new_password)
        logger.info(f"Password reset completed for user {user.id}")

    def _store_password(self, user: User, new_password: str) -> None:
        if len(new_password) < self.min_password_length:
            raise WeakPasswordException(self.min_password_length)
        user.password_hash = self.hasher.hash(new_password)
        self.users.save(user)
