"""
Core security utilities for password handling.
"""
import logging

from passlib.exc import PasswordValueError
from passlib.hash import bcrypt

from ..exceptions import HashingFailure

# Set up logging
logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 12


class PasswordHasher:
    """
    One-way salted password hashing using bcrypt via passlib.

    Every call to ``hash`` draws a fresh salt, so hashing the same secret twice
    yields two different strings. Secrets longer than bcrypt's 72-byte input
    limit are refused rather than silently truncated.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds
        self._scheme = bcrypt.using(rounds=rounds, truncate_error=True)
        self._dummy_hash = None

    def hash(self, password: str) -> str:
        """
        Hash a plain text password.

        Args:
            password: Plain text password (shape is not validated here)

        Returns:
            str: Hashed password

        Raises:
            HashingFailure: If the password cannot be hashed
        """
        try:
            return self._scheme.hash(password)
        except (PasswordValueError, ValueError, TypeError) as e:
            logger.error(f"Password hashing failed: {type(e).__name__}")
            raise HashingFailure() from e

    def verify(self, hashed_password: str, plain_password: str) -> bool:
        """
        Verify a password against a hash.

        Args:
            hashed_password: Hash produced by ``hash``
            plain_password: Plain text password to check

        Returns:
            bool: True if the password matches; False on mismatch or malformed hash
        """
        if not hashed_password:
            return False
        try:
            return self._scheme.verify(plain_password, hashed_password)
        except (ValueError, TypeError):
            return False


    def verify_dummy(self, plain_password: str) -> bool:
        """
        Spend one verification's worth of work against a throwaway hash.

        Used when no stored hash exists, so a login for an unknown email takes
        as long as one with a wrong password. Always returns False.
        """
        if self._dummy_hash is None:
            self._dummy_hash = self._scheme.hash("unused-placeholder-secret")
        self.verify(self._dummy_hash, plain_password)
        return False
