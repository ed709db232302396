"""
Signed, time-bounded bearer tokens.

Two token kinds are issued: session tokens (returned by login and refresh) and
password-reset tokens. Each kind is signed with its own secret, both derived
from the single base secret in the settings, so a token of one kind never
verifies as the other. Tokens are stateless: there is no revocation list, and
rotating the base secret invalidates every outstanding token at once.
"""
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

from jose import jwt, JWTError

from ..auth.exceptions import InvalidTokenException

# Set up logging
logger = logging.getLogger(__name__)

RESET_SECRET_SUFFIX = "-reset"
SESSION_TOKEN_LIFETIME = timedelta(hours=24)
RESET_TOKEN_LIFETIME = timedelta(hours=1)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TokenClaims:
    """Decoded payload of a validated token."""
    user_id: int
    email: str
    role: Optional[str]
    issued_at: datetime
    expires_at: datetime
    token_id: str


class TokenService:
    """
    Issues and validates session and password-reset tokens.

    The secrets are fixed at construction time and never re-read, which makes
    one instance safe to share between concurrent requests.

    Args:
        secret_key: Base signing secret; the reset secret is derived from it
        algorithm: JWT signing algorithm
        session_lifetime: Validity window of a session token
        reset_lifetime: Validity window of a reset token
        clock: Callable returning the current aware UTC datetime
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        session_lifetime: timedelta = SESSION_TOKEN_LIFETIME,
        reset_lifetime: timedelta = RESET_TOKEN_LIFETIME,
        clock: Callable[[], datetime] = utc_now,
    ):
        if not secret_key:
            raise ValueError("A signing secret is required")
        self._session_secret = secret_key
        self._reset_secret = secret_key + RESET_SECRET_SUFFIX
        self.algorithm = algorithm
        self.session_lifetime = session_lifetime
        self.reset_lifetime = reset_lifetime
        self._clock = clock

    @classmethod
    def from_settings(cls, settings) -> "TokenService":
        return cls(
            secret_key=settings.secret_key,
            algorithm=settings.algorithm,
            session_lifetime=timedelta(hours=settings.access_token_expire_hours),
            reset_lifetime=timedelta(minutes=settings.reset_token_expire_minutes),
        )

    def issue_session(self, user_id: int, email: str, role: str) -> str:
        """Create a session token valid for ``session_lifetime`` from now."""
        return self._issue(
            {"user_id": user_id, "email": email, "role": role},
            self._session_secret,
            self.session_lifetime,
        )

    def validate_session(self, token: str) -> TokenClaims:
        """
        Verify a session token's signature and expiry.

        Does not consult the user store.

        Raises:
            InvalidTokenException: Bad signature, unparseable payload, or expired
        """
        claims = self._validate(token, self._session_secret)
        if not claims.role:
            raise InvalidTokenException()
        return claims

    def issue_reset(self, user_id: int, email: str) -> str:
        """Create a password-reset token valid for ``reset_lifetime`` from now."""
        return self._issue(
            {"user_id": user_id, "email": email},
            self._reset_secret,
            self.reset_lifetime,
        )

    def validate_reset(self, token: str) -> TokenClaims:
        """Same failure semantics as ``validate_session``, under the reset secret."""
        return self._validate(token, self._reset_secret)

    def _issue(self, data: Dict[str, Any], secret: str, lifetime: timedelta) -> str:
        # NumericDate keeps fractional seconds so expiry is exactly issue time + lifetime
        issued_at = self._clock().timestamp()
        to_encode = data.copy()
        to_encode.update({
            "sub": str(data["user_id"]),
            "iat": issued_at,
            "exp": issued_at + lifetime.total_seconds(),
            "jti": secrets.token_urlsafe(16),
        })
        return jwt.encode(to_encode, secret, algorithm=self.algorithm)

    def _validate(self, token: str, secret: str) -> TokenClaims:
        if not token or not isinstance(token, str):
            raise InvalidTokenException()
        try:
            # Expiry is checked below against the injected clock
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
            claims = TokenClaims(
                user_id=int(payload["user_id"]),
                email=str(payload["email"]),
                role=payload.get("role"),
                issued_at=datetime.fromtimestamp(float(payload["iat"]), tz=timezone.utc),
                expires_at=datetime.fromtimestamp(float(payload["exp"]), tz=timezone.utc),
                token_id=str(payload.get("jti", "")),
            )
        except JWTError as e:
            logger.debug(f"Token rejected: {type(e).__name__}")
            raise InvalidTokenException()
        except (KeyError, TypeError, ValueError, OverflowError):
            logger.debug("Token rejected: malformed claims")
            raise InvalidTokenException()

        if claims.expires_at <= self._clock():
            raise InvalidTokenException()
        return claims
