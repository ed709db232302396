"""
Application configuration settings loaded from environment variables.
Uses pydantic_settings for validation and type conversion.
"""
from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    """
    Application settings class with environment variable validation.

    Attributes:
        database_url: SQLAlchemy connection string
        secret_key: Base secret for signing session and reset tokens
        algorithm: Algorithm used for JWT encoding (typically HS256)
        access_token_expire_hours: Session token lifetime in hours
        reset_token_expire_minutes: Password-reset token lifetime in minutes
        bcrypt_rounds: Work factor for password hashing
        min_password_length: Minimum length accepted for a new password
        request_timeout_seconds: Deadline applied to login, registration and booking

        # Development settings
        expose_reset_tokens: Return reset tokens in the forgot-password response

        # Frontend settings
        cors_origins: Origins allowed by the CORS middleware

        # Bootstrap front-desk settings (optional)
        bootstrap_front_desk_email: Email for the first front-desk account
        bootstrap_front_desk_password: Password for the first front-desk account
        bootstrap_front_desk_name: Display name for the first front-desk account
    """
    # Database settings
    database_url: str

    # JWT settings
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_hours: int = 24
    reset_token_expire_minutes: int = 60

    # Password settings
    bcrypt_rounds: int = 12
    min_password_length: int = 6

    # Request deadline
    request_timeout_seconds: float = 10.0

    # Development only: never enable where reset tokens must go through mail
    expose_reset_tokens: bool = False

    # Frontend settings
    cors_origins: List[str] = ["http://localhost:3000"]

    # Bootstrap front-desk settings (optional - only used for first account creation)
    bootstrap_front_desk_email: Optional[str] = None
    bootstrap_front_desk_password: Optional[str] = None
    bootstrap_front_desk_name: str = "Front Desk"

    class Config:
        """Configuration for environment variables loading"""
        env_file = ".env"
        case_sensitive = False

# Create settings instance
settings = Settings()
