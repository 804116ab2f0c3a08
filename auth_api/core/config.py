from pydantic_settings import BaseSettings
from pydantic import field_validator, model_validator
from typing import Optional, Any
import logging

logger = logging.getLogger(__name__)

DEFAULT_JWT_SECRET = "change-this-jwt-secret"


class Settings(BaseSettings):
    # App
    APP_NAME: str = "Auth API"
    ENVIRONMENT: str = "development" # development, production, test
    ALLOWED_ORIGINS: list[str] = ["http://localhost:5173"]
    EXPOSE_INTERNAL_ERRORS: bool = True

    # Session token
    JWT_SECRET: str = DEFAULT_JWT_SECRET
    SESSION_COOKIE_NAME: str = "token"
    SESSION_TOKEN_EXPIRE_DAYS: int = 7

    # OTP lifetimes
    VERIFY_OTP_EXPIRE_MINUTES: int = 24 * 60
    RESET_OTP_EXPIRE_MINUTES: int = 15

    # Database
    DATABASE_URL: str = "sqlite:///./auth.db"
    POSTGRES_URL: Optional[str] = None

    @model_validator(mode='before')
    @classmethod
    def check_database_url(cls, data: Any) -> Any:
        if isinstance(data, dict):
            if not data.get("DATABASE_URL") and data.get("POSTGRES_URL"):
                data["DATABASE_URL"] = data.get("POSTGRES_URL")
        return data

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str]) -> str:
        if isinstance(v, str):
            if v.startswith("postgres://"):
                return v.replace("postgres://", "postgresql://", 1)
        return v

    # Email (SMTP)
    SMTP_SERVER: Optional[str] = None
    SMTP_PORT: int = 587
    SMTP_USERNAME: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SMTP_USE_TLS: bool = False
    SMTP_USE_STARTTLS: bool = True
    SMTP_TIMEOUT: int = 10
    SENDER_EMAIL: str = "no-reply@localhost"

    # Monitoring (Sentry)
    SENTRY_DSN: Optional[str] = None

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    class Config:
        env_file = ".env"
        extra = "ignore" # Prevent crash on extra env vars

settings = Settings()

if settings.is_production and settings.JWT_SECRET == DEFAULT_JWT_SECRET:
    logger.critical("JWT_SECRET is not set. Session tokens are signed with the default secret.")
