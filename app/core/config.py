"""
Runtime settings.

Values come from the process environment (optionally seeded from a .env
file). Static business constants live in app.core.constants instead.
"""

import os
import secrets

from dotenv import load_dotenv

from app.core.constants import APIConfig, AuthConfig, BusinessLimits, EnvironmentConfig, LoggingConfig

# Load environment variables from a .env file
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return int(value)


class Settings:
    """Environment-driven configuration, read once at import time."""

    def __init__(self):
        self.ENVIRONMENT = os.getenv("ENVIRONMENT", EnvironmentConfig.DEVELOPMENT).lower()
        self.DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./civic_reports.db")
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", LoggingConfig.DEFAULT_LOG_LEVEL).upper()

        # SECRET_KEY falls back to a per-process key; tokens then die with the process
        self.SECRET_KEY = os.getenv("SECRET_KEY") or secrets.token_hex(32)
        self.ACCESS_TOKEN_EXPIRE_MINUTES = _env_int(
            "ACCESS_TOKEN_EXPIRE_MINUTES", AuthConfig.ACCESS_TOKEN_EXPIRE_MINUTES
        )
        self.BCRYPT_ROUNDS = _env_int("BCRYPT_ROUNDS", AuthConfig.BCRYPT_ROUNDS)
        self.ALLOW_LEGACY_ID_CREDENTIALS = _env_bool("ALLOW_LEGACY_ID_CREDENTIALS", True)
        self.STRICT_DELETE_OWNERSHIP = _env_bool("STRICT_DELETE_OWNERSHIP", False)

        self.MAX_POST_MEDIA_BYTES = _env_int("MAX_POST_MEDIA_BYTES", BusinessLimits.MAX_POST_MEDIA_BYTES)
        self.MAX_PROFILE_PICTURE_BYTES = _env_int(
            "MAX_PROFILE_PICTURE_BYTES", BusinessLimits.MAX_PROFILE_PICTURE_BYTES
        )
        self.MEDIA_URI_CACHE_SIZE = _env_int("MEDIA_URI_CACHE_SIZE", BusinessLimits.MEDIA_URI_CACHE_SIZE)
        self.MEDIA_URI_CACHE_MAX_BYTES = _env_int(
            "MEDIA_URI_CACHE_MAX_BYTES", BusinessLimits.MEDIA_URI_CACHE_MAX_BYTES
        )

        self.MAIL_HOST = os.getenv("MAIL_HOST")
        self.MAIL_PORT = _env_int("MAIL_PORT", 587)
        self.MAIL_USERNAME = os.getenv("MAIL_USERNAME")
        self.MAIL_PASSWORD = os.getenv("MAIL_PASSWORD")
        self.MAIL_FROM = os.getenv("MAIL_FROM", "no-reply@civicconnect.local")
        self.MAIL_USE_TLS = _env_bool("MAIL_USE_TLS", True)
        self.PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "http://localhost:8000").rstrip("/")

        origins = os.getenv("CORS_ORIGINS")
        self.CORS_ORIGINS = (
            [origin.strip() for origin in origins.split(",") if origin.strip()]
            if origins
            else list(APIConfig.ALLOWED_ORIGINS)
        )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == EnvironmentConfig.PRODUCTION


settings = Settings()
