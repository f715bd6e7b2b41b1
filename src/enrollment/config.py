"""
Enrollment - Configuration and settings.

Read from the environment or a local .env file.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class EnrollmentSettings(BaseSettings):
    """Settings for the questionnaire front-end."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Recommendation service (serves /api/enrollment and /api/enrollment/ai-questions)
    enrollment_api_base_url: str = "http://localhost:3000"

    # None = no local timeout; the service's own error is the failure signal
    enrollment_request_timeout: float | None = None

    # Application
    enrollment_env: Literal["development", "staging", "production"] = "development"
    # Non-verbose CLI log level; --verbose forces DEBUG
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"


@lru_cache
def get_settings() -> EnrollmentSettings:
    """Get cached settings instance."""
    return EnrollmentSettings()


class _SettingsProxy:
    """Lazy proxy for settings to avoid loading .env at import time."""

    _instance: EnrollmentSettings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)


settings = _SettingsProxy()
