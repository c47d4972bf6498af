"""Application configuration module."""

from typing import List, Optional

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Database settings
    DATABASE_URL: Optional[str] = None
    SQL_ECHO: bool = False
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    CREATE_SCHEMA_ON_STARTUP: bool = False

    # Logging settings
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False
    LOG_FILE: Optional[str] = None

    # API settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "JaagrMind Assessments"
    FRONTEND_URL: str = "http://localhost:5173"

    # Classification settings. The cut-points are fractions of the maximum
    # attainable score and still await confirmation against the deployed values.
    STABLE_MIN_FRACTION: float = 0.70
    EMERGING_MIN_FRACTION: float = 0.40

    # Analytics settings
    RECENT_SUBMISSIONS_LIMIT: int = 10

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()

    @field_validator("RECENT_SUBMISSIONS_LIMIT")
    @classmethod
    def validate_recent_limit(cls, v: int) -> int:
        if v < 1:
            raise ValueError("RECENT_SUBMISSIONS_LIMIT must be at least 1")
        return v

    @model_validator(mode="after")
    def validate_thresholds(self) -> "Settings":
        """Cut-points must be ordered fractions in (0, 1]."""
        if not 0 < self.EMERGING_MIN_FRACTION < self.STABLE_MIN_FRACTION <= 1:
            raise ValueError(
                "Bucket thresholds must satisfy 0 < EMERGING_MIN_FRACTION < STABLE_MIN_FRACTION <= 1, "
                f"got {self.EMERGING_MIN_FRACTION} and {self.STABLE_MIN_FRACTION}"
            )
        return self

    @property
    def allowed_origins(self) -> List[str]:
        """CORS origins parsed from the comma separated FRONTEND_URL."""
        return [origin.strip() for origin in self.FRONTEND_URL.split(",") if origin.strip()]


# Create global settings instance
settings = Settings()
