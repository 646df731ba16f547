"""
Application configuration with environment-driven settings.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CUSTOMER_IMPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Customer Import API"
    app_env: Literal["dev", "qa", "uat", "prod"] = "dev"
    debug: bool = False
    log_level: str = "INFO"

    # Upload limits
    max_upload_bytes: int = Field(
        default=10 * 1024 * 1024,
        ge=1,
        description="Uploads above this size are rejected before parsing.",
    )
    error_preview_limit: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Number of row errors surfaced in a partial-success summary.",
    )

    # Delimited-text fallback
    text_delimiter: str = Field(default=",", min_length=1, max_length=1)
    text_encoding: str = Field(default="utf-8-sig")

    reject_duplicate_phones: bool = Field(
        default=False,
        description="Reject rows whose normalized phone number repeats an earlier row.",
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000",
        description="Comma-separated list of allowed CORS origins",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return str(v).strip().upper()

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
