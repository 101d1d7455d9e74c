"""
Application configuration loaded from environment variables.

All configuration is validated at startup to fail fast on misconfiguration.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with validation.

    All settings are loaded from environment variables prefixed with
    CARDSCAN_ (e.g. CARDSCAN_LOCALE_PROFILE). Use .env file for local
    development.
    """

    model_config = SettingsConfigDict(
        env_prefix="CARDSCAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Parsing
    locale_profile: str = Field(
        default="in",
        description="Name of the locale profile used to parse card text"
    )

    # Storage
    storage_path: Path = Field(
        default=Path("./captures"),
        description="Local path for captured card images"
    )
    max_upload_bytes: int = Field(
        default=10 * 1024 * 1024,
        gt=0,
        description="Largest accepted card image upload, in bytes"
    )

    # OCR Configuration
    ocr_confidence_threshold: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="OCR lines below this confidence are flagged for review (0-1)"
    )

    # Server
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root logging level"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode with detailed error messages"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded once at startup and cached for subsequent calls.
    """
    return Settings()
