"""Configuration management for the photo status bar renderer."""

import logging
from functools import lru_cache
from typing import Optional, TypeVar

from dotenv import load_dotenv
from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


T = TypeVar("T")


def _warn_invalid(field_name: str, raw_value: object, default: T, reason: str) -> T:
    """Log a user-friendly message and return the safe default."""
    logger.warning(
        "Invalid value for %s=%r; %s. Falling back to %r.",
        field_name,
        raw_value,
        reason,
        default,
    )
    return default


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", case_sensitive=False
    )

    # File locations
    CONFIG_FILE: str = Field("config.xml", description="Bar configuration document (XML)")
    INPUT_IMAGE: str = Field("inputs/input.jpg", description="Source photograph")
    OUTPUT_IMAGE: str = Field("outputs/output.jpg", description="Composited output image")
    FONT_DIR: str = Field("font/", description="Directory section font names resolve against")

    # Output settings
    JPEG_QUALITY: int = Field(75, ge=1, le=95, description="JPEG encoder quality")

    DEBUG: bool = Field(False, description="Enable debug logging")

    # Sentry/GlitchTip settings
    SENTRY_DSN: Optional[str] = Field(default=None, description="Sentry DSN")
    SENTRY_ENVIRONMENT: str = Field("production", description="Sentry environment name")

    @field_validator("JPEG_QUALITY", mode="before")
    @classmethod
    def validate_quality(cls, value: object, info: ValidationInfo) -> int:
        if info.field_name is None:
            return 75
        default: int = cls.model_fields[info.field_name].default
        try:
            quality = int(value)  # type: ignore[arg-type]
            if 1 <= quality <= 95:
                return quality
        except (TypeError, ValueError):
            pass
        return _warn_invalid(info.field_name, value, default, "must be an integer from 1 to 95")

    @field_validator("CONFIG_FILE", "INPUT_IMAGE", "OUTPUT_IMAGE", mode="before")
    @classmethod
    def validate_path(cls, value: object, info: ValidationInfo) -> str:
        if info.field_name is None:
            return ""
        default: str = cls.model_fields[info.field_name].default
        if isinstance(value, str) and value.strip():
            return value.strip()
        return _warn_invalid(info.field_name, value, default, "must be a non-empty path")


@lru_cache()
def get_config() -> Config:
    """Load configuration once and reuse across the application."""
    return Config()  # type: ignore[call-arg]


def _reset_config_cache_for_tests() -> None:
    """Allow tests to rebuild configuration with fresh environment variables."""

    get_config.cache_clear()


config = get_config()
