"""faceblur configuration using pydantic-settings.

All configuration is strongly typed and supports environment variables
and .env files.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"  # "console" or "json"

    # Crop/encode policy applied to every detected face
    CROP_JPEG_QUALITY: int = Field(default=80, ge=1, le=100)
    CROP_FORMAT: Literal["JPEG", "PNG", "WEBP"] = "JPEG"

    # Where cropped face assets are written (temp dir when unset)
    CROP_OUTPUT_DIR: Path | None = None


# Singleton instance for import convenience
settings = Settings()
