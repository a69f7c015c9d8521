"""
Hotel Listings Backend — Application Configuration
===================================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before app starts.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local development.
    Attributes are grouped by concern for readability.
    """

    # ── Record Storage ────────────────────────────────────────────────────
    # What: Directory holding one `<id>.json` file per hotel
    data_dir: str = Field(
        default="./data/hotels",
        description="Directory containing hotel record files",
    )

    # ── Image Storage ─────────────────────────────────────────────────────
    # What: Public directory for uploaded images, served under /images
    images_dir: str = Field(default="./public/images")

    # What: URL prefix stored in hotel records for each uploaded image
    images_url_prefix: str = Field(default="/images")

    # What: Maximum allowed size of a single image in bytes
    # Default: 5MB = 5 * 1024 * 1024 = 5242880
    max_image_size: int = Field(default=5_242_880, ge=1024, le=52_428_800)

    # What: Maximum number of files accepted by one upload request
    max_images_per_request: int = Field(default=10, ge=1, le=100)

    # What: Allowed image extensions (case-insensitive, comma-separated)
    allowed_image_extensions: str = Field(default="jpg,jpeg,png,gif,webp")

    @property
    def allowed_image_extensions_set(self) -> set:
        """Extensions as a lowercase set with leading dots (".jpg")."""
        return {
            "." + ext.strip().lower().lstrip(".")
            for ext in self.allowed_image_extensions.split(",")
            if ext.strip()
        }

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("images_url_prefix")
    @classmethod
    def validate_images_url_prefix(cls, v: str) -> str:
        """Normalizes the prefix to a leading slash and no trailing slash."""
        return "/" + v.strip().strip("/")

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DATA_DIR and data_dir both work
    }


# Singleton instance, imported throughout the application
settings = Settings()
