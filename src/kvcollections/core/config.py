"""Configuration management for kvcollections.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Settings are read once and cached;
tests reset the cache with ``get_settings.cache_clear()``.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library configuration settings.

    Settings are loaded from environment variables prefixed with
    ``KVCOLLECTIONS_`` and from an optional ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="KVCOLLECTIONS_",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "production", "testing"] = "development"

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    log_format: Literal["json", "console"] = "console"

    # Persistence Settings
    json_extensions: list[str] = Field(default=[".json"])
    file_encoding: str = "utf-8"
    json_indent: int | None = None
    json_ensure_ascii: bool = False
    save_append_strategy: Literal["append", "merge"] = Field(
        default="append",
        description="How save(overwrite=False) combines new content with an existing file",
    )
    base_dir: str | None = Field(
        default=None,
        description="Base directory for relative persistence paths (defaults to the working directory)",
    )

    @field_validator("json_extensions", mode="before")
    @classmethod
    def parse_json_extensions(cls, v: str | list[str]) -> list[str]:
        """Parse extensions from a comma-separated string or list."""
        if isinstance(v, str):
            return [ext.strip() for ext in v.split(",") if ext.strip()]
        return v

    @field_validator("json_extensions")
    @classmethod
    def validate_json_extensions(cls, v: list[str]) -> list[str]:
        """Every extension must be a non-empty suffix starting with a dot."""
        if not v:
            raise ValueError("At least one JSON file extension is required")
        for ext in v:
            if not ext.startswith(".") or len(ext) < 2:
                raise ValueError(f"Invalid file extension '{ext}': must start with '.'")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Cached library settings instance.
    """
    return Settings()
