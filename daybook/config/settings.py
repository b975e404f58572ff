"""
Configuration Management for Daybook

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Storage keys, quotas and display defaults live in one place so the
pages, the stores and the aggregator can never disagree about them.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Arrival time assumed when a timesheet entry has none.
# Shared by the entry form and the weekly hour totals.
DEFAULT_ARRIVAL = "08:00"


class StorageSettings(BaseSettings):
    """Durable storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="DAYBOOK_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_dir: Path = Field(
        default=Path(".daybook"),
        description="Directory holding one file per storage key"
    )
    quota_bytes: int = Field(
        default=5 * 1024 * 1024,
        ge=1024,
        description="Maximum total size of stored values, like a browser's local storage"
    )

    # Storage keys, one per module
    notes_key: str = Field(
        default="notes_data",
        description="Key holding the list of notes"
    )
    expenses_key: str = Field(
        default="expenses_data",
        description="Key holding the date -> day expenses mapping"
    )
    timesheet_key: str = Field(
        default="timesheet_data",
        description="Key holding the date -> time entry mapping"
    )
    backup_suffix: str = Field(
        default="_backup",
        description="Suffix for the session-scoped mirror of each key"
    )

    @field_validator('notes_key', 'expenses_key', 'timesheet_key')
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Keys become file names, so keep them simple."""
        if not v or any(sep in v for sep in ("/", "\\")):
            raise ValueError(f"Invalid storage key: {v!r}")
        return v


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="DAYBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode (debug-level logs)"
    )

    # Display
    toast_duration_seconds: float = Field(
        default=2.0,
        gt=0,
        le=30,
        description="How long a transient notification stays visible"
    )
    currency_symbol: str = Field(
        default="R$",
        description="Currency symbol shown next to amounts"
    )

    @property
    def log_level(self) -> str:
        return "DEBUG" if self.debug_mode else "INFO"


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.storage
        results["storage"] = True
    except Exception as e:
        results["storage"] = False
        results["storage_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
