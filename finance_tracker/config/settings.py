"""
Configuration Management for the Finance Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Every setting has a working default so the tracker starts without a
.env file; environment variables only override.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Local SQLite database configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FINANCE_DB_",
        extra="ignore"
    )

    path: str = Field(
        default="finance_tracker.db",
        description="Path of the SQLite database file"
    )
    echo: bool = Field(
        default=False,
        description="Echo SQL statements (debugging)"
    )

    @field_validator('path')
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Reject an empty path; the parent directory is created on connect."""
        if not v.strip():
            raise ValueError("Database path cannot be empty")
        return v.strip()

    @property
    def url(self) -> str:
        if self.path == ":memory:":
            return "sqlite://"
        return f"sqlite:///{Path(self.path).expanduser()}"


class ReminderSettings(BaseSettings):
    """Daily reminder check configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FINANCE_REMINDER_",
        extra="ignore"
    )

    enabled: bool = Field(
        default=True,
        description="Run the periodic reminder check"
    )
    check_interval_hours: float = Field(
        default=24.0,
        gt=0,
        description="Hours between two reminder checks (wall-clock elapsed)"
    )

    @property
    def check_interval_seconds(self) -> float:
        return self.check_interval_hours * 60 * 60


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
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
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum level for local logs"
    )

    # Categories offered before anything is loaded
    default_categories: str = Field(
        default="Groceries,Rent,Entertainment,Utilities,Salary,Bonus",
        description="Comma-separated list of initial categories"
    )
    income_categories: str = Field(
        default="Salary,Bonus,Other",
        description="Comma-separated list of categories suggested for income"
    )

    currency_symbol: str = Field(
        default="$",
        max_length=3,
        description="Symbol shown in front of amounts"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def default_categories_list(self) -> list[str]:
        """Get default categories as a list (blank entries dropped)."""
        return _split_names(self.default_categories)

    @property
    def income_categories_list(self) -> list[str]:
        return _split_names(self.income_categories)


def _split_names(value: str) -> list[str]:
    names = []
    for name in value.split(","):
        name = name.strip()
        if name and name not in names:
            names.append(name)
    return names


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
    def database(self) -> DatabaseSettings:
        return DatabaseSettings()

    @property
    def reminders(self) -> ReminderSettings:
        return ReminderSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus a
    `<setting_name>_error` entry for each failure.
    """
    results = {}

    settings = get_settings()

    for name in ("database", "reminders", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
