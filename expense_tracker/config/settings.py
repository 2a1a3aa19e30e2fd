"""
Configuration Management for Expense Tracker

Uses pydantic-settings for type-safe configuration.

The settings are read from a single root-owned env file. Process
environment variables are deliberately not a source: the tool runs on
behalf of unprivileged users, who control their own environment and
could otherwise inject an administrator credential.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


CONFIG_FILE = "/etc/expense-tracker/expense.env"
DEFAULT_DB_FILENAME = "expenses.sqlite"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ExpenseSettings(BaseSettings):
    """
    Expense tracker settings.

    Example config file:

        EXPENSE_ADMIN_PASSWORD_HASH=pbkdf2_sha256$600000$<salt>$<hash>
        EXPENSE_DB_PATH=/var/lib/expense-tracker/expenses.sqlite
    """

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_",
        env_file=CONFIG_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    db_path: str = Field(
        default=DEFAULT_DB_FILENAME,
        min_length=1,
        description="Default database file used when --db is not given"
    )
    admin_password_hash: Optional[str] = Field(
        default=None,
        description="PBKDF2 hash of the administrator password; admin mode is disabled when unset"
    )
    max_argument_length: int = Field(
        default=1024,
        ge=1,
        le=2048,
        description="Maximum length of any single command argument"
    )
    max_password_length: int = Field(
        default=256,
        ge=1,
        description="Maximum accepted length of the typed administrator password"
    )
    log_level: str = Field(
        default="WARNING",
        description="Level for diagnostic logs written to stderr"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Only explicit values and the root-owned config file.
        return init_settings, dotenv_settings


@lru_cache()
def get_settings() -> ExpenseSettings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return ExpenseSettings()
