"""Configuration package."""

from expense_tracker.config.settings import (
    CONFIG_FILE,
    DEFAULT_DB_FILENAME,
    ExpenseSettings,
    get_settings,
)

__all__ = [
    "CONFIG_FILE",
    "DEFAULT_DB_FILENAME",
    "ExpenseSettings",
    "get_settings",
]
