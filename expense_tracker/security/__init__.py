"""Credential checks and privilege handling."""

from expense_tracker.security.credentials import (
    InvalidHashError,
    hash_password,
    verify_password,
)
from expense_tracker.security.privileges import drop_privileges

__all__ = [
    "InvalidHashError",
    "drop_privileges",
    "hash_password",
    "verify_password",
]
