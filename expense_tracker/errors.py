"""
Error Taxonomy for Expense Tracker

Every error the tool can raise derives from ExpenseTrackerError.
None of them are recovered locally: the CLI reports the message and
exits with the error's exit code.
"""

from typing import Optional


class ExpenseTrackerError(Exception):
    """Base exception for all expense tracker failures."""

    exit_code: int = 1

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthenticationError(ExpenseTrackerError):
    """Wrong or unavailable administrator credential."""
    pass


class PermissionDeniedError(ExpenseTrackerError):
    """A non-admin caller attempted an admin-only action."""
    pass


class ArgumentError(ExpenseTrackerError):
    """Missing, malformed or oversized command arguments."""
    pass


class StorageOpenError(ExpenseTrackerError):
    """
    The database file is missing or is not a valid expense database.

    When the file exists but fails validation, `preview` holds the
    beginning of its contents to help an administrator debug it.
    """

    def __init__(self, message: str, preview: Optional[str] = None):
        super().__init__(message)
        self.preview = preview


class StorageQueryError(ExpenseTrackerError):
    """The storage engine rejected a statement."""
    pass


class AuditWriteError(ExpenseTrackerError):
    """The audit entry for a mutation could not be written."""
    pass
