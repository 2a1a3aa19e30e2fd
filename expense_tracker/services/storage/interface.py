"""
Abstract Storage Interface

Command handlers talk to storage only through these interfaces, so the
SQLite backend can be swapped without touching the command logic.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from decimal import Decimal

from expense_tracker.models.audit import AuditEntry
from expense_tracker.models.expense import Expense


class ExpenseStorageInterface(ABC):
    """
    Abstract interface for expense storage operations.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def transaction(self) -> AbstractContextManager:
        """
        Group the enclosed writes into one atomic unit.

        Writes made through any storage object sharing the same database
        handle are committed together, or rolled back together if the
        block raises.
        """
        pass

    @abstractmethod
    def add_expense(
        self,
        time: int,
        username: str,
        description: str,
        amount: Decimal,
    ) -> int:
        """
        Insert an expense.

        Returns:
            The id assigned to the new expense

        Raises:
            StorageQueryError: If the insert fails
        """
        pass

    @abstractmethod
    def list_expenses(self, username: str) -> list[Expense]:
        """
        List every expense owned by a username, ordered by id.

        Raises:
            StorageQueryError: If the query fails
        """
        pass

    @abstractmethod
    def delete_expense(self, username: str, expense_id: int) -> int:
        """
        Delete the expense matching both username and id.

        Returns:
            Number of rows deleted (0 when nothing matched)

        Raises:
            StorageQueryError: If the delete fails
        """
        pass

    @abstractmethod
    def list_users(self) -> list[str]:
        """
        List distinct usernames owning at least one expense, sorted.

        Raises:
            StorageQueryError: If the query fails
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never read back, delete or modify them.
    """

    @abstractmethod
    def append_entry(self, entry: AuditEntry) -> None:
        """
        Append an audit entry to the log.

        Raises:
            StorageQueryError: If the insert fails
        """
        pass
