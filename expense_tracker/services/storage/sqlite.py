"""
SQLite Storage Implementation

SQLiteDatabase is the thin engine adapter (open / execute / query /
close). The repositories on top of it hold every SQL statement the tool
runs; all of them are parameterized.

Cross-process locking is left entirely to SQLite.
"""

import os
import sqlite3
from contextlib import contextmanager
from decimal import Decimal
from typing import Iterator, Optional

from pydantic import ValidationError

from expense_tracker.errors import StorageOpenError, StorageQueryError
from expense_tracker.models.audit import AuditEntry
from expense_tracker.models.expense import Expense
from expense_tracker.services.storage.interface import (
    AuditStorageInterface,
    ExpenseStorageInterface,
)
from expense_tracker.utils.logger import get_logger


logger = get_logger(__name__)

# Probes run when a database is opened; both tables must exist.
VALIDATION_QUERIES = (
    "SELECT * FROM expenses LIMIT 1",
    "SELECT * FROM audit_log LIMIT 1",
)

PREVIEW_BYTES = 1024

INSERT_EXPENSE_SQL = (
    "INSERT INTO expenses (time, username, description, amount) VALUES (?, ?, ?, ?)"
)
LIST_EXPENSES_SQL = (
    "SELECT id, time, username, description, amount FROM expenses "
    "WHERE username = ? ORDER BY id"
)
DELETE_EXPENSE_SQL = "DELETE FROM expenses WHERE username = ? AND id = ?"
LIST_USERS_SQL = "SELECT DISTINCT username FROM expenses ORDER BY username"
INSERT_AUDIT_SQL = (
    "INSERT INTO audit_log (time, admin, username, command, arguments) "
    "VALUES (?, ?, ?, ?, ?)"
)


def _file_preview(path: str) -> Optional[str]:
    """Best-effort dump of the start of a file that failed validation."""
    try:
        with open(path, "rb") as f:
            data = f.read(PREVIEW_BYTES)
    except OSError:
        return None
    return data.decode("utf-8", errors="replace")


class SQLiteDatabase:
    """
    An open SQLite database handle.

    Use as a context manager so the handle is released on every exit path:

        with SQLiteDatabase.open(path) as db:
            db.query("SELECT ...", (...,))
    """

    def __init__(self, connection: sqlite3.Connection, path: str):
        self._connection = connection
        self._path = path
        self._in_transaction = False

    @classmethod
    def open(cls, path: str) -> "SQLiteDatabase":
        """
        Open an existing expense database.

        Raises:
            StorageOpenError: If the file does not exist, cannot be opened,
                or is not a valid expense database
        """
        if not os.path.exists(path):
            logger.warning("storage_open_failed", path=path, reason="missing")
            raise StorageOpenError("cannot open the specified database file")

        try:
            # Autocommit; transactions are explicit via transaction()
            connection = sqlite3.connect(path, isolation_level=None)
        except sqlite3.Error as e:
            logger.warning("storage_open_failed", path=path, reason=str(e))
            raise StorageOpenError("cannot open the specified database file")
        connection.row_factory = sqlite3.Row

        try:
            for statement in VALIDATION_QUERIES:
                connection.execute(statement).fetchall()
        except sqlite3.Error as e:
            connection.close()
            logger.warning("storage_open_failed", path=path, reason=str(e))
            raise StorageOpenError(
                f"{path} does not appear to be a valid expense database",
                preview=_file_preview(path),
            )

        logger.debug("storage_opened", path=path)
        return cls(connection, path)

    def execute(self, statement: str, params: tuple = ()) -> int:
        """
        Run a statement that returns no rows.

        Returns:
            Number of rows affected
        """
        try:
            cursor = self._connection.execute(statement, params)
        except (sqlite3.Error, OverflowError) as e:
            raise StorageQueryError(f"error from sqlite: {e}")
        return cursor.rowcount

    def insert(self, statement: str, params: tuple = ()) -> int:
        """Run an INSERT and return the new rowid."""
        try:
            cursor = self._connection.execute(statement, params)
        except (sqlite3.Error, OverflowError) as e:
            raise StorageQueryError(f"error from sqlite: {e}")
        return cursor.lastrowid

    def query(self, statement: str, params: tuple = ()) -> list[sqlite3.Row]:
        """Run a statement and return every resulting row."""
        try:
            return self._connection.execute(statement, params).fetchall()
        except (sqlite3.Error, OverflowError) as e:
            raise StorageQueryError(f"error from sqlite: {e}")

    @contextmanager
    def transaction(self) -> Iterator["SQLiteDatabase"]:
        """
        Run the enclosed statements in one transaction.

        Commits when the block exits normally, rolls back if it raises.
        Nested use joins the outer transaction.
        """
        if self._in_transaction:
            yield self
            return

        self.execute("BEGIN IMMEDIATE")
        self._in_transaction = True
        try:
            yield self
        except BaseException:
            self._in_transaction = False
            self._connection.rollback()
            raise
        self._in_transaction = False
        self.execute("COMMIT")

    def close(self) -> None:
        self._connection.close()
        logger.debug("storage_closed", path=self._path)

    def __enter__(self) -> "SQLiteDatabase":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class SQLiteExpenseStorage(ExpenseStorageInterface):
    """SQLite implementation of expense storage."""

    def __init__(self, database: SQLiteDatabase):
        self._db = database

    def transaction(self):
        return self._db.transaction()

    def add_expense(
        self,
        time: int,
        username: str,
        description: str,
        amount: Decimal,
    ) -> int:
        return self._db.insert(
            INSERT_EXPENSE_SQL,
            (time, username, description, float(amount)),
        )

    def list_expenses(self, username: str) -> list[Expense]:
        rows = self._db.query(LIST_EXPENSES_SQL, (username,))
        try:
            return [
                Expense(
                    id=row["id"],
                    time=row["time"],
                    username=row["username"],
                    description=row["description"],
                    amount=row["amount"],
                )
                for row in rows
            ]
        except ValidationError as e:
            logger.error("expense_row_invalid", username=username, error=str(e))
            raise StorageQueryError(
                f"the database holds an unreadable expense for {username}"
            )

    def delete_expense(self, username: str, expense_id: int) -> int:
        return self._db.execute(DELETE_EXPENSE_SQL, (username, expense_id))

    def list_users(self) -> list[str]:
        return [row["username"] for row in self._db.query(LIST_USERS_SQL)]


class SQLiteAuditStorage(AuditStorageInterface):
    """
    SQLite implementation of audit storage.

    Shares the database handle with SQLiteExpenseStorage so an audit
    entry can join the transaction of the write it records.
    """

    def __init__(self, database: SQLiteDatabase):
        self._db = database

    def append_entry(self, entry: AuditEntry) -> None:
        self._db.insert(INSERT_AUDIT_SQL, entry.to_row())
