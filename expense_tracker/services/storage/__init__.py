"""
Storage Services Package

Provides abstract interfaces and the SQLite implementation for data storage.
"""

from expense_tracker.services.storage.interface import (
    AuditStorageInterface,
    ExpenseStorageInterface,
)
from expense_tracker.services.storage.schema import SCHEMA_SQL, create_tables
from expense_tracker.services.storage.sqlite import (
    SQLiteAuditStorage,
    SQLiteDatabase,
    SQLiteExpenseStorage,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "ExpenseStorageInterface",
    # Schema
    "SCHEMA_SQL",
    "create_tables",
    # SQLite implementation
    "SQLiteAuditStorage",
    "SQLiteDatabase",
    "SQLiteExpenseStorage",
]
