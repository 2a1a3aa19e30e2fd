"""Services package."""

from expense_tracker.services.storage import (
    AuditStorageInterface,
    ExpenseStorageInterface,
    SQLiteAuditStorage,
    SQLiteDatabase,
    SQLiteExpenseStorage,
    create_tables,
)

__all__ = [
    # Storage services
    "AuditStorageInterface",
    "ExpenseStorageInterface",
    "SQLiteAuditStorage",
    "SQLiteDatabase",
    "SQLiteExpenseStorage",
    "create_tables",
]
