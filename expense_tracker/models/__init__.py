"""
Data Models Package

Pydantic models for expenses, audit entries and the invocation session.
"""

from expense_tracker.models.expense import Expense, parse_amount
from expense_tracker.models.audit import (
    MAX_AUDIT_ARGUMENTS_LENGTH,
    AuditCommand,
    AuditEntry,
    AuditEntryBuilder,
)
from expense_tracker.models.session import Session

__all__ = [
    # Expense models
    "Expense",
    "parse_amount",
    # Audit models
    "MAX_AUDIT_ARGUMENTS_LENGTH",
    "AuditCommand",
    "AuditEntry",
    "AuditEntryBuilder",
    # Session
    "Session",
]
