"""
Audit Logger

Every add and delete is recorded in the audit log.

The audit logger:
- Writes synchronously, before control returns to the command handler
- Treats a failed write as fatal (raises AuditWriteError)
- Mirrors each entry to the structured diagnostic log
"""

import time as _time
from typing import Optional

from expense_tracker.errors import AuditWriteError, StorageQueryError
from expense_tracker.models.audit import AuditEntry, AuditEntryBuilder
from expense_tracker.services.storage import AuditStorageInterface
from expense_tracker.utils.logger import get_logger


class AuditLogger:
    """
    Central audit logging service.

    Logs entries both to:
    1. The audit_log table (for offline auditing)
    2. Structured local log (for debugging)
    """

    def __init__(self, storage: AuditStorageInterface):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend the entries are appended to.
        """
        self._storage = storage
        self._logger = get_logger(__name__)

    def log(self, entry: AuditEntry) -> None:
        """
        Append an audit entry.

        Raises:
            AuditWriteError: If the storage backend rejects the entry
        """
        try:
            self._storage.append_entry(entry)
        except StorageQueryError as e:
            self._logger.error(
                "audit_storage_failed",
                error=e.message,
                **entry.to_log_dict(),
            )
            raise AuditWriteError(f"cannot write audit log entry: {e.message}")

        self._logger.info("audit_event", **entry.to_log_dict())

    def log_expense_added(
        self,
        admin: bool,
        username: str,
        description: str,
        amount: str,
        time: Optional[int] = None,
    ) -> AuditEntry:
        """Log an expense being added."""
        entry = AuditEntryBuilder.expense_added(
            time=time if time is not None else int(_time.time()),
            admin=admin,
            username=username,
            description=description,
            amount=amount,
        )
        self.log(entry)
        return entry

    def log_expense_deleted(
        self,
        admin: bool,
        username: str,
        expense_id: str,
        time: Optional[int] = None,
    ) -> AuditEntry:
        """Log an expense being deleted."""
        entry = AuditEntryBuilder.expense_deleted(
            time=time if time is not None else int(_time.time()),
            admin=admin,
            username=username,
            expense_id=expense_id,
        )
        self.log(entry)
        return entry
