"""
Audit Models for Expense Tracker

Every add and delete writes one audit entry. Audit entries are
append-only: the program never reads, modifies or deletes them.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from expense_tracker.errors import ArgumentError


MAX_AUDIT_ARGUMENTS_LENGTH = 2048


class AuditCommand(str, Enum):
    """Mutating commands that are audited."""
    ADD = "add"
    DEL = "del"


class AuditEntry(BaseModel):
    """
    A single audit entry.

    `username` is the target of the action, which for admin actions is
    not the identity running the program.
    """

    model_config = ConfigDict(frozen=True)

    time: int = Field(
        ...,
        ge=0,
        description="When the action happened, seconds since epoch"
    )
    admin: bool = Field(
        ...,
        description="Was the action performed in administrator mode?"
    )
    username: str = Field(
        ...,
        min_length=1,
        description="Username targeted by the action"
    )
    command: AuditCommand = Field(
        ...,
        description="Audited command"
    )
    arguments: str = Field(
        ...,
        max_length=MAX_AUDIT_ARGUMENTS_LENGTH,
        description="Effective arguments of the command, space-joined"
    )

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "time": self.time,
            "admin": self.admin,
            "username": self.username,
            "command": self.command.value,
            "arguments": self.arguments,
        }

    def to_row(self) -> tuple:
        """
        Convert to parameters for the audit_log insert.

        Returns columns in order: (time, admin, username, command, arguments)
        """
        return (
            self.time,
            int(self.admin),
            self.username,
            self.command.value,
            self.arguments,
        )


class AuditEntryBuilder:
    """
    Helper class to build audit entries for the audited commands.

    Usage:
        entry = AuditEntryBuilder.expense_added(t, False, "alice", "coffee", "3.50")
        entry = AuditEntryBuilder.expense_deleted(t, True, "bob", "4")
    """

    @staticmethod
    def _build(
        time: int,
        admin: bool,
        username: str,
        command: AuditCommand,
        arguments: str,
    ) -> AuditEntry:
        if len(arguments) > MAX_AUDIT_ARGUMENTS_LENGTH:
            raise ArgumentError("sorry, the audit log entry is too long")
        try:
            return AuditEntry(
                time=time,
                admin=admin,
                username=username,
                command=command,
                arguments=arguments,
            )
        except ValidationError as e:
            raise ArgumentError(f"invalid audit log entry: {e.errors()[0]['msg']}")

    @staticmethod
    def expense_added(
        time: int,
        admin: bool,
        username: str,
        description: str,
        amount: str,
    ) -> AuditEntry:
        return AuditEntryBuilder._build(
            time, admin, username, AuditCommand.ADD, f"{description} {amount}"
        )

    @staticmethod
    def expense_deleted(
        time: int,
        admin: bool,
        username: str,
        expense_id: str,
    ) -> AuditEntry:
        return AuditEntryBuilder._build(
            time, admin, username, AuditCommand.DEL, expense_id
        )
