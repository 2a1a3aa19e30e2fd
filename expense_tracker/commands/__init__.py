"""Command parsing, execution and rendering."""

from expense_tracker.commands.arguments import (
    AddRequest,
    Command,
    CommandRequest,
    DeleteRequest,
    ListRequest,
    ListUsersRequest,
    parse_command,
)
from expense_tracker.commands.handlers import (
    AddResult,
    CommandHandlers,
    CommandResult,
    DeleteResult,
    ListResult,
    ListUsersResult,
)
from expense_tracker.commands.formatting import render_result, usage

__all__ = [
    # Requests
    "AddRequest",
    "Command",
    "CommandRequest",
    "DeleteRequest",
    "ListRequest",
    "ListUsersRequest",
    "parse_command",
    # Handlers
    "AddResult",
    "CommandHandlers",
    "CommandResult",
    "DeleteResult",
    "ListResult",
    "ListUsersResult",
    # Output
    "render_result",
    "usage",
]
