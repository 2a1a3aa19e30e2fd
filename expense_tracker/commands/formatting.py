"""Plain-text rendering of command results and the usage message."""

import time

from expense_tracker.commands.handlers import (
    AddResult,
    CommandResult,
    DeleteResult,
    ListResult,
    ListUsersResult,
)
from expense_tracker.models.expense import Expense


HEADER_FORMAT = "%5s %24s %16s %40s %10s"

DESCRIPTION = (
    "This program allows users to track their expenses. It has commands for adding, viewing, and deleting\n"
    "expenses. Administrators may add, view, or delete expenses for any user. The program also keeps a log\n"
    "of all changes to facilitate offline auditing.\n"
)

COMMANDS_HELP = (
    "  Commands:\n"
    "    --help                           Displays this message\n"
    "    --add <Description> <Amount>     Adds an expense for the current user\n"
    "    --list                           Lists all expenses for the current user\n"
    "    --del <ID>                       Deletes the current user's expense with the given ID\n"
    "\n"
    "Additional commands are available to administrators. See the developer docs for more information."
)


def usage(prog: str) -> list[str]:
    return [
        DESCRIPTION,
        f"Usage: {prog} [--admin] <--command> [arguments]",
        COMMANDS_HELP,
    ]


def format_timestamp(timestamp: int) -> str:
    """Local time in ctime layout, e.g. 'Mon Oct 19 10:24:00 2026'."""
    return time.ctime(timestamp)


def format_expense(expense: Expense) -> str:
    return "%5d %24s %16s %40s %10s" % (
        expense.id,
        format_timestamp(expense.time),
        expense.username,
        expense.description,
        f"{expense.amount:.2f}",
    )


def format_expense_table(expenses: list[Expense]) -> list[str]:
    lines = [HEADER_FORMAT % ("ID", "Date/Time", "User", "Description", "Amount")]
    lines.extend(format_expense(expense) for expense in expenses)
    return lines


def render_result(result: CommandResult) -> list[str]:
    """Turn a command result into the lines printed on stdout."""
    if isinstance(result, AddResult):
        return [f"Added expense {result.expense_id} for {result.username}"]
    if isinstance(result, DeleteResult):
        if result.deleted:
            return [f"Deleted expense {result.expense_id} for {result.username}"]
        return [f"No expense {result.expense_id} found for {result.username}"]
    if isinstance(result, ListResult):
        return format_expense_table(result.expenses)
    if isinstance(result, ListUsersResult):
        return list(result.usernames)
    raise TypeError(f"Unsupported result: {type(result).__name__}")
