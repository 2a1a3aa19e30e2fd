"""
Command Argument Parsing

Turns the arguments following a command flag into a typed request,
resolving the target username. Everything here runs before the
database is opened, so a bad invocation never touches storage.

Arity per command:

    command       non-admin               admin
    --add         DESCRIPTION AMOUNT      USERNAME DESCRIPTION AMOUNT
    --list        (none)                  USERNAME
    --del         ID                      USERNAME ID
    --listusers   not allowed             (none)
"""

import re
from decimal import Decimal
from enum import Enum
from typing import Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict

from expense_tracker.authorization import require_admin
from expense_tracker.errors import ArgumentError
from expense_tracker.models.audit import MAX_AUDIT_ARGUMENTS_LENGTH
from expense_tracker.models.expense import parse_amount
from expense_tracker.models.session import Session


class Command(str, Enum):
    """Command flags accepted by the dispatcher."""
    ADD = "--add"
    LIST = "--list"
    DEL = "--del"
    LISTUSERS = "--listusers"

    @classmethod
    def from_flag(cls, flag: str) -> Optional["Command"]:
        try:
            return cls(flag)
        except ValueError:
            return None


class AddRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str
    description: str
    amount: Decimal
    raw_amount: str


class ListRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str


class DeleteRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str
    expense_id: int
    raw_id: str


class ListUsersRequest(BaseModel):
    model_config = ConfigDict(frozen=True)


CommandRequest = Union[AddRequest, ListRequest, DeleteRequest, ListUsersRequest]

_ID_PATTERN = re.compile(r"[0-9]+")

# Largest rowid SQLite can store (signed 64-bit)
MAX_EXPENSE_ID = 2**63 - 1


def _check_count(command: Command, args: Sequence[str], expected: int) -> None:
    if len(args) < expected:
        raise ArgumentError(f"insufficient arguments for the {command.value} command")
    if len(args) > expected:
        raise ArgumentError(f"too many arguments for the {command.value} command")


def _check_lengths(args: Sequence[str], max_length: int) -> None:
    for arg in args:
        if len(arg) > max_length:
            raise ArgumentError(
                f"sorry, an argument is too long (limit is {max_length} characters)"
            )


def _check_username(username: str) -> str:
    if not username.strip():
        raise ArgumentError("the username must not be empty")
    return username


def parse_add(session: Session, args: Sequence[str]) -> AddRequest:
    if session.admin:
        _check_count(Command.ADD, args, 3)
        username, description, raw_amount = args
        username = _check_username(username)
    else:
        _check_count(Command.ADD, args, 2)
        description, raw_amount = args
        username = session.acting_username

    if not description.strip():
        raise ArgumentError("the expense description must not be empty")
    try:
        amount = parse_amount(raw_amount)
    except ValueError as e:
        raise ArgumentError(str(e))

    if len(description) + 1 + len(raw_amount) > MAX_AUDIT_ARGUMENTS_LENGTH:
        raise ArgumentError("sorry, the length of your expense is too long")

    return AddRequest(
        username=username,
        description=description,
        amount=amount,
        raw_amount=raw_amount,
    )


def parse_list(session: Session, args: Sequence[str]) -> ListRequest:
    if session.admin:
        _check_count(Command.LIST, args, 1)
        return ListRequest(username=_check_username(args[0]))
    _check_count(Command.LIST, args, 0)
    return ListRequest(username=session.acting_username)


def parse_delete(session: Session, args: Sequence[str]) -> DeleteRequest:
    if session.admin:
        _check_count(Command.DEL, args, 2)
        username, raw_id = args
        username = _check_username(username)
    else:
        _check_count(Command.DEL, args, 1)
        raw_id = args[0]
        username = session.acting_username

    if not _ID_PATTERN.fullmatch(raw_id):
        raise ArgumentError(f"'{raw_id}' is not a valid expense id")
    expense_id = int(raw_id)
    if expense_id > MAX_EXPENSE_ID:
        raise ArgumentError(f"'{raw_id}' is not a valid expense id")

    return DeleteRequest(username=username, expense_id=expense_id, raw_id=raw_id)


def parse_list_users(session: Session, args: Sequence[str]) -> ListUsersRequest:
    require_admin(session, "you must have administrator access to run this command")
    _check_count(Command.LISTUSERS, args, 0)
    return ListUsersRequest()


_PARSERS = {
    Command.ADD: parse_add,
    Command.LIST: parse_list,
    Command.DEL: parse_delete,
    Command.LISTUSERS: parse_list_users,
}


def parse_command(
    command: Command,
    session: Session,
    args: Sequence[str],
    max_argument_length: int,
) -> CommandRequest:
    """
    Validate the arguments of `command` and build its request.

    Raises:
        ArgumentError: On wrong arity, oversized or malformed arguments
        PermissionDeniedError: If a non-admin runs an admin-only command
    """
    if command is Command.LISTUSERS:
        # Permission is checked before anything about the arguments
        return parse_list_users(session, args)
    _check_lengths(args, max_argument_length)
    return _PARSERS[command](session, args)
