"""
Command Dispatcher for Expense Tracker

Ties the components together for one invocation:

    argv -> help check -> authorization gate -> command parsing
         -> open database -> handler -> drop privileges -> rendered lines

The database is opened only once a valid command with valid arguments
has been confirmed, and is closed on every exit path.
"""

from typing import Callable, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from expense_tracker.audit import AuditLogger
from expense_tracker.authorization import AuthorizationGate
from expense_tracker.commands import (
    Command,
    CommandHandlers,
    parse_command,
    render_result,
    usage,
)
from expense_tracker.config import ExpenseSettings, get_settings
from expense_tracker.errors import ArgumentError, PermissionDeniedError
from expense_tracker.services.storage import (
    SQLiteAuditStorage,
    SQLiteDatabase,
    SQLiteExpenseStorage,
)
from expense_tracker.security import drop_privileges
from expense_tracker.utils.logger import get_logger


logger = get_logger(__name__)

HELP_FLAG = "--help"


class Outcome(BaseModel):
    """Lines to print on stdout after a successful invocation."""
    model_config = ConfigDict(frozen=True)

    lines: list[str]


def is_help_request(argv: Sequence[str]) -> bool:
    """No arguments at all, or `--help` anywhere."""
    return len(argv) == 0 or HELP_FLAG in argv


class Dispatcher:
    """
    Maps `[--admin] [--db PATH] <command> [args...]` to a handler.

    Every failure surfaces as an ExpenseTrackerError; nothing is retried.
    """

    def __init__(
        self,
        identity: Callable[[], str],
        password_reader: Callable[[], str],
        settings: Optional[ExpenseSettings] = None,
        opener: Callable[[str], SQLiteDatabase] = SQLiteDatabase.open,
        privilege_dropper: Callable[[], bool] = drop_privileges,
        prog: str = "expense",
    ):
        """
        Args:
            identity: Returns the invoking OS username
            password_reader: Reads the administrator password without echo
            settings: Defaults to get_settings()
            opener: Opens the database for a path
            privilege_dropper: Called once the handler has finished with
                the database
            prog: Program name shown in the usage text
        """
        self._identity = identity
        self._settings = settings or get_settings()
        self._gate = AuthorizationGate(self._settings, password_reader)
        self._open = opener
        self._drop_privileges = privilege_dropper
        self._prog = prog

    def run(self, argv: Sequence[str]) -> Outcome:
        argv = list(argv)
        if is_help_request(argv):
            return Outcome(lines=usage(self._prog))

        acting_username = self._identity()
        session, rest = self._gate.resolve_session(argv, acting_username)

        if not rest:
            raise ArgumentError("no command supplied")
        command = Command.from_flag(rest[0])
        if command is None:
            raise ArgumentError("unknown command supplied")

        request = parse_command(
            command, session, rest[1:], self._settings.max_argument_length
        )
        logger.info(
            "command_dispatched",
            command=command.value,
            user=acting_username,
            admin=session.admin,
            db_path=session.db_path,
        )

        with self._open(session.db_path) as db:
            handlers = CommandHandlers(
                session=session,
                expenses=SQLiteExpenseStorage(db),
                audit_logger=AuditLogger(SQLiteAuditStorage(db)),
            )
            result = handlers.execute(request)

        try:
            self._drop_privileges()
        except OSError as e:
            raise PermissionDeniedError(f"cannot drop elevated privileges: {e}")

        return Outcome(lines=render_result(result))
