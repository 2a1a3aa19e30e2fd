"""
Authorization Gate

Decides, for one invocation, whether the caller runs in administrator
mode and which database the session points at.

- `--admin` must be the first argument; the password is read once and
  checked against the configured hash. A mismatch ends the invocation.
- `--db PATH` is honored only in administrator mode.
- Only administrators may name a target username (see commands.arguments).
"""

from typing import Callable, Sequence

from expense_tracker.config import ExpenseSettings
from expense_tracker.errors import (
    ArgumentError,
    AuthenticationError,
    PermissionDeniedError,
)
from expense_tracker.models.session import Session
from expense_tracker.security.credentials import InvalidHashError, verify_password
from expense_tracker.utils.logger import get_logger


logger = get_logger(__name__)

ADMIN_FLAG = "--admin"
DB_FLAG = "--db"


class AuthorizationGate:
    """
    Resolves the Session for an invocation.

    The password reader is injected so the CLI can prompt without echo
    and tests can supply a fixed answer.
    """

    def __init__(
        self,
        settings: ExpenseSettings,
        password_reader: Callable[[], str],
    ):
        self._settings = settings
        self._read_password = password_reader

    def authenticate(self, acting_username: str) -> None:
        """
        Prompt for the administrator password and verify it.

        Raises:
            ArgumentError: If the typed password exceeds the length limit
            AuthenticationError: If admin mode is not configured or the
                password is wrong
        """
        if not self._settings.admin_password_hash:
            logger.warning("authentication_failed", user=acting_username, reason="not_configured")
            raise AuthenticationError("administrator mode is not configured")

        password = self._read_password()
        if len(password) > self._settings.max_password_length:
            logger.warning("authentication_failed", user=acting_username, reason="too_long")
            raise ArgumentError("the administrator password is too long")

        try:
            valid = verify_password(password, self._settings.admin_password_hash)
        except InvalidHashError:
            logger.error("authentication_failed", user=acting_username, reason="bad_hash")
            raise AuthenticationError("the administrator credential is misconfigured")

        if not valid:
            logger.warning("authentication_failed", user=acting_username, reason="mismatch")
            raise AuthenticationError("incorrect password")

        logger.info("admin_authenticated", user=acting_username)

    def resolve_session(
        self,
        argv: Sequence[str],
        acting_username: str,
    ) -> tuple[Session, list[str]]:
        """
        Consume the `[--admin] [--db PATH]` prefix of the argument list.

        Returns:
            (session, remaining arguments)

        Raises:
            AuthenticationError: On a failed `--admin` credential check
            PermissionDeniedError: If `--db` is used without admin mode
            ArgumentError: If `--db` has no path
        """
        args = list(argv)
        admin = False
        db_path = self._settings.db_path

        if args and args[0] == ADMIN_FLAG:
            self.authenticate(acting_username)
            admin = True
            args = args[1:]

        if args and args[0] == DB_FLAG:
            if not admin:
                raise PermissionDeniedError("only administrators may use the --db command")
            if len(args) < 2 or not args[1]:
                raise ArgumentError("insufficient arguments supplied for --db command")
            db_path = args[1]
            args = args[2:]

        session = Session(
            acting_username=acting_username,
            admin=admin,
            db_path=db_path,
        )
        return session, args


def require_admin(session: Session, message: str) -> None:
    """Raise PermissionDeniedError unless the session is in admin mode."""
    if not session.admin:
        raise PermissionDeniedError(message)
