"""
Command-line entry points implemented with Typer.

`expense` keeps the flag-style grammar of the tool
(`[--admin] [--db PATH] <--command> [args...]`), so Typer only collects
the raw arguments and the Dispatcher interprets them.

`expense-admin` holds administrator tooling: hashing the admin password
for the config file and creating an empty database.
"""

import os
import pwd
from typing import Optional

import typer
from pydantic import ValidationError

from expense_tracker.config import CONFIG_FILE, get_settings
from expense_tracker.errors import (
    AuthenticationError,
    ExpenseTrackerError,
    StorageOpenError,
)
from expense_tracker.orchestrator import Dispatcher
from expense_tracker.security import hash_password
from expense_tracker.services.storage import create_tables
from expense_tracker.utils.logger import configure_logging, get_logger


logger = get_logger(__name__)

SUCCESS_EXIT_CODE = 0
CONFIG_ERROR_EXIT_CODE = 1

app = typer.Typer(add_completion=False)
admin_app = typer.Typer(
    add_completion=False,
    help="Administrator tooling for the expense tracker.",
)


def resolve_os_username() -> str:
    """Name of the account that invoked the program (real uid, not environment)."""
    try:
        return pwd.getpwuid(os.getuid()).pw_name
    except KeyError:
        raise AuthenticationError("cannot determine the invoking user")


def prompt_admin_password() -> str:
    return typer.prompt(
        "Enter the administrator password",
        hide_input=True,
        default="",
        show_default=False,
    )


def _fail(error: ExpenseTrackerError) -> None:
    logger.error("command_failed", error=error.message, kind=type(error).__name__)
    typer.echo(f"Error: {error.message}", err=True)
    if isinstance(error, StorageOpenError) and error.preview is not None:
        typer.echo(
            "To aid in debugging, here are the contents of the specified file:",
            err=True,
        )
        typer.echo(error.preview, err=True)
    raise typer.Exit(code=error.exit_code)


@app.command(
    add_help_option=False,
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
)
def main(
    ctx: typer.Context,
    args: Optional[list[str]] = typer.Argument(None),
) -> None:
    """Track expenses. Run with --help for usage."""
    try:
        settings = get_settings()
    except ValidationError as e:
        typer.echo(f"Error: invalid configuration in {CONFIG_FILE}: {e}", err=True)
        raise typer.Exit(code=CONFIG_ERROR_EXIT_CODE)
    except OSError as e:
        typer.echo(f"Error: cannot read configuration {CONFIG_FILE}: {e.strerror}", err=True)
        raise typer.Exit(code=CONFIG_ERROR_EXIT_CODE)
    configure_logging(settings.log_level)

    dispatcher = Dispatcher(
        identity=resolve_os_username,
        password_reader=prompt_admin_password,
        settings=settings,
        prog=ctx.find_root().info_name or "expense",
    )
    try:
        outcome = dispatcher.run(list(args or []) + list(ctx.args))
    except ExpenseTrackerError as e:
        _fail(e)

    for line in outcome.lines:
        typer.echo(line)
    raise typer.Exit(code=SUCCESS_EXIT_CODE)


@admin_app.command("hash-password")
def hash_password_command() -> None:
    """Print a hashed administrator password for the config file."""
    password = typer.prompt(
        "New administrator password",
        hide_input=True,
        confirmation_prompt=True,
    )
    typer.echo(f"EXPENSE_ADMIN_PASSWORD_HASH={hash_password(password)}")


@admin_app.command("init-db")
def init_db_command(
    path: str = typer.Argument(..., help="Database file to create or complete"),
) -> None:
    """Create the expenses and audit_log tables."""
    configure_logging(get_settings().log_level)
    try:
        create_tables(path)
    except ExpenseTrackerError as e:
        _fail(e)
    typer.echo(f"Initialized expense database at {path}")


def run() -> None:
    app(prog_name="expense")


def run_admin() -> None:
    admin_app(prog_name="expense-admin")
