"""CLI tests for the Typer entry points."""

import pytest
from typer.testing import CliRunner

from conftest import ADMIN_PASSWORD, fetch_rows, insert_expense
from expense_tracker import cli
from expense_tracker.config import ExpenseSettings
from expense_tracker.security import verify_password


runner = CliRunner()


@pytest.fixture
def as_user(monkeypatch, settings):
    """Run the CLI as a given OS user against the test settings."""
    monkeypatch.setattr(cli, "get_settings", lambda: settings)

    def _as(username: str):
        monkeypatch.setattr(cli, "resolve_os_username", lambda: username)
    _as("alice")
    return _as


def invoke(args, input=None):
    return runner.invoke(cli.app, args, input=input, prog_name="expense")


class TestExpenseCommand:

    def test_no_arguments_prints_usage(self, as_user):
        result = invoke([])
        assert result.exit_code == 0
        assert "Usage: expense [--admin] <--command> [arguments]" in result.output

    def test_help_anywhere(self, as_user, db_path):
        result = invoke(["--add", "coffee", "--help"])
        assert result.exit_code == 0
        assert "--add <Description> <Amount>" in result.output
        assert fetch_rows(db_path, "expenses") == []

    def test_add_then_list(self, as_user, db_path):
        result = invoke(["--add", "coffee", "3.50"])
        assert result.exit_code == 0
        assert "Added expense 1 for alice" in result.output

        result = invoke(["--list"])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0].split() == ["ID", "Date/Time", "User", "Description", "Amount"]
        assert lines[1].split()[0] == "1"
        assert lines[1].endswith("3.50")

    def test_negative_amount_is_passed_through(self, as_user, db_path):
        """Test that dash-prefixed values reach the dispatcher as arguments."""
        result = invoke(["--add", "refund", "-4.25"])
        assert result.exit_code == 0
        assert fetch_rows(db_path, "expenses")[0][4] == -4.25

    def test_delete_missing_succeeds(self, as_user, db_path):
        result = invoke(["--del", "42"])
        assert result.exit_code == 0
        assert "No expense 42 found for alice" in result.output
        assert len(fetch_rows(db_path, "audit_log")) == 1

    def test_oversized_delete_id_is_reported(self, as_user, db_path):
        result = invoke(["--del", "99999999999999999999"])
        assert result.exit_code == 1
        assert "Error: '99999999999999999999' is not a valid expense id" in result.output
        assert fetch_rows(db_path, "audit_log") == []

    def test_unstorable_amount_is_rejected(self, as_user, db_path):
        """Test that an overflowing amount never reaches the database."""
        result = invoke(["--add", "x", "1e999"])
        assert result.exit_code == 1
        assert "out of range" in result.output
        assert fetch_rows(db_path, "expenses") == []

        assert invoke(["--list"]).exit_code == 0

    def test_unreadable_config_is_reported(self, monkeypatch):
        """Test that a settings file without read permission fails cleanly."""
        def denied():
            raise PermissionError(13, "Permission denied", "/etc/expense-tracker/expense.env")

        monkeypatch.setattr(cli, "get_settings", denied)
        result = invoke(["--list"])
        assert result.exit_code == 1
        assert "Error: cannot read configuration" in result.output
        assert "Permission denied" in result.output

    def test_unknown_command_fails(self, as_user):
        result = invoke(["--frobnicate"])
        assert result.exit_code == 1
        assert "Error: unknown command supplied" in result.output

    def test_listusers_denied_for_user(self, as_user, db_path):
        insert_expense(db_path, "bob", "books", 20)
        result = invoke(["--listusers"])
        assert result.exit_code == 1
        assert "administrator access" in result.output

    def test_admin_listusers(self, as_user, db_path):
        as_user("root")
        insert_expense(db_path, "bob", "books", 20)
        insert_expense(db_path, "alice", "coffee", 3.5)
        result = invoke(["--admin", "--listusers"], input=f"{ADMIN_PASSWORD}\n")
        assert result.exit_code == 0
        assert result.output.splitlines()[-2:] == ["alice", "bob"]
        assert ADMIN_PASSWORD not in result.output

    def test_admin_wrong_password(self, as_user):
        result = invoke(["--admin", "--listusers"], input="guess\n")
        assert result.exit_code == 1
        assert "Error: incorrect password" in result.output

    def test_corrupt_database_dumps_contents(self, monkeypatch, tmp_path):
        bogus = tmp_path / "bogus.sqlite"
        bogus.write_text("definitely not sqlite\n")
        settings = ExpenseSettings(_env_file=None, db_path=str(bogus))
        monkeypatch.setattr(cli, "get_settings", lambda: settings)
        monkeypatch.setattr(cli, "resolve_os_username", lambda: "alice")

        result = invoke(["--list"])
        assert result.exit_code == 1
        assert "does not appear to be a valid expense database" in result.output
        assert "definitely not sqlite" in result.output


class TestAdminCommand:

    def test_hash_password(self):
        result = runner.invoke(cli.admin_app, ["hash-password"], input="pw\npw\n")
        assert result.exit_code == 0
        line = result.output.strip().splitlines()[-1]
        key, _, encoded = line.partition("=")
        assert key == "EXPENSE_ADMIN_PASSWORD_HASH"
        assert verify_password("pw", encoded)

    def test_init_db(self, monkeypatch, tmp_path):
        monkeypatch.setattr(cli, "get_settings", lambda: ExpenseSettings(_env_file=None))
        path = tmp_path / "fresh.sqlite"
        result = runner.invoke(cli.admin_app, ["init-db", str(path)])
        assert result.exit_code == 0
        assert fetch_rows(str(path), "expenses") == []
        assert fetch_rows(str(path), "audit_log") == []
