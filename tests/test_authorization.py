"""Tests for the authorization gate."""

import pytest

from conftest import ADMIN_PASSWORD, ADMIN_PASSWORD_HASH
from expense_tracker.authorization import AuthorizationGate, require_admin
from expense_tracker.config import ExpenseSettings
from expense_tracker.errors import (
    ArgumentError,
    AuthenticationError,
    PermissionDeniedError,
)
from expense_tracker.models import Session


class PasswordSpy:
    """Password reader recording how often it was asked."""

    def __init__(self, answer: str):
        self.answer = answer
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        return self.answer


def make_gate(password: str = ADMIN_PASSWORD, **overrides):
    values = {"admin_password_hash": ADMIN_PASSWORD_HASH, "db_path": "default.sqlite"}
    values.update(overrides)
    spy = PasswordSpy(password)
    return AuthorizationGate(ExpenseSettings(_env_file=None, **values), spy), spy


class TestResolveSession:

    def test_plain_invocation(self):
        """Test that without --admin the caller is a normal user."""
        gate, spy = make_gate()
        session, rest = gate.resolve_session(["--list"], "alice")
        assert session == Session(acting_username="alice", admin=False, db_path="default.sqlite")
        assert rest == ["--list"]
        assert spy.calls == 0

    def test_admin_with_correct_password(self):
        """Test successful admin authentication."""
        gate, spy = make_gate()
        session, rest = gate.resolve_session(["--admin", "--listusers"], "alice")
        assert session.admin is True
        assert session.acting_username == "alice"
        assert rest == ["--listusers"]
        assert spy.calls == 1

    def test_admin_with_wrong_password(self):
        """Test that a wrong password fails the invocation without retry."""
        gate, spy = make_gate(password="guess")
        with pytest.raises(AuthenticationError, match="incorrect password"):
            gate.resolve_session(["--admin", "--listusers"], "alice")
        assert spy.calls == 1

    def test_admin_not_configured(self):
        """Test that admin mode is unavailable without a configured hash."""
        gate, spy = make_gate(admin_password_hash=None)
        with pytest.raises(AuthenticationError, match="not configured"):
            gate.resolve_session(["--admin", "--list", "bob"], "alice")
        assert spy.calls == 0

    def test_misconfigured_hash(self):
        gate, _ = make_gate(admin_password_hash="plaintext-secret")
        with pytest.raises(AuthenticationError, match="misconfigured"):
            gate.resolve_session(["--admin", "--listusers"], "alice")

    def test_oversized_password(self):
        """Test that oversized password input is an argument error."""
        gate, _ = make_gate(password="x" * 300, max_password_length=256)
        with pytest.raises(ArgumentError, match="too long"):
            gate.resolve_session(["--admin", "--listusers"], "alice")

    def test_admin_db_override(self):
        """Test that an admin may point the session at another database."""
        gate, _ = make_gate()
        session, rest = gate.resolve_session(
            ["--admin", "--db", "/tmp/other.sqlite", "--list", "bob"], "alice"
        )
        assert session.db_path == "/tmp/other.sqlite"
        assert rest == ["--list", "bob"]

    def test_db_override_denied_for_non_admin(self):
        """Test that --db requires admin mode."""
        gate, _ = make_gate()
        with pytest.raises(PermissionDeniedError, match="--db"):
            gate.resolve_session(["--db", "/tmp/other.sqlite", "--list"], "alice")

    def test_db_without_path(self):
        gate, _ = make_gate()
        with pytest.raises(ArgumentError, match="--db"):
            gate.resolve_session(["--admin", "--db"], "alice")

    def test_admin_flag_only_recognized_first(self):
        """Test that --admin later in the argument list grants nothing."""
        gate, spy = make_gate()
        session, rest = gate.resolve_session(["--list", "--admin"], "alice")
        assert session.admin is False
        assert rest == ["--list", "--admin"]
        assert spy.calls == 0


class TestRequireAdmin:

    def test_allows_admin(self):
        require_admin(Session(acting_username="root", admin=True), "nope")

    def test_denies_user(self):
        with pytest.raises(PermissionDeniedError, match="nope"):
            require_admin(Session(acting_username="alice"), "nope")
