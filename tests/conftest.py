"""Shared fixtures for the expense tracker tests."""

import sqlite3
from contextlib import closing

import pytest

from expense_tracker.config import ExpenseSettings
from expense_tracker.security import hash_password
from expense_tracker.services.storage import SQLiteDatabase, create_tables


ADMIN_PASSWORD = "s3cret-admin"

# Low iteration count keeps the suite fast
ADMIN_PASSWORD_HASH = hash_password(ADMIN_PASSWORD, iterations=1000)


@pytest.fixture
def db_path(tmp_path):
    """A fresh database with the schema created."""
    path = str(tmp_path / "expenses.sqlite")
    create_tables(path)
    return path


@pytest.fixture
def settings(db_path):
    """Settings pointing at the fresh database, admin mode enabled."""
    return ExpenseSettings(
        _env_file=None,
        db_path=db_path,
        admin_password_hash=ADMIN_PASSWORD_HASH,
    )


@pytest.fixture
def database(db_path):
    with SQLiteDatabase.open(db_path) as db:
        yield db


def fetch_rows(path: str, table: str) -> list[tuple]:
    """Read a table through an independent connection."""
    order = "id" if table == "expenses" else "rowid"
    with closing(sqlite3.connect(path)) as conn:
        return conn.execute(f"SELECT * FROM {table} ORDER BY {order}").fetchall()


def insert_expense(path: str, username: str, description: str, amount: float, time: int = 1700000000) -> int:
    with closing(sqlite3.connect(path)) as conn:
        cursor = conn.execute(
            "INSERT INTO expenses (time, username, description, amount) VALUES (?, ?, ?, ?)",
            (time, username, description, amount),
        )
        conn.commit()
        return cursor.lastrowid
