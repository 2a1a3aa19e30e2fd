"""
Creates the database schema (tables) if they do not already exist.

The expense command never creates a database on its own; an
administrator initializes one with:
    expense-admin init-db PATH
"""

import sqlite3
from contextlib import closing

from expense_tracker.errors import StorageOpenError
from expense_tracker.utils.logger import get_logger


logger = get_logger(__name__)

SCHEMA_SQL = """
-- Expenses table: one row per expense, owned by a username
CREATE TABLE IF NOT EXISTS expenses (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    time            INTEGER NOT NULL,
    username        TEXT NOT NULL,
    description     TEXT NOT NULL,
    amount          REAL NOT NULL
);

-- Audit log: append-only record of every add and delete
CREATE TABLE IF NOT EXISTS audit_log (
    time            INTEGER NOT NULL,
    admin           INTEGER NOT NULL,
    username        TEXT NOT NULL,
    command         TEXT NOT NULL,
    arguments       TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_expenses_username ON expenses(username);
"""


def create_tables(path: str) -> None:
    """
    Execute the schema SQL against the database at `path`, creating the
    file if needed. Safe to call multiple times (uses IF NOT EXISTS).
    """
    try:
        with closing(sqlite3.connect(path)) as conn:
            conn.executescript(SCHEMA_SQL)
            conn.commit()
    except sqlite3.Error as e:
        logger.error("schema_init_failed", path=path, error=str(e))
        raise StorageOpenError(f"cannot initialize database {path}: {e}")
    logger.info("schema_initialized", path=path)
