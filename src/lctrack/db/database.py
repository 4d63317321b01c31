"""SQLite database connection and schema management.

Provides connection management and schema initialization for the
problems/progress tables.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

import structlog

logger = structlog.get_logger(__name__)

# Default database location
DEFAULT_DB_PATH = Path("lc_tracking.db")

# Active database path, set by init_db
_db_path: Path | None = None

SCHEMA_SQL = """
-- Static problem definitions, populated from a problem bank file.
-- id is the LeetCode problem ID.
CREATE TABLE IF NOT EXISTS problems (
    id INTEGER PRIMARY KEY,
    "order" INTEGER NOT NULL,
    name TEXT NOT NULL UNIQUE,
    difficulty TEXT CHECK(difficulty IN ('Easy', 'Medium', 'Hard')),
    week INTEGER
);

-- One progress row per problem; problem_id is both PK and FK.
CREATE TABLE IF NOT EXISTS progress (
    problem_id INTEGER PRIMARY KEY,
    last_attempted TEXT NOT NULL,
    attempt_rating TEXT NOT NULL,
    next_attempt_date TEXT,
    number_of_attempts INTEGER NOT NULL,
    FOREIGN KEY (problem_id) REFERENCES problems(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_problems_order ON problems("order");
"""


def init_db(db_path: Path | None = None) -> None:
    """Initialize database with schema.

    Creates the database file and both tables if they don't exist.

    Args:
        db_path: Path to database file. Defaults to lc_tracking.db
    """
    global _db_path
    _db_path = db_path or DEFAULT_DB_PATH

    with get_db() as conn:
        conn.executescript(SCHEMA_SQL)

    logger.debug("database.initialized", path=str(_db_path))


@contextmanager
def get_db() -> Generator[sqlite3.Connection, None, None]:
    """Get database connection as context manager.

    Yields:
        SQLite connection with row factory set to sqlite3.Row and
        foreign key enforcement enabled.

    Example:
        with get_db() as conn:
            rows = conn.execute("SELECT * FROM problems").fetchall()
    """
    db_path = _db_path or DEFAULT_DB_PATH

    # Ensure directory exists
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")

    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()
