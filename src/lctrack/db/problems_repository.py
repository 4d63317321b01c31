"""Repository functions for problems table.

Provides CRUD operations for the problems table.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from lctrack.core.attempts import Difficulty
from lctrack.db.database import get_db

logger = structlog.get_logger(__name__)


@dataclass
class ProblemRecord:
    """Problem record from database."""

    id: int
    order: int
    name: str
    difficulty: Difficulty | None = None
    week: int | None = None


def insert_problem(problem: ProblemRecord) -> None:
    """Insert a new problem record.

    Args:
        problem: Problem to insert

    Raises:
        sqlite3.IntegrityError: If id or name already exists
    """
    with get_db() as conn:
        conn.execute(
            """
            INSERT INTO problems (id, "order", name, difficulty, week)
            VALUES (?, ?, ?, ?, ?)
            """,
            _to_params(problem),
        )

    logger.debug("problems.inserted", problem_id=problem.id)


def insert_problem_if_absent(problem: ProblemRecord) -> bool:
    """Insert a problem, ignoring it if the id or name already exists.

    Returns:
        True if a row was written, False if it was already present
    """
    with get_db() as conn:
        cursor = conn.execute(
            """
            INSERT OR IGNORE INTO problems (id, "order", name, difficulty, week)
            VALUES (?, ?, ?, ?, ?)
            """,
            _to_params(problem),
        )

    inserted = cursor.rowcount > 0
    if inserted:
        logger.debug("problems.inserted", problem_id=problem.id)
    return inserted


def get_problem(problem_id: int) -> ProblemRecord | None:
    """Get problem by ID.

    Returns:
        ProblemRecord if found, None otherwise
    """
    with get_db() as conn:
        row = conn.execute(
            'SELECT id, "order", name, difficulty, week FROM problems WHERE id = ?',
            (problem_id,),
        ).fetchone()

    if row is None:
        return None

    return _row_to_record(row)


def get_all_problems() -> list[ProblemRecord]:
    """Get all problems in bank order."""
    with get_db() as conn:
        rows = conn.execute(
            'SELECT id, "order", name, difficulty, week FROM problems ORDER BY "order" ASC'
        ).fetchall()

    return [_row_to_record(row) for row in rows]


def delete_problem(problem_id: int) -> bool:
    """Delete problem by ID. Its progress row is removed by cascade.

    Returns:
        True if deleted, False if not found
    """
    with get_db() as conn:
        cursor = conn.execute("DELETE FROM problems WHERE id = ?", (problem_id,))

    deleted = cursor.rowcount > 0
    if deleted:
        logger.debug("problems.deleted", problem_id=problem_id)

    return deleted


def fetch_next_unattempted_problem() -> ProblemRecord | None:
    """Get the lowest-ordered problem that has no progress row yet."""
    with get_db() as conn:
        row = conn.execute(
            """
            SELECT p.id, p."order", p.name, p.difficulty, p.week
            FROM problems p
            LEFT JOIN progress pr ON p.id = pr.problem_id
            WHERE pr.problem_id IS NULL
            ORDER BY p."order" ASC
            LIMIT 1
            """
        ).fetchone()

    if row is None:
        return None

    return _row_to_record(row)


def _to_params(problem: ProblemRecord) -> tuple:
    difficulty = problem.difficulty.value if problem.difficulty else None
    return (problem.id, problem.order, problem.name, difficulty, problem.week)


def _row_to_record(row) -> ProblemRecord:
    """Convert database row to ProblemRecord."""
    return ProblemRecord(
        id=row["id"],
        order=row["order"],
        name=row["name"],
        difficulty=Difficulty(row["difficulty"]) if row["difficulty"] else None,
        week=row["week"],
    )
