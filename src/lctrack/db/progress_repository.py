"""Repository functions for progress table."""

from __future__ import annotations

from datetime import date

import structlog

from lctrack.core.attempts import AttemptRating, ProgressRecord
from lctrack.db.database import get_db

logger = structlog.get_logger(__name__)


class ProgressNotFoundError(Exception):
    """Raised when updating a problem that has no attempts yet."""

    def __init__(self, problem_id: int):
        self.problem_id = problem_id
        super().__init__(
            f"No progress logged for problem {problem_id} yet; "
            "log a first attempt instead"
        )


def fetch_progress(problem_id: int) -> ProgressRecord | None:
    """Get the progress record for a problem.

    Returns:
        ProgressRecord if the problem has been attempted, None otherwise
    """
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM progress WHERE problem_id = ?", (problem_id,)
        ).fetchone()

    if row is None:
        return None

    return _row_to_record(row)


def add_or_replace_progress(
    problem_id: int,
    rating: AttemptRating,
    attempt_date: date | None = None,
) -> ProgressRecord:
    """Write a first-attempt record, replacing any existing row.

    Args:
        problem_id: LeetCode ID of the problem
        rating: Rating of this attempt
        attempt_date: Date of the attempt (default: today)

    Raises:
        sqlite3.IntegrityError: If the problem does not exist
    """
    record = ProgressRecord.new_attempt(problem_id, rating, attempt_date)

    with get_db() as conn:
        conn.execute(
            """
            INSERT OR REPLACE INTO progress (
                problem_id, last_attempted, attempt_rating,
                next_attempt_date, number_of_attempts
            ) VALUES (?, ?, ?, ?, ?)
            """,
            _to_params(record),
        )

    logger.debug("progress.added", problem_id=problem_id, rating=rating.value)
    return record


def update_progress(
    problem_id: int,
    rating: AttemptRating,
    attempt_date: date | None = None,
) -> ProgressRecord:
    """Apply a new attempt to an existing progress record.

    Raises:
        ProgressNotFoundError: If the problem has no progress yet
    """
    record = fetch_progress(problem_id)
    if record is None:
        raise ProgressNotFoundError(problem_id)

    record.update_attempt(rating, attempt_date)

    with get_db() as conn:
        conn.execute(
            """
            UPDATE progress SET
                last_attempted = ?,
                attempt_rating = ?,
                next_attempt_date = ?,
                number_of_attempts = ?
            WHERE problem_id = ?
            """,
            (
                record.last_attempted.isoformat(),
                record.attempt_rating.value,
                record.next_attempt_date.isoformat() if record.next_attempt_date else None,
                record.number_of_attempts,
                record.problem_id,
            ),
        )

    logger.debug(
        "progress.updated",
        problem_id=problem_id,
        rating=rating.value,
        attempts=record.number_of_attempts,
    )
    return record


def record_attempt(
    problem_id: int,
    rating: AttemptRating,
    attempt_date: date | None = None,
) -> ProgressRecord:
    """Log an attempt: update existing progress or create the first record."""
    if fetch_progress(problem_id) is not None:
        return update_progress(problem_id, rating, attempt_date)
    return add_or_replace_progress(problem_id, rating, attempt_date)


def _to_params(record: ProgressRecord) -> tuple:
    return (
        record.problem_id,
        record.last_attempted.isoformat(),
        record.attempt_rating.value,
        record.next_attempt_date.isoformat() if record.next_attempt_date else None,
        record.number_of_attempts,
    )


def _row_to_record(row) -> ProgressRecord:
    """Convert database row to ProgressRecord."""
    next_date = row["next_attempt_date"]
    return ProgressRecord(
        problem_id=row["problem_id"],
        last_attempted=date.fromisoformat(row["last_attempted"]),
        attempt_rating=AttemptRating(row["attempt_rating"]),
        next_attempt_date=date.fromisoformat(next_date) if next_date else None,
        number_of_attempts=row["number_of_attempts"],
    )
