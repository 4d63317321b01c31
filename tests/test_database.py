"""Tests for the problems/progress schema and problems repository."""

import sqlite3
from datetime import date

import pytest

from lctrack.core.attempts import AttemptRating, Difficulty
from lctrack.db.database import get_db, init_db
from lctrack.db.problems_repository import (
    ProblemRecord,
    delete_problem,
    fetch_next_unattempted_problem,
    get_all_problems,
    get_problem,
    insert_problem,
    insert_problem_if_absent,
)
from lctrack.db.progress_repository import add_or_replace_progress, fetch_progress


class TestSchema:
    """Tests for schema creation."""

    def test_init_creates_both_tables(self, db_path):
        """problems and progress exist after init."""
        with get_db() as conn:
            names = {
                row["name"]
                for row in conn.execute(
                    "SELECT name FROM sqlite_master WHERE type = 'table'"
                ).fetchall()
            }
        assert {"problems", "progress"} <= names

    def test_init_is_rerunnable(self, db_path, sample_problems):
        """Running init again keeps existing rows."""
        init_db(db_path)
        assert len(get_all_problems()) == len(sample_problems)

    def test_foreign_keys_enabled(self, db_path):
        with get_db() as conn:
            assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1

    def test_difficulty_check_constraint(self, db_path):
        """Only Easy/Medium/Hard (or NULL) are accepted."""
        with pytest.raises(sqlite3.IntegrityError):
            with get_db() as conn:
                conn.execute(
                    'INSERT INTO problems (id, "order", name, difficulty) VALUES (?, ?, ?, ?)',
                    (5, 1, "Longest Palindromic Substring", "Extreme"),
                )


class TestProblemsRepository:
    """Tests for problems CRUD."""

    def test_insert_and_get(self, db_path):
        insert_problem(ProblemRecord(id=1, order=1, name="Two Sum", difficulty=Difficulty.EASY, week=1))

        problem = get_problem(1)

        assert problem is not None
        assert problem.name == "Two Sum"
        assert problem.difficulty is Difficulty.EASY
        assert problem.week == 1

    def test_optional_fields_stay_null(self, db_path):
        insert_problem(ProblemRecord(id=3, order=1, name="Longest Substring"))

        problem = get_problem(3)

        assert problem.difficulty is None
        assert problem.week is None

    def test_get_missing_returns_none(self, db_path):
        assert get_problem(999) is None

    def test_duplicate_name_rejected(self, db_path):
        """Two problems with the same name violate the UNIQUE constraint."""
        insert_problem(ProblemRecord(id=1, order=1, name="Two Sum"))

        with pytest.raises(sqlite3.IntegrityError):
            insert_problem(ProblemRecord(id=2, order=2, name="Two Sum"))

    def test_duplicate_id_rejected(self, db_path):
        insert_problem(ProblemRecord(id=1, order=1, name="Two Sum"))

        with pytest.raises(sqlite3.IntegrityError):
            insert_problem(ProblemRecord(id=1, order=2, name="Add Two Numbers"))

    def test_insert_if_absent_ignores_duplicates(self, db_path):
        problem = ProblemRecord(id=1, order=1, name="Two Sum")

        assert insert_problem_if_absent(problem) is True
        assert insert_problem_if_absent(problem) is False
        assert len(get_all_problems()) == 1

    def test_get_all_in_bank_order(self, db_path):
        insert_problem(ProblemRecord(id=10, order=2, name="B"))
        insert_problem(ProblemRecord(id=20, order=1, name="A"))

        assert [p.name for p in get_all_problems()] == ["A", "B"]

    def test_delete_missing_returns_false(self, db_path):
        assert delete_problem(999) is False


class TestProgressIntegrity:
    """Tests for the progress -> problems relationship."""

    def test_progress_for_existing_problem(self, sample_problems):
        add_or_replace_progress(1, AttemptRating.EASY, date(2025, 8, 12))

        assert fetch_progress(1) is not None

    def test_progress_for_missing_problem_fails(self, db_path):
        """Foreign key rejects progress for an unknown problem_id."""
        with pytest.raises(sqlite3.IntegrityError):
            add_or_replace_progress(999, AttemptRating.EASY, date(2025, 8, 12))

    def test_delete_problem_cascades_to_progress(self, sample_problems):
        add_or_replace_progress(1, AttemptRating.HARD, date(2025, 8, 12))

        assert delete_problem(1) is True

        assert get_problem(1) is None
        assert fetch_progress(1) is None
        with get_db() as conn:
            count = conn.execute("SELECT COUNT(*) FROM progress").fetchone()[0]
        assert count == 0


class TestNextUnattempted:
    """Tests for fetch_next_unattempted_problem."""

    def test_returns_lowest_order(self, sample_problems):
        problem = fetch_next_unattempted_problem()

        assert problem.id == 217

    def test_skips_attempted(self, sample_problems):
        add_or_replace_progress(217, AttemptRating.EASY, date(2025, 8, 12))

        assert fetch_next_unattempted_problem().id == 1

    def test_none_when_all_attempted(self, sample_problems):
        for p in sample_problems:
            add_or_replace_progress(p.id, AttemptRating.MESSY, date(2025, 8, 12))

        assert fetch_next_unattempted_problem() is None

    def test_none_when_empty(self, db_path):
        assert fetch_next_unattempted_problem() is None
