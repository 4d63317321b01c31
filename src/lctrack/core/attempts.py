"""Attempt lifecycle for tracked problems.

A problem has at most one ProgressRecord. It is created on the first
attempt and overwritten on each later one, with the counter incremented.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum

# Fixed review interval until a real schedule exists
REVIEW_INTERVAL_DAYS = 1


class Difficulty(str, Enum):
    """LeetCode difficulty label."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class AttemptRating(str, Enum):
    """Self-assessed quality of an attempt."""

    EASY = "Easy"
    HARD = "Hard"
    MESSY = "Messy"
    LONG_FAIL = "LongFail"
    SHORT_FAIL = "ShortFail"

    @classmethod
    def from_score(cls, score: int) -> AttemptRating:
        """Map the 1-5 CLI score to a rating.

        1=ShortFail, 2=LongFail, 3=Messy, 4=Hard, 5=Easy

        Raises:
            ValueError: If score is outside 1..5
        """
        try:
            return _SCORES[score]
        except KeyError:
            raise ValueError(f"Rating must be between 1 and 5, got {score}") from None


_SCORES = {
    1: AttemptRating.SHORT_FAIL,
    2: AttemptRating.LONG_FAIL,
    3: AttemptRating.MESSY,
    4: AttemptRating.HARD,
    5: AttemptRating.EASY,
}


def next_interval(rating: AttemptRating, number_of_attempts: int) -> timedelta | None:
    """Days until the next review. Fixed for now, whatever the rating."""
    return timedelta(days=REVIEW_INTERVAL_DAYS)


@dataclass
class ProgressRecord:
    """Progress summary for a single problem."""

    problem_id: int
    last_attempted: date
    attempt_rating: AttemptRating
    next_attempt_date: date | None
    number_of_attempts: int

    @classmethod
    def new_attempt(
        cls,
        problem_id: int,
        rating: AttemptRating,
        attempt_date: date | None = None,
    ) -> ProgressRecord:
        """Build the record for a first attempt (today if no date given)."""
        last_attempted = attempt_date or date.today()
        interval = next_interval(rating, 0)

        return cls(
            problem_id=problem_id,
            last_attempted=last_attempted,
            attempt_rating=rating,
            next_attempt_date=last_attempted + interval if interval else None,
            number_of_attempts=1,
        )

    def update_attempt(
        self,
        rating: AttemptRating,
        attempt_date: date | None = None,
    ) -> None:
        """Apply a later attempt in place."""
        self.attempt_rating = rating
        self.number_of_attempts += 1
        self.last_attempted = attempt_date or date.today()

        interval = next_interval(rating, self.number_of_attempts)
        self.next_attempt_date = self.last_attempted + interval if interval else None
