"""Problem bank loader.

A problem bank is a JSON array in the bank directory (default static/):

    [
        {"id": 1, "order": 1, "name": "Two Sum", "difficulty": "Easy",
         "week": 1, "url": "https://leetcode.com/problems/two-sum/"},
        ...
    ]

"id" may be omitted, in which case it is resolved from "url" through the
GraphQL ID resolver. Population uses INSERT OR IGNORE, so re-running a
build against the same bank is harmless.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

import structlog

from lctrack.core.attempts import Difficulty
from lctrack.core.id_resolver import (
    IdResolutionError,
    parse_question_id,
    resolve_question_id,
)
from lctrack.db.problems_repository import ProblemRecord, insert_problem_if_absent

logger = structlog.get_logger(__name__)

DEFAULT_BANK_DIR = Path("static")

Resolver = Callable[[str], str | None]


class ProblemBankError(Exception):
    """Error loading or validating a problem bank."""

    pass


def _as_int(data: dict[str, Any], key: str) -> int | None:
    # JSON booleans and floats are not valid integer fields
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key!r} must be an integer, got {value!r}")
    return value


@dataclass
class ProblemBankEntry:
    """A single problem as listed in a bank file."""

    order: int
    name: str
    url: str
    id: int | None = None
    difficulty: Difficulty | None = None
    week: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProblemBankEntry:
        """Build an entry from a JSON object.

        Raises:
            ProblemBankError: If required fields are missing or invalid
        """
        if not isinstance(data, dict):
            raise ProblemBankError(f"Bank entry must be an object, got {type(data).__name__}")

        missing = [k for k in ("order", "name", "url") if data.get(k) is None]
        if missing:
            raise ProblemBankError(
                f"Bank entry {data.get('name', '?')!r} missing fields: {', '.join(missing)}"
            )

        difficulty = data.get("difficulty")
        try:
            return cls(
                order=_as_int(data, "order"),
                name=str(data["name"]),
                url=str(data["url"]),
                id=_as_int(data, "id"),
                difficulty=Difficulty(difficulty) if difficulty else None,
                week=_as_int(data, "week"),
            )
        except (TypeError, ValueError) as e:
            raise ProblemBankError(f"Invalid bank entry {data['name']!r}: {e}") from e

    def get_id(self, resolver: Resolver | None = None) -> int:
        """Return the problem ID, resolving it from the URL if absent.

        Raises:
            IdResolutionError: If the ID cannot be resolved
        """
        if self.id is not None:
            return self.id
        resolve = resolver or resolve_question_id
        return parse_question_id(resolve(self.url), self.url)

    def to_problem(self, resolver: Resolver | None = None) -> ProblemRecord:
        """Convert to a ProblemRecord ready for insertion."""
        return ProblemRecord(
            id=self.get_id(resolver),
            order=self.order,
            name=self.name,
            difficulty=self.difficulty,
            week=self.week,
        )


@dataclass
class PopulateResult:
    """Result of populating the problems table from a bank."""

    bank_name: str
    loaded: int = 0
    inserted: int = 0
    already_present: int = 0
    skipped: list[str] = field(default_factory=list)


def load_problems(bank_name: str, bank_dir: Path | None = None) -> list[ProblemBankEntry]:
    """Load bank entries from {bank_dir}/{bank_name}.

    Raises:
        ProblemBankError: If the file is missing or malformed
    """
    path = (bank_dir or DEFAULT_BANK_DIR) / bank_name

    if not path.exists():
        raise ProblemBankError(f"Problem bank not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ProblemBankError(f"Invalid JSON in {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ProblemBankError(f"Cannot read problem bank {path}: {e}") from e

    if not isinstance(data, list):
        raise ProblemBankError(f"Problem bank {path} must be a JSON array")

    entries = [ProblemBankEntry.from_dict(item) for item in data]
    logger.debug("bank.loaded", path=str(path), count=len(entries))
    return entries


def populate_problem_bank(
    bank_name: str,
    bank_dir: Path | None = None,
    resolver: Resolver | None = None,
) -> PopulateResult:
    """Load a bank and insert its problems into the database.

    Entries whose ID cannot be resolved are skipped and reported.

    Raises:
        ProblemBankError: If the bank cannot be loaded
    """
    entries = load_problems(bank_name, bank_dir)
    result = PopulateResult(bank_name=bank_name, loaded=len(entries))

    for entry in entries:
        try:
            problem = entry.to_problem(resolver)
        except IdResolutionError as e:
            logger.warning("bank.entry_skipped", name=entry.name, error=str(e))
            result.skipped.append(entry.name)
            continue

        if insert_problem_if_absent(problem):
            result.inserted += 1
        else:
            result.already_present += 1

    logger.info(
        "bank.populated",
        bank=bank_name,
        inserted=result.inserted,
        already_present=result.already_present,
        skipped=len(result.skipped),
    )
    return result
