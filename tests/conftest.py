"""Shared fixtures for lctrack tests.

Every test gets its own SQLite file under tmp_path; nothing touches
the default lc_tracking.db.
"""

import json
from pathlib import Path

import httpx
import pytest

from lctrack.config.app_config import clear_config_cache
from lctrack.core.attempts import Difficulty
from lctrack.db.database import init_db
from lctrack.db.problems_repository import ProblemRecord, insert_problem


@pytest.fixture(autouse=True)
def _reset_config_cache():
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def db_path(tmp_path):
    """Initialize an isolated test database."""
    path = tmp_path / "db" / "lc_tracking.db"
    init_db(path)
    return path


@pytest.fixture
def sample_problems(db_path):
    """Insert three problems in bank order."""
    problems = [
        ProblemRecord(id=217, order=1, name="Contains Duplicate", difficulty=Difficulty.EASY, week=1),
        ProblemRecord(id=1, order=2, name="Two Sum", difficulty=Difficulty.EASY, week=1),
        ProblemRecord(id=42, order=3, name="Trapping Rain Water", difficulty=Difficulty.HARD),
    ]
    for p in problems:
        insert_problem(p)
    return problems


@pytest.fixture
def graphql_ids():
    """Slug -> questionId served by the mock endpoint."""
    return {
        "two-sum": "1",
        "contains-duplicate": "217",
        "trapping-rain-water": "42",
    }


@pytest.fixture
def graphql_requests():
    """Requests seen by the mock endpoint, as decoded JSON bodies."""
    return []


@pytest.fixture
def graphql_client(graphql_ids, graphql_requests):
    """httpx client backed by a fake LeetCode GraphQL endpoint."""

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        graphql_requests.append(body)
        slug = body["variables"]["titleSlug"]
        question_id = graphql_ids.get(slug)
        question = {"questionId": question_id} if question_id else None
        return httpx.Response(200, json={"data": {"question": question}})

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        yield client


@pytest.fixture
def bank_dir(tmp_path):
    """Directory with a small problem bank; one entry lacks an id."""
    directory = tmp_path / "static"
    directory.mkdir()
    bank = [
        {
            "id": 217,
            "order": 1,
            "name": "Contains Duplicate",
            "difficulty": "Easy",
            "week": 1,
            "url": "https://leetcode.com/problems/contains-duplicate/",
        },
        {
            "order": 2,
            "name": "Two Sum",
            "difficulty": "Easy",
            "week": 1,
            "url": "https://leetcode.com/problems/two-sum/",
        },
        {
            "id": 42,
            "order": 3,
            "name": "Trapping Rain Water",
            "difficulty": "Hard",
            "url": "https://leetcode.com/problems/trapping-rain-water/",
        },
    ]
    (directory / "bank.json").write_text(json.dumps(bank), encoding="utf-8")
    return directory
