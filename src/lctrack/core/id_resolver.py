"""Resolve a LeetCode problem URL to its numeric question ID.

The slug (last path segment of the URL) is sent in a single GraphQL query;
the ID is read from data.question.questionId. Failures yield None rather
than an exception, so callers print an empty result.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import urlsplit

import httpx
import structlog

from lctrack.config.app_config import DEFAULT_GRAPHQL_URL

logger = structlog.get_logger(__name__)

QUESTION_ID_QUERY = (
    "query questionTitle($titleSlug: String!) "
    "{ question(titleSlug: $titleSlug) { questionId } }"
)


class IdResolutionError(Exception):
    """Raised when a problem ID is required but could not be resolved."""

    pass


def extract_slug(url: str) -> str:
    """Return the final non-empty path segment of a problem URL.

    Example:
        https://leetcode.com/problems/two-sum/ -> two-sum
    """
    path = urlsplit(url.strip()).path
    segments = [s for s in path.split("/") if s]
    return segments[-1] if segments else ""


def build_query_payload(slug: str) -> dict[str, Any]:
    """Build the JSON body for the questionId lookup."""
    return {"query": QUESTION_ID_QUERY, "variables": {"titleSlug": slug}}


def _extract_question_id(body: Any) -> str | None:
    try:
        question_id = body["data"]["question"]["questionId"]
    except (KeyError, TypeError):
        return None
    if question_id is None:
        return None
    return str(question_id)


def resolve_question_id(
    url: str,
    client: httpx.Client | None = None,
    endpoint: str | None = None,
) -> str | None:
    """Look up the question ID for a problem URL.

    Args:
        url: Problem URL (or bare slug)
        client: Optional httpx client; a short-lived one is created if omitted
        endpoint: GraphQL endpoint (default: leetcode.com/graphql)

    Returns:
        The questionId as a string, or None if it could not be resolved
    """
    slug = extract_slug(url)
    if not slug:
        logger.warning("resolver.empty_slug", url=url)
        return None

    endpoint = endpoint or DEFAULT_GRAPHQL_URL
    payload = build_query_payload(slug)

    try:
        if client is None:
            with httpx.Client() as own_client:
                response = own_client.post(endpoint, json=payload)
        else:
            response = client.post(endpoint, json=payload)
        response.raise_for_status()
        body = response.json()
    except httpx.HTTPError as e:
        logger.warning("resolver.lookup_failed", slug=slug, error=str(e))
        return None
    except ValueError as e:
        logger.warning("resolver.invalid_json", slug=slug, error=str(e))
        return None

    question_id = _extract_question_id(body)
    if question_id is None:
        logger.warning("resolver.question_not_found", slug=slug)
    else:
        logger.debug("resolver.resolved", slug=slug, question_id=question_id)
    return question_id


def parse_question_id(value: str | None, url: str = "") -> int:
    """Convert a resolved question ID to int.

    Raises:
        IdResolutionError: If value is missing or not numeric
    """
    if not value:
        raise IdResolutionError(f"Could not resolve problem ID for '{url}'")
    try:
        return int(value.strip())
    except ValueError:
        raise IdResolutionError(
            f"Resolved ID '{value.strip()}' for '{url}' is not a number"
        ) from None
