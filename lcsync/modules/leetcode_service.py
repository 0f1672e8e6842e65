"""
LeetCode GraphQL client.

Plain functions over an httpx.Client created by create_leetcode_client().
Every failure talking to LeetCode (network, HTTP status, GraphQL errors,
unexpected payload shape) surfaces as LeetCodeClientError.
"""

import logging
from datetime import date, datetime, timezone
from typing import Any, Iterable, Optional

import httpx
from pydantic import ValidationError

from lcsync.common.config import Settings
from lcsync.common.schemas import (
    QuestionContent,
    RecentSubmission,
    SubmissionDetail,
)

logger = logging.getLogger(__name__)

RECENT_AC_SUBMISSIONS_QUERY = """
query recentAcSubmissions($username: String!, $limit: Int!) {
  recentAcSubmissionList(username: $username, limit: $limit) {
    id
    title
    titleSlug
    timestamp
  }
}
"""

SUBMISSION_DETAILS_QUERY = """
query submissionDetails($submissionId: Int!) {
  submissionDetails(submissionId: $submissionId) {
    code
    statusCode
    lang {
      name
      verboseName
    }
  }
}
"""

QUESTION_CONTENT_QUERY = """
query questionContent($titleSlug: String!) {
  question(titleSlug: $titleSlug) {
    content
  }
}
"""


class LeetCodeClientError(Exception):
    """Custom error for LeetCode client issues."""

    pass


def create_leetcode_client(settings: Settings) -> httpx.Client:
    """
    Build the HTTP client used for every LeetCode request.

    The session token travels as the LEETCODE_SESSION cookie.

    Args:
        settings: Job settings

    Returns:
        httpx.Client: Client bound to the GraphQL endpoint
    """
    return httpx.Client(
        base_url=settings.leetcode_graphql_url,
        headers={
            "Content-Type": "application/json",
            "Cookie": f"LEETCODE_SESSION={settings.leetcode_session}",
        },
        timeout=settings.request_timeout_seconds,
    )


def _graphql_request(
    client: httpx.Client,
    query: str,
    variables: Optional[dict[str, Any]] = None
) -> dict[str, Any]:
    """
    Send a GraphQL request to LeetCode and return the 'data' field.

    Raises:
        LeetCodeClientError: If the request cannot be sent, the HTTP status
            is not 200, the body is not JSON, or GraphQL returns an error
            object.
    """
    payload = {"query": query, "variables": variables or {}}

    try:
        resp = client.post("", json=payload)
    except httpx.HTTPError as e:
        raise LeetCodeClientError(
            f"Network error talking to LeetCode: {e}"
        ) from e

    if resp.status_code != 200:
        raise LeetCodeClientError(
            f"LeetCode GraphQL returned {resp.status_code}: {resp.text[:200]}"
        )

    try:
        body = resp.json()
    except ValueError as e:
        raise LeetCodeClientError(
            f"LeetCode returned a non-JSON body: {resp.text[:200]}"
        ) from e

    if not isinstance(body, dict):
        raise LeetCodeClientError(f"Unexpected GraphQL response: {body!r}")
    if body.get("errors"):
        raise LeetCodeClientError(f"LeetCode GraphQL error: {body['errors']}")

    data = body.get("data")
    if not isinstance(data, dict):
        raise LeetCodeClientError("LeetCode GraphQL response has no data")
    return data


def fetch_recent_ac_submissions(
    client: httpx.Client,
    username: str,
    limit: int = 50
) -> list[RecentSubmission]:
    """
    Fetch recent ACCEPTED submissions for a LeetCode username.

    Uses LeetCode's 'recentAcSubmissionList', which only returns AC
    submissions, most recent first. There is no pagination: anything
    beyond `limit` is never seen.

    Args:
        client: LeetCode HTTP client
        username: LeetCode username
        limit: Maximum number of submissions to request

    Returns:
        list: At most `limit` submissions in the order LeetCode returns them

    Raises:
        LeetCodeClientError: If the request fails or the list is malformed
    """
    data = _graphql_request(
        client,
        RECENT_AC_SUBMISSIONS_QUERY,
        {"username": username, "limit": limit}
    )
    raw = data.get("recentAcSubmissionList")
    if raw is None:
        raise LeetCodeClientError(
            f"No submission list returned for user {username!r}"
        )

    try:
        submissions = [RecentSubmission.model_validate(s) for s in raw]
    except (ValidationError, TypeError) as e:
        raise LeetCodeClientError(f"Malformed submission list: {e}") from e

    return submissions[:limit]


def filter_submissions_on_day(
    submissions: Iterable[RecentSubmission],
    day: date
) -> list[RecentSubmission]:
    """Keep submissions whose UTC acceptance date is `day`, order preserved."""
    return [s for s in submissions if s.submitted_at.date() == day]


def get_today_accepted_submissions(
    client: httpx.Client,
    username: str,
    limit: int = 50,
    now: Optional[datetime] = None
) -> list[RecentSubmission]:
    """
    Return the user's accepted submissions from the current UTC day.

    Args:
        client: LeetCode HTTP client
        username: LeetCode username
        limit: How many recent submissions LeetCode is asked for
        now: Reference time, defaults to the current time

    Returns:
        list: Submissions accepted today (UTC)
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    today = now.astimezone(timezone.utc).date()

    submissions = fetch_recent_ac_submissions(client, username, limit)
    todays = filter_submissions_on_day(submissions, today)
    logger.debug(
        f"{len(todays)} of {len(submissions)} recent submissions "
        f"were accepted on {today.isoformat()}"
    )
    return todays


def fetch_submission_detail(
    client: httpx.Client,
    submission_id: str
) -> SubmissionDetail:
    """
    Fetch code, language and status of a submission.

    The session cookie must belong to the submission's author; LeetCode
    returns a null submissionDetails otherwise.

    Raises:
        LeetCodeClientError: If the request fails or no details come back
    """
    try:
        variables = {"submissionId": int(submission_id)}
    except ValueError as e:
        raise LeetCodeClientError(
            f"Invalid submission id {submission_id!r}"
        ) from e

    data = _graphql_request(client, SUBMISSION_DETAILS_QUERY, variables)
    raw = data.get("submissionDetails")
    if not raw:
        raise LeetCodeClientError(
            f"No details returned for submission {submission_id}"
        )

    try:
        return SubmissionDetail.model_validate(raw)
    except ValidationError as e:
        raise LeetCodeClientError(
            f"Malformed details for submission {submission_id}: {e}"
        ) from e


def fetch_submission_code(client: httpx.Client, submission_id: str) -> str:
    """Return the exact source text of a submission."""
    return fetch_submission_detail(client, submission_id).code


def fetch_question_content(
    client: httpx.Client,
    title_slug: str
) -> QuestionContent:
    """
    Fetch the problem statement for a slug.

    Content is LeetCode's HTML, returned untouched.

    Raises:
        LeetCodeClientError: If the request fails or the question is missing
    """
    data = _graphql_request(
        client,
        QUESTION_CONTENT_QUERY,
        {"titleSlug": title_slug}
    )
    raw = data.get("question")
    if not raw:
        raise LeetCodeClientError(f"No question data for slug={title_slug!r}")

    try:
        return QuestionContent.model_validate(raw)
    except ValidationError as e:
        raise LeetCodeClientError(
            f"Malformed question data for slug={title_slug!r}: {e}"
        ) from e
