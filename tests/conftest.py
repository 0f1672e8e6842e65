"""
Shared fixtures: a scripted LeetCode GraphQL endpoint and job settings.
"""

import json
from datetime import datetime, timezone
from typing import Any, Optional

import httpx
import pytest
from sqlalchemy import create_engine

from lcsync.common.config import Settings
from lcsync.common.models import Base

NOW = datetime(2026, 10, 19, 15, 0, tzinfo=timezone.utc)

SETTINGS_ENV = [
    "LEETCODE_USERNAME",
    "LEETCODE_SESSION",
    "LEETCODE_GRAPHQL_URL",
    "PERSISTENCE_BACKEND",
    "DATABASE_URL",
    "SUPABASE_URL",
    "SUPABASE_SECRET_KEY",
    "SUBMISSION_LIMIT",
    "REQUEST_DELAY_SECONDS",
    "REQUEST_TIMEOUT_SECONDS",
    "SENTRY_DSN",
    "DEBUG",
]


def epoch(*args: int) -> str:
    """Epoch seconds of a UTC wall-clock time, as LeetCode sends them."""
    return str(int(datetime(*args, tzinfo=timezone.utc).timestamp()))


class FakeLeetCode:
    """
    Callable for httpx.MockTransport answering the three GraphQL queries.

    Unknown submission ids and slugs answer with null payloads, like
    LeetCode does. `raw_content` overrides the response body for a slug.
    """

    def __init__(self):
        self.submissions: list[dict[str, Any]] = []
        self.details: dict[str, dict[str, Any]] = {}
        self.contents: dict[str, str] = {}
        self.raw_content: dict[str, bytes] = {}
        self.list_status = 200
        self.requests: list[dict[str, Any]] = []

    def add(
        self,
        submission_id: str,
        slug: str,
        timestamp: str,
        title: Optional[str] = None,
        code: str = "class Solution {};",
        lang: str = "C++",
        content: str = "<p>statement</p>",
    ) -> None:
        self.submissions.append({
            "id": submission_id,
            "title": title or slug.replace("-", " ").title(),
            "titleSlug": slug,
            "timestamp": timestamp,
        })
        self.details[submission_id] = {
            "code": code,
            "statusCode": 10,
            "lang": {"name": lang.lower(), "verboseName": lang},
        }
        self.contents.setdefault(slug, content)

    def calls(self, operation: str) -> list[dict[str, Any]]:
        return [r["variables"] for r in self.requests if operation in r["query"]]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append(body)
        query, variables = body["query"], body["variables"]

        if "recentAcSubmissionList" in query:
            if self.list_status != 200:
                return httpx.Response(self.list_status, text="unavailable")
            items = self.submissions[:variables["limit"]]
            return httpx.Response(
                200, json={"data": {"recentAcSubmissionList": items}}
            )

        if "submissionDetails" in query:
            detail = self.details.get(str(variables["submissionId"]))
            return httpx.Response(
                200, json={"data": {"submissionDetails": detail}}
            )

        if "question(" in query:
            slug = variables["titleSlug"]
            if slug in self.raw_content:
                return httpx.Response(200, content=self.raw_content[slug])
            content = self.contents.get(slug)
            question = {"content": content} if content is not None else None
            return httpx.Response(200, json={"data": {"question": question}})

        return httpx.Response(400, json={"errors": [{"message": "bad query"}]})


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_leetcode():
    return FakeLeetCode()


@pytest.fixture
def leetcode_client(fake_leetcode):
    client = httpx.Client(
        base_url="https://leetcode.com/graphql",
        transport=httpx.MockTransport(fake_leetcode),
    )
    yield client
    client.close()


@pytest.fixture
def settings():
    return Settings(
        leetcode_username="alice",
        leetcode_session="session-token",
        request_delay_seconds=1.0,
    )


@pytest.fixture
def engine():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()
