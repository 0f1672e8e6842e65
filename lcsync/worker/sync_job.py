"""
Daily sync job.

Lists today's accepted submissions, then for each one fetches the
problem description and submission details and hands the joined record
to a persister. Items are processed strictly one after another with a
fixed pause in between.
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

import httpx

from lcsync.common.config import Settings
from lcsync.common.schemas import RecentSubmission, SubmissionRecord
from lcsync.modules import leetcode_service
from lcsync.modules.leetcode_service import LeetCodeClientError
from lcsync.modules.persistence import PersistenceError, Persister

logger = logging.getLogger(__name__)


@dataclass
class SyncSummary:
    """Outcome of one run."""

    found: int = 0
    persisted: int = 0
    failures: list[tuple[str, str]] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.failures)


def build_record(
    client: httpx.Client,
    submission: RecentSubmission
) -> SubmissionRecord:
    """
    Fetch description and details for a submission and join them.

    Raises:
        LeetCodeClientError: If either lookup fails
    """
    question = leetcode_service.fetch_question_content(
        client,
        submission.title_slug
    )
    detail = leetcode_service.fetch_submission_detail(client, submission.id)
    return SubmissionRecord.build(submission, detail, question)


def sync_submission(
    client: httpx.Client,
    persister: Persister,
    submission: RecentSubmission
) -> None:
    """
    Fetch and store a single submission.

    Raises:
        LeetCodeClientError: If fetching details fails
        PersistenceError: If storing fails
    """
    record = build_record(client, submission)
    persister.persist(record)


def run_sync(
    settings: Settings,
    client: httpx.Client,
    persister: Persister,
    sleep: Callable[[float], None] = time.sleep,
    now: Optional[datetime] = None
) -> SyncSummary:
    """
    Run the sync once.

    Args:
        settings: Job settings
        client: LeetCode HTTP client
        persister: Storage backend
        sleep: Pause function, replaced in tests
        now: Reference time for "today", defaults to the current time

    Returns:
        SyncSummary: Counts and per-item failures

    Raises:
        LeetCodeClientError: If the submission list cannot be fetched
    """
    submissions = leetcode_service.get_today_accepted_submissions(
        client,
        settings.leetcode_username,
        limit=settings.submission_limit,
        now=now
    )
    summary = SyncSummary(found=len(submissions))
    logger.info(f"Solved today: {summary.found} problems")

    for index, submission in enumerate(submissions):
        if index > 0:
            sleep(settings.request_delay_seconds)

        logger.info(f"Syncing {submission.title} ({submission.id})")
        try:
            sync_submission(client, persister, submission)
        except LeetCodeClientError as e:
            logger.error(f"Failed to fetch {submission.id}: {e}")
            summary.failures.append((submission.id, str(e)))
            continue
        except PersistenceError as e:
            logger.error(f"Failed to store {submission.id}: {e}")
            summary.failures.append((submission.id, str(e)))
            continue

        summary.persisted += 1
        logger.info(f"Stored {submission.id}")

    logger.info(
        f"Sync finished: {summary.persisted} stored, "
        f"{summary.failed} failed, {summary.found} found"
    )
    return summary
