"""
Persistence backends for synced submissions.

Both backends implement the same capability: upsert the question by slug,
then insert the submission. A failure on either step raises
PersistenceError for that record only.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from lcsync.common.config import ConfigurationError, Settings
from lcsync.common.db import (
    check_connection,
    create_engine_from_url,
    create_session_factory,
)
from lcsync.common.models import LeetCodeQuestion, LeetCodeSubmission
from lcsync.common.schemas import SubmissionRecord

logger = logging.getLogger(__name__)

QUESTIONS_TABLE = "leetcode_questions"
SUBMISSIONS_TABLE = "leetcode_submissions"


class PersistenceError(Exception):
    """Raised when a record cannot be stored."""

    pass


class Persister(ABC):
    """Stores one SubmissionRecord at a time."""

    @abstractmethod
    def persist(self, record: SubmissionRecord) -> None:
        """
        Upsert the record's question and insert the submission.

        Raises:
            PersistenceError: If either write fails
        """

    def close(self) -> None:
        pass

    def __enter__(self) -> "Persister":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class DirectPersister(Persister):
    """
    Writes through a SQLAlchemy session held open for the whole run.

    The question upsert and the submission insert commit together. A
    re-observed slug gets its title and description replaced, the same
    columns the gateway's merge-duplicates upsert overwrites.
    """

    def __init__(self, engine: Engine, dispose_engine: bool = False):
        self.engine = engine
        self.dispose_engine = dispose_engine
        self.session = create_session_factory(engine)()

    def _question_upsert(self, record: SubmissionRecord):
        if self.engine.dialect.name == "sqlite":
            insert = sqlite.insert
        else:
            insert = postgresql.insert

        stmt = insert(LeetCodeQuestion).values(
            slug=record.question_slug,
            title=record.title,
            description=record.description,
        )
        return stmt.on_conflict_do_update(
            index_elements=["slug"],
            set_={
                "title": stmt.excluded.title,
                "description": stmt.excluded.description,
            },
        )

    def persist(self, record: SubmissionRecord) -> None:
        try:
            self.session.execute(self._question_upsert(record))
            self.session.add(
                LeetCodeSubmission(
                    submission_id=record.submission_id,
                    question_slug=record.question_slug,
                    title=record.title,
                    submitted_at=record.submitted_at,
                    language=record.language,
                    status=record.status,
                    code=record.code,
                    description=record.description,
                )
            )
            self.session.commit()
        except (SQLAlchemyError, ValueError) as e:
            # psycopg2 raises a bare ValueError for NUL bytes in strings
            self.session.rollback()
            raise PersistenceError(
                f"Database write failed for submission "
                f"{record.submission_id}: {e}"
            ) from e

    def close(self) -> None:
        self.session.close()
        if self.dispose_engine:
            self.engine.dispose()


class GatewayPersister(Persister):
    """
    Writes through the Supabase PostgREST API.

    The question upsert relies on PostgREST's merge-duplicates resolution
    on the slug column.
    """

    def __init__(
        self,
        rest_url: str,
        secret_key: str,
        client: Optional[httpx.Client] = None,
        timeout: float = 30.0
    ):
        self.rest_url = rest_url.rstrip("/")
        self.headers = {
            "apikey": secret_key,
            "Authorization": f"Bearer {secret_key}",
            "Content-Type": "application/json",
        }
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=timeout)

    def _post(
        self,
        table: str,
        row: dict[str, Any],
        prefer: str,
        params: Optional[dict[str, str]] = None
    ) -> None:
        try:
            response = self.client.post(
                f"{self.rest_url}/{table}",
                headers={**self.headers, "Prefer": prefer},
                params=params,
                json=row,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise PersistenceError(
                f"{table} returned {e.response.status_code}: "
                f"{e.response.text[:200]}"
            ) from e
        except httpx.HTTPError as e:
            raise PersistenceError(f"Request to {table} failed: {e}") from e

    def persist(self, record: SubmissionRecord) -> None:
        self._post(
            QUESTIONS_TABLE,
            {
                "slug": record.question_slug,
                "title": record.title,
                "description": record.description,
            },
            prefer="resolution=merge-duplicates,return=minimal",
            params={"on_conflict": "slug"},
        )
        self._post(
            SUBMISSIONS_TABLE,
            {
                "submission_id": record.submission_id,
                "question_slug": record.question_slug,
                "title": record.title,
                "submitted_at": record.submitted_at.isoformat(),
                "language": record.language,
                "status": record.status,
                "code": record.code,
                "description": record.description,
            },
            prefer="return=minimal",
        )

    def close(self) -> None:
        if self._owns_client:
            self.client.close()


def create_persister(settings: Settings) -> Persister:
    """
    Build the backend selected by settings.persistence_backend.

    The direct backend connects eagerly so an unreachable database stops
    the job before any LeetCode request is made.

    Args:
        settings: Job settings

    Returns:
        Persister: Ready-to-use backend

    Raises:
        ConfigurationError: If the backend's settings are missing
        PersistenceError: If the database cannot be reached
    """
    if settings.persistence_backend == "gateway":
        if not settings.rest_url or not settings.supabase_secret_key:
            raise ConfigurationError(
                "Gateway backend requires SUPABASE_URL and SUPABASE_SECRET_KEY"
            )
        logger.info(f"Using PostgREST gateway at {settings.rest_url}")
        return GatewayPersister(
            settings.rest_url,
            settings.supabase_secret_key,
            timeout=settings.request_timeout_seconds,
        )

    if not settings.db_url:
        raise ConfigurationError(
            "Direct backend requires DATABASE_URL, or both SUPABASE_URL "
            "and SUPABASE_SECRET_KEY"
        )

    try:
        engine = create_engine_from_url(settings.db_url, echo=settings.debug)
    except (SQLAlchemyError, ImportError) as e:
        raise PersistenceError(f"Cannot create database engine: {e}") from e

    try:
        check_connection(engine)
    except SQLAlchemyError as e:
        engine.dispose()
        raise PersistenceError(f"Failed to connect to database: {e}") from e

    logger.info("Connected to database")
    return DirectPersister(engine, dispose_engine=True)
