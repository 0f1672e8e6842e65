import argparse
import logging
import sys
from typing import Optional, Sequence

from pydantic import ValidationError

from lcsync.common.config import ConfigurationError, get_settings
from lcsync.common.logging_conf import setup_job_logging
from lcsync.modules.leetcode_service import (
    LeetCodeClientError,
    create_leetcode_client,
)
from lcsync.modules.persistence import PersistenceError, create_persister
from lcsync.worker.sync_job import run_sync

logger = logging.getLogger("lcsync")

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_CONFIG = 2


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="lcsync",
        description="Store today's accepted LeetCode submissions in Postgres",
    )
    parser.add_argument(
        "--backend",
        type=str,
        choices=["direct", "gateway"],
        help="Persistence backend. Default comes from PERSISTENCE_BACKEND "
        "or 'direct'.",
    )
    parser.add_argument(
        "--limit",
        type=int,
        help="Number of recent accepted submissions to consider (default 50)",
    )
    parser.add_argument(
        "--delay",
        type=float,
        help="Seconds to wait between submissions (default 1.0)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    try:
        settings = get_settings(
            persistence_backend=args.backend,
            submission_limit=args.limit,
            request_delay_seconds=args.delay,
            debug=args.debug,
        )
    except ValidationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return EXIT_CONFIG

    setup_job_logging(
        sentry_dsn=settings.sentry_dsn,
        sentry_environment=settings.sentry_environment,
        sentry_traces_sample_rate=settings.sentry_traces_sample_rate,
        log_level="DEBUG" if settings.debug else "INFO"
    )

    try:
        persister = create_persister(settings)
    except ConfigurationError as e:
        logger.error(f"Configuration Error: {e}")
        return EXIT_CONFIG
    except PersistenceError as e:
        logger.error(str(e))
        return EXIT_FATAL

    with persister, create_leetcode_client(settings) as client:
        try:
            summary = run_sync(settings, client, persister)
        except LeetCodeClientError as e:
            logger.error(f"Failed to list submissions: {e}")
            return EXIT_FATAL

    for submission_id, reason in summary.failures:
        logger.warning(f"Not stored: {submission_id}: {reason}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
