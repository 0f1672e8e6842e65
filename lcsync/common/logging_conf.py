"""
Centralized logging configuration with Sentry.io integration.

This module provides logging setup for the sync job.
"""

import logging
from typing import Optional

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration


def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=(
            "%(asctime)s - %(name)s - %(levelname)s - "
            "%(message)s"
        ),
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # httpx logs every request at INFO, which would repeat the per-item lines
    logging.getLogger("httpx").setLevel(logging.WARNING)


def setup_job_logging(
    sentry_dsn: Optional[str] = None,
    sentry_environment: str = "development",
    sentry_traces_sample_rate: float = 0.1,
    log_level: str = "INFO",
    service_name: str = "lcsync-job"
) -> None:
    """
    Configure logging for the sync job with Sentry.

    ERROR records become Sentry events, INFO records become breadcrumbs,
    so a failed submission shows the progress lines that led to it.

    Args:
        sentry_dsn: Sentry DSN URL (if None, Sentry is disabled)
        sentry_environment: Environment name
        sentry_traces_sample_rate: Trace sampling rate
        log_level: Logging level
        service_name: Name of the service for logging context
    """
    setup_logging(log_level=log_level)

    if sentry_dsn:
        sentry_sdk.init(
            dsn=sentry_dsn,
            environment=sentry_environment,
            traces_sample_rate=sentry_traces_sample_rate,
            integrations=[
                LoggingIntegration(
                    level=logging.INFO,
                    event_level=logging.ERROR
                ),
            ],
            attach_stacktrace=True,
            send_default_pii=False,
        )
        logging.info(
            f"Sentry initialized for {service_name} in "
            f"{sentry_environment} environment"
        )
    else:
        logging.info(
            f"Sentry disabled for {service_name} "
            f"(no DSN provided)"
        )
