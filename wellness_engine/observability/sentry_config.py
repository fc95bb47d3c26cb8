"""Sentry configuration and initialization for error tracking."""

import logging
import os
import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

from wellness_engine import __version__

logger = logging.getLogger(__name__)


def init_sentry() -> None:
    """
    Initialize Sentry SDK for error tracking.

    Environment variables:
        ENABLE_SENTRY: Feature flag to enable/disable Sentry
        SENTRY_DSN: Sentry project DSN (required when enabled)
        SENTRY_ENVIRONMENT: Environment name (development, staging, production)
        SENTRY_TRACES_SAMPLE_RATE: Percentage of transactions to sample (0.0-1.0)
        GIT_COMMIT_SHA: Git commit SHA for release tracking (optional)
    """
    from wellness_engine.config import (
        SENTRY_DSN,
        SENTRY_ENVIRONMENT,
        SENTRY_TRACES_SAMPLE_RATE,
        ENABLE_SENTRY,
    )

    if not ENABLE_SENTRY:
        logger.info("Sentry is disabled (ENABLE_SENTRY=false)")
        return

    if not SENTRY_DSN:
        logger.warning("Sentry DSN not configured - error tracking disabled")
        return

    release = os.getenv("GIT_COMMIT_SHA")
    if release:
        release = f"wellness-engine@{release[:7]}"
    else:
        release = f"wellness-engine@{__version__}"

    logging_integration = LoggingIntegration(
        level=logging.INFO,  # breadcrumbs
        event_level=logging.ERROR,  # events
    )

    sentry_sdk.init(
        dsn=SENTRY_DSN,
        environment=SENTRY_ENVIRONMENT,
        release=release,
        integrations=[logging_integration],
        traces_sample_rate=SENTRY_TRACES_SAMPLE_RATE,
        attach_stacktrace=True,
        send_default_pii=False,
    )

    logger.info(
        f"Sentry initialized: environment={SENTRY_ENVIRONMENT}, "
        f"release={release}, traces_sample_rate={SENTRY_TRACES_SAMPLE_RATE}"
    )


def capture_exception(error: Exception, **tags) -> None:
    """Report a handled exception to Sentry (no-op when Sentry is not initialized)"""
    with sentry_sdk.new_scope() as scope:
        for key, value in tags.items():
            scope.set_tag(key, value)
        sentry_sdk.capture_exception(error)


def shutdown_sentry() -> None:
    """
    Flush pending events to Sentry before shutting down.
    """
    client = sentry_sdk.get_client()
    if client.is_active():
        logger.info("Flushing Sentry events before shutdown...")
        client.close(timeout=2.0)
        logger.info("Sentry shutdown complete")
