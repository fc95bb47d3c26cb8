"""
Observability for the wellness engine

- Prometheus counters for streak and celebration activity
- Sentry error tracking
"""

from wellness_engine.observability.sentry_config import init_sentry, shutdown_sentry, capture_exception

__all__ = [
    "init_sentry",
    "shutdown_sentry",
    "capture_exception",
]
