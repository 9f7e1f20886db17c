"""
Logging configuration for the dashboard data engine

Core modules log through the standard ``logging`` module; the service layer
emits structured events through structlog. Both end up on stderr so that
stdout stays free for CLI output.
"""

import logging
import sys

import structlog

from cdp_dashboard.config import DashboardSettings, get_settings


def configure_logging(settings: DashboardSettings | None = None) -> None:
    """
    Configure stdlib logging and structlog from settings.

    Args:
        settings: Settings to read ``log_level`` and ``log_format`` from.
                  Defaults to the active settings.
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level)

    logging.basicConfig(
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        level=level,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
