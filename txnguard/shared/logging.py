"""structlog configuration shared by library consumers and tests."""

import logging
import sys

import structlog

from txnguard.config import settings


def setup_logging(level: str | None = None, json: bool | None = None) -> None:
    """Route structlog through stdlib logging with ISO timestamps.

    Defaults come from ``LOG_LEVEL`` and ``LOG_JSON``. Safe to call more than
    once; the last call wins.
    """
    level = level or settings.log_level
    json = settings.log_json if json is None else json
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
        force=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
