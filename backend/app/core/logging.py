"""
Logging configuration.

All modules log through structlog with snake_case event names and
key/value context, e.g.:

    logger = structlog.get_logger()
    logger.warning("ai_provider_failed", provider="groq", error=str(e))

JSON output is used in production, a colored console renderer in development.
"""

import logging
import sys
from contextlib import AbstractContextManager

import structlog
from structlog.types import Processor


def configure_logging(json_logs: bool = True, log_level: str = "INFO") -> None:
    """
    Configure structlog and the standard library root logger.

    Args:
        json_logs: If True, output JSON format (for production).
                   If False, output colored console format (for development).
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR).
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_logs:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )


def bind_session_context(
    session_id: str | None = None, category: str | None = None
) -> AbstractContextManager[None]:
    """Attach call-session fields to log lines emitted inside the ``with`` block.

    Context bound by the caller (request IDs etc.) is left in place, and the
    session fields are removed again on exit.
    """
    context = {}
    if session_id:
        context["session_id"] = session_id
    if category:
        context["category"] = category
    return structlog.contextvars.bound_contextvars(**context)
