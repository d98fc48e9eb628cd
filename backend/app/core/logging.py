"""
Structured logging configuration.
Analytic calls log counts and windows, never raw activity payloads.
"""
import logging
import sys
import time
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog
from structlog.types import Processor

from app.core.config import Settings, get_settings
from app.core.errors import ValidationError


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Configure structured logging for the application."""
    settings = settings or get_settings()

    # Common processors
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.LOG_FORMAT == "json":
        # JSON format for production
        renderer = structlog.processors.JSONRenderer()
    else:
        # Console format for development
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Configure root logger
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper()))

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


@contextmanager
def track_computation(
    logger: structlog.stdlib.BoundLogger,
    name: str,
    **context: Any
) -> Generator[dict, None, None]:
    """
    Log the duration of one analytic computation.

    Usage:
        with track_computation(logger, "summary", activities=len(items)) as extra:
            summary = summarize(items)
            extra["total_count"] = summary.total_count

    Keys added to the yielded dict are included in the completion log.
    Rejected parameters (ValidationError) are logged as warnings, other
    exceptions as errors with their type. Both are re-raised.
    """
    extra: dict = {}
    start = time.perf_counter()
    try:
        yield extra
    except ValidationError as e:
        logger.warning(
            "Computation rejected",
            computation=name,
            field=e.field,
            error_message=str(e),
            **context
        )
        raise
    except Exception as e:
        logger.error(
            "Computation failed",
            computation=name,
            error_type=type(e).__name__,
            error_message=str(e),
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
            **context
        )
        raise
    logger.debug(
        "Computation finished",
        computation=name,
        duration_ms=round((time.perf_counter() - start) * 1000, 2),
        **context,
        **extra
    )
