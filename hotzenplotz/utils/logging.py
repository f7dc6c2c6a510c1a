"""Structured logging setup using structlog.

Implements a **dual-renderer pattern**: the same shared processor chain
(context vars, log level, timestamps, stack info) feeds into either a
coloured ConsoleRenderer for local development or a JSONRenderer for
production.  The renderer is selected automatically based on the ``APP_ENV``
environment variable (default ``"development"``), or forced via the
``json_output`` flag.

Standard-library ``logging`` is also rewired through the same structlog
formatter so that httpx produces identically formatted output.
"""

import logging
import os
import sys
from typing import TextIO

import structlog


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = False,
    stream: TextIO | None = None,
) -> structlog.BoundLogger:
    """Configure structlog with environment-appropriate rendering.

    Args:
        log_level: Logging level string (DEBUG, INFO, WARNING, ERROR, FATAL).
        json_output: Force JSON output. When False, uses console rendering in
                     development and JSON in production (detected via APP_ENV).
        stream: Destination for every log line. Defaults to stderr so that
                stdout stays clean for CLI output.

    Returns:
        A configured structlog BoundLogger.
    """
    app_env = os.environ.get("APP_ENV", "development")
    use_json = json_output or app_env == "production"
    stream = stream or sys.stderr

    # Order matters: contextvars first, then level/timestamps, then exceptions.
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if use_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[
            *shared_processors,
            renderer,
        ],
        # Messages below log_level are dropped before any processing.
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(log_level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        # Module-level loggers must pick up a later switch to DEBUG.
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *shared_processors,
            renderer,
        ],
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())

    return structlog.get_logger()


def enable_debug_logging() -> None:
    """Lower the structlog filter to DEBUG.

    Processors, renderer and stdlib handlers set up by the embedding
    application are left alone.  Only when structlog has never been
    configured does this fall back to :func:`configure_logging`.
    """
    if not structlog.is_configured():
        configure_logging(log_level="DEBUG")
        return
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG))


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a named structlog logger.

    If structlog has not been configured yet, calls configure_logging() with defaults.

    Args:
        name: Logger name, typically the module name.

    Returns:
        A structlog BoundLogger bound with the given name.
    """
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(logger_name=name)
