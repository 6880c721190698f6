"""Logging configuration.

stdlib logging carries the records; structlog formats them. Production and
staging render JSON lines, everything else gets the console renderer.
"""

from __future__ import annotations

import logging
import sys

import structlog

from storefront.infrastructure.settings import Settings

HANDLER_NAME = "storefront"


def configure_logging(settings: Settings) -> None:
    """Configure all logging for the application."""
    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level)
    remove_handler()

    # stderr keeps log lines out of the CLI's own output
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setLevel(settings.log_level)
    root_logger.addHandler(handler)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.contextvars.merge_contextvars,
    ]

    if settings.env in ("production", "staging"):
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def bind_caller(user_id: str | None, role: str | None) -> None:
    """Attach the caller to every log line of the current command."""
    structlog.contextvars.bind_contextvars(user_id=user_id, role=role)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


def remove_handler() -> None:
    """Detach the handler installed by ``configure_logging``, if any."""
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            root_logger.removeHandler(handler)
