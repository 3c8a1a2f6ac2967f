"""Structured logging for twofold.

Loggers are structlog BoundLoggers wrapping stdlib loggers under the
``twofold`` namespace, so nothing is emitted until the application (or
``configure_logging``) attaches a handler and lowers the level.

``configure_logging`` uses structlog's ProcessorFormatter so records from
twofold render as JSON or colored console lines.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

__all__ = [
    'LOGGER_NAME',
    'configure_logging',
    'get_logger',
]

LOGGER_NAME = 'twofold'


def _get_shared_processors() -> list[Any]:
    """Processors applied to every record before rendering."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.stdlib.ExtraAdder(),
    ]


def _get_renderer(json_output: bool = True) -> Any:
    """Get the appropriate renderer based on output format."""
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    level: str = 'INFO',
    *,
    json_output: bool = True,
) -> None:
    """Attach a structured handler to the ``twofold`` logger.

    Only the library's own logger is touched; the root logger and any
    handlers the application installed elsewhere are left alone.

    Args:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL").
        json_output: If True, emit JSON logs. If False, use colored console output.
    """
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_get_shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _get_renderer(json_output),
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger backed by the stdlib ``twofold`` hierarchy.

    Args:
        name: Child logger name. If None, the package logger is returned.

    Returns:
        A structlog BoundLogger.
    """
    stdlib_name = f'{LOGGER_NAME}.{name}' if name else LOGGER_NAME
    return structlog.wrap_logger(
        logging.getLogger(stdlib_name),
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.render_to_log_kwargs,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
    )
