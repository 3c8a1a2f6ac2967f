"""Process-wide configuration: Config, init, and get_config."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from twofold._logging import configure_logging

__all__ = [
    'LOG_LEVEL_ENV',
    'Config',
    'get_config',
    'init',
    'reset_config',
]

LOG_LEVEL_ENV = 'TWOFOLD_LOG_LEVEL'

_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass(frozen=True)
class Config:
    """Configuration for twofold.

    Attributes:
        capture: Exception types captured by from_throwing, from_async and
            the capture decorators when no explicit set is passed.
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = silent.
        json_logs: Render log records as JSON instead of console lines.
    """

    capture: tuple[type[BaseException], ...] = (Exception,)
    log_level: str | None = None
    json_logs: bool = True


# Global configuration (set by init())
_config: Config | None = None


def _detect_log_level() -> str | None:
    """Read the log level from the TWOFOLD_LOG_LEVEL environment variable."""
    env_level = os.environ.get(LOG_LEVEL_ENV, '').upper()
    if not env_level:
        return None
    if env_level not in _LEVELS:
        logging.warning("Unknown %s value '%s', logging stays unconfigured", LOG_LEVEL_ENV, env_level)
        return None
    return env_level


def _validate_capture(capture: tuple[type[BaseException], ...]) -> tuple[type[BaseException], ...]:
    capture = tuple(capture)
    if not capture:
        msg = 'capture must name at least one exception type'
        raise TypeError(msg)
    for exc_type in capture:
        if not (isinstance(exc_type, type) and issubclass(exc_type, BaseException)):
            msg = f'capture entries must be exception classes, got {exc_type!r}'
            raise TypeError(msg)
    return capture


def init(
    *,
    capture: tuple[type[BaseException], ...] | None = None,
    log_level: str | None = None,
    json_logs: bool = True,
) -> Config:
    """Set the process-wide twofold configuration.

    Args:
        capture: Default exception types to capture. Defaults to (Exception,).
        log_level: Logging level ("DEBUG", "INFO", etc.). Falls back to the
            TWOFOLD_LOG_LEVEL environment variable; None = silent.
        json_logs: Emit JSON logs when logging is configured.

    Returns:
        The Config that was set.

    Raises:
        TypeError: If capture is empty or holds something other than
            exception classes.

    Example:
        ```python
        import twofold

        twofold.init(capture=(ValueError, KeyError), log_level='DEBUG')
        ```
    """
    global _config  # noqa: PLW0603

    resolved_capture = _validate_capture(capture) if capture is not None else (Exception,)
    resolved_level = log_level if log_level is not None else _detect_log_level()

    _config = Config(
        capture=resolved_capture,
        log_level=resolved_level,
        json_logs=json_logs,
    )

    if resolved_level is not None:
        configure_logging(resolved_level, json_output=json_logs)

    return _config


def get_config() -> Config:
    """Get the current configuration, or the defaults if init() was never called."""
    if _config is None:
        return Config()
    return _config


def reset_config() -> None:
    """Forget the configuration set by init()."""
    global _config  # noqa: PLW0603
    _config = None
