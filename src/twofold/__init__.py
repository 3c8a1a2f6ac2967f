"""twofold: a Success/Error Result type with fluent sync and async chaining.

Flat imports (preferred):
    from twofold import Result, Success, Error, success, error
    from twofold import DeferredResult, capture, capture_async

Submodule imports (for organization):
    from twofold.types import Result, Success, Error
    from twofold.async_ import DeferredResult, DeferredSuccess
    from twofold.decorators import capture, capture_async
"""

# Async
from twofold.async_ import DeferredResult, DeferredSuccess

# Configuration
from twofold._config import Config, get_config, init

# Logging
from twofold._logging import configure_logging, get_logger

# Decorators
from twofold.decorators import capture, capture_async

# Errors
from twofold.errors import UnwrappedError

# Types
from twofold.types import (
    Error,
    Result,
    Success,
    error,
    from_async,
    from_throwing,
    success,
)

__all__ = [
    # Configuration
    'Config',
    # Async
    'DeferredResult',
    'DeferredSuccess',
    # Result types
    'Error',
    'Result',
    'Success',
    # Errors
    'UnwrappedError',
    # Decorators
    'capture',
    'capture_async',
    # Logging
    'configure_logging',
    # Constructors
    'error',
    'from_async',
    'from_throwing',
    'get_config',
    'get_logger',
    'init',
    'success',
]
