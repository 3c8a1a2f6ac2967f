"""Core types: Result, Success, Error and their constructors."""

from twofold.types.result import (
    Error,
    Result,
    Success,
    error,
    from_async,
    from_throwing,
    success,
)

__all__ = [
    'Error',
    'Result',
    'Success',
    'error',
    'from_async',
    'from_throwing',
    'success',
]
