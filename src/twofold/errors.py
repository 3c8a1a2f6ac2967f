"""Library error types."""

from __future__ import annotations

from typing import Any

__all__ = ['UnwrappedError']


class UnwrappedError(Exception):
    """Raised by unwrap_or_throw() when the result is an Error.

    The error payload is kept on ``cause``. When the payload is itself an
    exception it is also chained as ``__cause__``.
    """

    def __init__(self, cause: Any) -> None:
        self.cause = cause
        super().__init__(f'Called unwrap_or_throw on Error: {cause!r}')
