"""Result type: Success[S] | Error[E] with a fluent combinator API.

Mapper and callback functions passed to map, bind, map_error, bind_error and
the tap methods are called directly: anything they raise propagates to the
caller of the combinator. Only the capturing constructors, from_throwing and
from_async, turn raised exceptions into Error values. Do not add capture to
the combinators: a defect in a mapper must surface as an exception, never as
an Error.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, NoReturn, TypeIs, final

import msgspec

from twofold._config import get_config
from twofold._logging import get_logger
from twofold.errors import UnwrappedError

if TYPE_CHECKING:
    from twofold.async_.deferred import DeferredResult, DeferredSuccess

__all__ = [
    'Error',
    'Result',
    'Success',
    'error',
    'from_async',
    'from_throwing',
    'success',
]

logger = get_logger('result')


@final
class Success[S](msgspec.Struct, frozen=True, gc=False):
    """Success variant of Result containing a value of type S.

    Examples:
        >>> ok = Success(42)
        >>> ok.unwrap_or_throw()
        42
        >>> ok.map(lambda x: x * 2)
        Success(value=84)
    """

    value: S

    def is_success(self) -> TypeIs[Success[S]]:
        """Return True since this is Success."""
        return True

    def is_error(self) -> TypeIs[Error[object]]:
        """Return False since this is Success."""
        return False

    def fold[T](self, on_success: Callable[[S], T], on_error: Callable[[Any], T]) -> T:  # noqa: ARG002
        """Apply on_success to the value and return its result."""
        return on_success(self.value)

    def map[S2](self, mapper: Callable[[S], S2]) -> Success[S2]:
        """Apply a function to the contained value.

        Args:
            mapper: Function to apply to the value. Not guarded: if it
                raises, the exception propagates.

        Returns:
            Success containing mapper(value).
        """
        return Success(mapper(self.value))

    def bind[S2, E](self, mapper: Callable[[S], Success[S2] | Error[E]]) -> Success[S2] | Error[E]:
        """Apply a Result-returning function to the value and return its Result."""
        return mapper(self.value)

    def map_error(self, _mapper: Callable[[Any], Any]) -> Success[S]:
        """Return self unchanged since this is Success."""
        return self

    def bind_error(self, _mapper: Callable[[Any], Any]) -> Success[S]:
        """Return self unchanged since this is Success."""
        return self

    def tap_success(self, effect: Callable[[S], Any]) -> Success[S]:
        """Call effect with the value, then return self."""
        effect(self.value)
        return self

    def tap_error(self, _effect: Callable[[Any], Any]) -> Success[S]:
        """Return self without calling effect since this is Success."""
        return self

    def recover(self, _on_error: Callable[[Any], S]) -> Success[S]:
        """Return self unchanged since this is Success."""
        return self

    def unwrap_or_throw(self) -> S:
        """Return the contained value."""
        return self.value

    def unwrap_or_default(self, default: S | None = None) -> S:  # noqa: ARG002
        """Return the contained value, ignoring the default."""
        return self.value

    def to_pair(self) -> tuple[S, None]:
        """Return (value, None)."""
        return (self.value, None)

    def execute(self) -> None:
        """Nothing to evaluate; a Success is already settled."""

    def map_success_variant[T](self, mapper: Callable[[S], T]) -> T:
        """Hand the value to mapper and return whatever it returns.

        Unlike map, the result is not rewrapped, so mapper usually returns
        another Result. Only Success carries this method.
        """
        return mapper(self.value)

    def defer(self) -> DeferredSuccess[S, Any]:
        """Lift into a settled DeferredSuccess for async chaining."""
        from twofold.async_.deferred import DeferredSuccess

        return DeferredSuccess.from_success(self.value)


@final
class Error[E](msgspec.Struct, frozen=True, gc=False):
    """Error variant of Result containing an error payload of type E.

    The payload does not have to be an exception; any value works.

    Examples:
        >>> err = Error('not found')
        >>> err.is_error()
        True
        >>> err.recover(len)
        Success(value=9)
    """

    error: E

    def is_success(self) -> TypeIs[Success[object]]:
        """Return False since this is Error."""
        return False

    def is_error(self) -> TypeIs[Error[E]]:
        """Return True since this is Error."""
        return True

    def fold[T](self, on_success: Callable[[Any], T], on_error: Callable[[E], T]) -> T:  # noqa: ARG002
        """Apply on_error to the error and return its result."""
        return on_error(self.error)

    def map(self, _mapper: Callable[[Any], Any]) -> Error[E]:
        """Return self unchanged; the mapper is never called."""
        return self

    def bind(self, _mapper: Callable[[Any], Any]) -> Error[E]:
        """Return self unchanged; the mapper is never called."""
        return self

    def map_error[E2](self, mapper: Callable[[E], E2]) -> Error[E2]:
        """Apply a function to the contained error.

        Args:
            mapper: Function to apply to the error. Not guarded: if it
                raises, the exception propagates.

        Returns:
            Error containing mapper(error).
        """
        return Error(mapper(self.error))

    def bind_error[S, E2](self, mapper: Callable[[E], Success[S] | Error[E2]]) -> Success[S] | Error[E2]:
        """Apply a Result-returning recovery function to the error.

        Args:
            mapper: Function that takes the error and returns a new Result,
                which may itself be an Error.

        Returns:
            The Result returned by mapper.
        """
        return mapper(self.error)

    def tap_success(self, _effect: Callable[[Any], Any]) -> Error[E]:
        """Return self without calling effect since this is Error."""
        return self

    def tap_error(self, effect: Callable[[E], Any]) -> Error[E]:
        """Call effect with the error, then return self."""
        effect(self.error)
        return self

    def recover[S](self, on_error: Callable[[E], S]) -> Success[S]:
        """Convert to Success(on_error(error))."""
        return Success(on_error(self.error))

    def unwrap_or_throw(self) -> NoReturn:
        """Raise UnwrappedError carrying the error payload.

        Raises:
            UnwrappedError: Always, with ``cause`` set to the payload.
        """
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug('unwrap_failed', error=repr(self.error))
        cause = self.error if isinstance(self.error, BaseException) else None
        raise UnwrappedError(self.error) from cause

    def unwrap_or_default[S](self, default: S | None = None) -> S | None:
        """Return default (None unless given) since this is Error."""
        return default

    def to_pair(self) -> tuple[None, E]:
        """Return (None, error)."""
        return (None, self.error)

    def execute(self) -> None:
        """Nothing to evaluate; an Error is already settled."""

    def map_error_variant[T](self, mapper: Callable[[E], T]) -> T:
        """Hand the error to mapper and return whatever it returns.

        The Error-side counterpart of Success.map_success_variant. Only Error
        carries this method.
        """
        return mapper(self.error)

    def defer(self) -> DeferredResult[Any, E]:
        """Lift into a settled DeferredResult for async chaining."""
        from twofold.async_.deferred import DeferredResult

        return DeferredResult.from_error(self.error)


type Result[S, E = Exception] = Success[S] | Error[E]


def success[S](value: S) -> Success[S]:
    """Construct the Success variant."""
    return Success(value)


def error[E](value: E) -> Error[E]:
    """Construct the Error variant."""
    return Error(value)


def from_throwing[T](
    fn: Callable[[], T],
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Success[T] | Error[BaseException]:
    """Call fn and capture what it raises.

    Args:
        fn: Zero-argument callable.
        exceptions: Exception types to capture. Defaults to the configured
            set, (Exception,) unless changed with twofold.init().

    Returns:
        Success(fn()) if fn returns, Error(exc) if it raises a captured type.

    Example:
        ```python
        from_throwing(lambda: int('42'))
        # Success(value=42)
        from_throwing(lambda: int('x'))
        # Error(error=ValueError("invalid literal for int() with base 10: 'x'"))
        ```
    """
    catch = exceptions if exceptions is not None else get_config().capture
    try:
        return Success(fn())
    except catch as exc:
        logger.debug('exception_captured', exc_type=type(exc).__name__, source='from_throwing')
        return Error(exc)


def _awaiting_task_cancelled() -> bool:
    """Whether the task running this coroutine has a pending cancellation."""
    try:
        task = asyncio.current_task()
    except RuntimeError:
        # Not on an asyncio loop; the cancellation can only be ours.
        return True
    return task is None or task.cancelling() > 0


async def from_async[T](
    awaitable: Awaitable[T],
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Success[T] | Error[BaseException]:
    """Await a computation and capture its failure.

    A CancelledError raised because the awaited computation was cancelled is
    captured as Error(CancelledError). If the task doing the awaiting is the
    one being cancelled, the cancellation propagates.

    Args:
        awaitable: Computation producing T.
        exceptions: Exception types to capture. Defaults to the configured set.
            Cancellation of the awaited computation is captured regardless of
            this set, even when it is narrowed to e.g. (ValueError,).

    Returns:
        Success(value) on fulfillment, Error(exc) on a captured failure.
    """
    catch = exceptions if exceptions is not None else get_config().capture
    try:
        value = await awaitable
    except asyncio.CancelledError as exc:
        if _awaiting_task_cancelled():
            raise
        logger.debug('cancellation_captured', source='from_async')
        return Error(exc)
    except catch as exc:
        logger.debug('exception_captured', exc_type=type(exc).__name__, source='from_async')
        return Error(exc)
    return Success(value)
