"""@capture and @capture_async decorators for catching exceptions."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, ParamSpec, TypeVar, overload

import wrapt

from twofold.async_.deferred import DeferredResult
from twofold.types.result import Error, Success, from_throwing

__all__ = ['capture', 'capture_async']

P = ParamSpec('P')
T = TypeVar('T')
E = TypeVar('E', bound=BaseException)


@overload
def capture[**P, T](
    func: Callable[P, T],
) -> Callable[P, Success[T] | Error[Exception]]: ...


@overload
def capture[E: BaseException](
    func: None = None,
    *,
    exceptions: tuple[type[E], ...] | None = None,
) -> Callable[[Callable[P, T]], Callable[P, Success[T] | Error[E]]]: ...


def capture[**P, T](
    func: Callable[P, T] | None = None,
    *,
    exceptions: tuple[type[Any], ...] | None = None,
) -> Any:
    """Decorator that returns Success on return and Error on a captured raise.

    The decorator form of from_throwing. Can be used with or without
    arguments:
        @capture
        def risky(): ...

        @capture(exceptions=(ValueError, TypeError))
        def specific(): ...

    Args:
        func: The function to wrap (when used without parentheses).
        exceptions: Tuple of exception types to capture. Defaults to the
            configured set, read at call time.

    Returns:
        A wrapped function that returns Result[T, E] instead of T.

    Example:
        ```python
        @capture
        def divide(a: int, b: int) -> float:
            return a / b
        divide(10, 2)
        # Success(value=5.0)
        divide(10, 0)
        # Error(error=ZeroDivisionError('division by zero'))
        ```
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[P, T],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Success[T] | Error[Any]:
        return from_throwing(lambda: wrapped(*args, **kwargs), exceptions=exceptions)

    if func is not None:
        return wrapper(func)
    return wrapper


@overload
def capture_async[**P, T](
    func: Callable[P, Awaitable[T]],
) -> Callable[P, DeferredResult[T, Exception]]: ...


@overload
def capture_async[E: BaseException](
    func: None = None,
    *,
    exceptions: tuple[type[E], ...] | None = None,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, DeferredResult[T, E]]]: ...


def capture_async[**P, T](
    func: Callable[P, Awaitable[T]] | None = None,
    *,
    exceptions: tuple[type[Any], ...] | None = None,
) -> Any:
    """Async decorator that returns a DeferredResult instead of a coroutine.

    Calling the decorated function starts nothing; the returned
    DeferredResult runs the coroutine when awaited, so it chains directly:

        @capture_async
        async def fetch(url: str) -> bytes: ...

        body = await fetch(url).map(len).unwrap_or_default(0)

    Args:
        func: The async function to wrap (when used without parentheses).
        exceptions: Tuple of exception types to capture. Defaults to the
            configured set.

    Returns:
        A wrapped function returning DeferredResult[T, E].
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[P, Awaitable[T]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> DeferredResult[T, Any]:
        # Call inside the awaited coroutine so argument binding errors are captured too.
        async def _called() -> T:
            return await wrapped(*args, **kwargs)

        return DeferredResult.from_async(_called(), exceptions=exceptions)

    if func is not None:
        return wrapper(func)
    return wrapper
