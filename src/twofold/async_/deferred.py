"""DeferredResult: Result combinators applied through a pending computation.

DeferredResult wraps an Awaitable[Result[S, E]] and re-exposes the Result
API. Each combinator returns a new DeferredResult whose computation awaits
the previous one exactly once, applies the same operation a settled Result
would, and produces the next Result. Nothing runs until the final link is
awaited.

Example:
    ```python
    async def fetch_user(id: int) -> Result[User, str]:
        ...

    user = await (
        DeferredResult(fetch_user(1))
        .bind(validate_user)
        .map(format_response)
        .unwrap_or_throw()
    )
    ```
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Generator
from typing import Any

from twofold.types.result import Error, Result, Success, from_async, from_throwing

__all__ = ['DeferredResult', 'DeferredSuccess']


async def _settle[T](value: T | Awaitable[T]) -> T:
    """Await value if it is awaitable, otherwise return it as is."""
    if inspect.isawaitable(value):
        return await value
    return value


class _Settled[T]:
    """Awaitable over a value that is already known.

    Unlike a coroutine it can be awaited any number of times.
    """

    __slots__ = ('_value',)

    def __init__(self, value: T) -> None:
        self._value = value

    async def _get(self) -> T:
        return self._value

    def __await__(self) -> Generator[Any, Any, T]:
        return self._get().__await__()

    def __repr__(self) -> str:
        return f'_Settled({self._value!r})'


class DeferredResult[S, E]:
    """A Result that is still being computed.

    Combinators return new DeferredResult instances, building a chain that
    only executes when awaited. Awaiting a DeferredResult yields the Result.

    Note:
        A DeferredResult wrapping a coroutine object is single-shot, since a
        coroutine can only be awaited once. Values built with from_result,
        from_success or from_error wrap a settled awaitable and can be awaited
        repeatedly. Wrap a Task or Future for repeated awaits of live work.

    Attributes:
        _awaitable: The underlying awaitable that produces a Result.
    """

    __slots__ = ('_awaitable',)

    def __init__(self, awaitable: Awaitable[Result[S, E]]) -> None:
        """Create a DeferredResult from an awaitable.

        Args:
            awaitable: An awaitable that produces a Result[S, E].
        """
        self._awaitable = awaitable

    def __await__(self) -> Generator[Any, Any, Result[S, E]]:
        return self._awaitable.__await__()

    @classmethod
    def from_result(cls, result: Result[S, E]) -> DeferredResult[S, E]:
        """Lift a settled Result.

        Args:
            result: A Result[S, E] value.

        Returns:
            DeferredResult that resolves to result, reusable across awaits.
        """
        return cls(_Settled(result))

    @classmethod
    def from_success(cls, value: S) -> DeferredResult[S, E]:
        """Lift Success(value)."""
        return cls.from_result(Success(value))

    @classmethod
    def from_error(cls, error: E) -> DeferredResult[S, E]:
        """Lift Error(error)."""
        return cls.from_result(Error(error))

    @classmethod
    def from_async(
        cls,
        awaitable: Awaitable[S],
        *,
        exceptions: tuple[type[BaseException], ...] | None = None,
    ) -> DeferredResult[S, BaseException]:
        """Wrap a computation of a plain value, capturing its failure.

        Args:
            awaitable: Computation producing S.
            exceptions: Exception types to capture. Defaults to the configured set.
                Cancellation of the awaited computation is captured regardless.

        Returns:
            DeferredResult resolving to Success(value) or Error(exc).
        """
        return DeferredResult(from_async(awaitable, exceptions=exceptions))

    @classmethod
    def from_throwing(
        cls,
        fn: Callable[[], S],
        *,
        exceptions: tuple[type[BaseException], ...] | None = None,
    ) -> DeferredResult[S, BaseException]:
        """Defer a call to fn, capturing what it raises.

        fn runs when the DeferredResult is awaited, not when it is created.
        """

        async def _called() -> Result[S, BaseException]:
            return from_throwing(fn, exceptions=exceptions)

        return DeferredResult(_called())

    # --- Combinators ---

    def map[S2](self, mapper: Callable[[S], S2]) -> DeferredResult[S2, E]:
        """Apply a sync function to the Success value.

        Args:
            mapper: Function to apply to the value. Exceptions it raises
                propagate out of the await.

        Returns:
            New DeferredResult with the transformed value.

        Example:
            ```python
            result = await DeferredResult.from_success(5).map(lambda x: x * 2)
            assert result == Success(10)
            ```
        """

        async def _mapped() -> Result[S2, E]:
            return (await self._awaitable).map(mapper)

        return DeferredResult(_mapped())

    def map_async[S2](self, mapper: Callable[[S], S2 | Awaitable[S2]]) -> DeferredResult[S2, E]:
        """Apply a function returning a value or an awaitable of one.

        Either way the Success payload is the plain value.
        """

        async def _mapped() -> Result[S2, E]:
            result = await self._awaitable
            if isinstance(result, Success):
                return Success(await _settle(mapper(result.value)))
            return result

        return DeferredResult(_mapped())

    def bind[S2](
        self, mapper: Callable[[S], Result[S2, E] | Awaitable[Result[S2, E]]]
    ) -> DeferredResult[S2, E]:
        """Chain with a function returning a Result or an awaitable of one.

        If Success, calls mapper(value) and resolves whatever it returns, so
        the chain never holds a pending value inside a pending value. If
        Error, the Error passes through and mapper is not called.

        Args:
            mapper: Function that takes S and returns Result[S2, E], a
                coroutine of one, or another DeferredResult.

        Returns:
            New DeferredResult with the chained result.

        Example:
            ```python
            def validate(x: int) -> Result[int, str]:
                return Success(x) if x > 0 else Error('not positive')

            result = await DeferredResult.from_success(5).bind(validate)
            assert result == Success(5)
            ```
        """

        async def _chained() -> Result[S2, E]:
            return await _settle((await self._awaitable).bind(mapper))

        return DeferredResult(_chained())

    def map_error[E2](self, mapper: Callable[[E], E2]) -> DeferredResult[S, E2]:
        """Apply a sync function to the Error payload."""

        async def _mapped() -> Result[S, E2]:
            return (await self._awaitable).map_error(mapper)

        return DeferredResult(_mapped())

    def map_error_async[E2](self, mapper: Callable[[E], E2 | Awaitable[E2]]) -> DeferredResult[S, E2]:
        """Apply a function returning an error value or an awaitable of one."""

        async def _mapped() -> Result[S, E2]:
            result = await self._awaitable
            if isinstance(result, Error):
                return Error(await _settle(mapper(result.error)))
            return result

        return DeferredResult(_mapped())

    def bind_error[E2](
        self, mapper: Callable[[E], Result[S, E2] | Awaitable[Result[S, E2]]]
    ) -> DeferredResult[S, E2]:
        """Recover with a function returning a Result or an awaitable of one.

        If Error, calls mapper(error) and resolves its result, which may be
        another Error. If Success, it passes through.
        """

        async def _recovered() -> Result[S, E2]:
            return await _settle((await self._awaitable).bind_error(mapper))

        return DeferredResult(_recovered())

    def tap_success(self, effect: Callable[[S], Any]) -> DeferredResult[S, E]:
        """Call effect with the Success value for its side effect.

        An awaitable returned by effect is awaited before the chain moves on.
        The Result passes through unchanged.
        """

        async def _tapped() -> Result[S, E]:
            result = await self._awaitable
            if isinstance(result, Success):
                await _settle(effect(result.value))
            return result

        return DeferredResult(_tapped())

    def tap_error(self, effect: Callable[[E], Any]) -> DeferredResult[S, E]:
        """Call effect with the Error payload for its side effect."""

        async def _tapped() -> Result[S, E]:
            result = await self._awaitable
            if isinstance(result, Error):
                await _settle(effect(result.error))
            return result

        return DeferredResult(_tapped())

    def recover(self, on_error: Callable[[E], S]) -> DeferredSuccess[S, E]:
        """Turn an Error into Success(on_error(error)).

        Returns:
            DeferredSuccess, which offers resolve_success_payload().
        """

        async def _recovered() -> Success[S]:
            return (await self._awaitable).recover(on_error)

        return DeferredSuccess(_recovered())

    # --- Terminal operations ---

    async def fold[T](self, on_success: Callable[[S], T], on_error: Callable[[E], T]) -> T:
        """Resolve and apply on_success or on_error."""
        return (await self._awaitable).fold(on_success, on_error)

    async def unwrap_or_throw(self) -> S:
        """Resolve and return the Success value.

        Raises:
            UnwrappedError: If the chain resolves to an Error.
        """
        return (await self._awaitable).unwrap_or_throw()

    async def unwrap_or_default(self, default: S | None = None) -> S | None:
        """Resolve and return the Success value, or default on Error."""
        return (await self._awaitable).unwrap_or_default(default)

    async def to_pair(self) -> tuple[S | None, E | None]:
        """Resolve and return (value, None) or (None, error)."""
        return (await self._awaitable).to_pair()

    async def is_success(self) -> bool:
        """Resolve and report whether the Result is Success."""
        return (await self._awaitable).is_success()

    async def is_error(self) -> bool:
        """Resolve and report whether the Result is Error."""
        return (await self._awaitable).is_error()

    async def execute(self) -> None:
        """Drive the chain to settlement and discard the Result."""
        (await self._awaitable).execute()

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._awaitable!r})'


class DeferredSuccess[S, E](DeferredResult[S, E]):
    """A DeferredResult known to resolve to Success.

    Returned by DeferredResult.recover and Success.defer.
    """

    __slots__ = ()

    def __init__(self, awaitable: Awaitable[Success[S]]) -> None:
        super().__init__(awaitable)

    @classmethod
    def from_result(cls, result: Result[S, E]) -> DeferredSuccess[S, E]:
        """Lift a settled Success.

        Raises:
            TypeError: If result is an Error.
        """
        if not isinstance(result, Success):
            msg = f'DeferredSuccess cannot hold {result!r}'
            raise TypeError(msg)
        return cls(_Settled(result))

    async def resolve_success_payload(self) -> S:
        """Resolve and return the raw Success value."""
        return (await self._awaitable).value

    def map_success_variant[T](self, mapper: Callable[[S], T | Awaitable[T]]) -> DeferredResult[Any, Any]:
        """Resolve, then hand the value to mapper and resolve what it returns.

        mapper usually returns a Result (or an awaitable of one); the chain
        continues from that Result.
        """

        async def _mapped() -> Any:
            return await _settle((await self._awaitable).map_success_variant(mapper))

        return DeferredResult(_mapped())
