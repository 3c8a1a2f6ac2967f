"""Property-based tests for the Result combinator laws."""

import asyncio

import pytest
from hypothesis import given
from hypothesis import strategies as st

from tests.strategies import chains, errors, payloads, results, successes
from twofold import DeferredResult, Error, Success, UnwrappedError, error, from_throwing, success


def _identity(value):
    return value


def _apply_chain(result, chain):
    for name, fn in chain:
        result = getattr(result, name)(fn)
    return result


async def _resolve(deferred):
    return await deferred


class TestVariantLaws:
    @given(payloads)
    def test_success_predicates(self, value):
        assert success(value).is_success() is True
        assert success(value).is_error() is False

    @given(payloads)
    def test_error_predicates(self, value):
        assert error(value).is_error() is True
        assert error(value).is_success() is False


class TestIdentityLaws:
    @given(results)
    def test_map_identity(self, result):
        assert result.map(_identity) == result

    @given(results)
    def test_bind_identity(self, result):
        assert result.bind(Success) == result

    @given(results)
    def test_map_error_identity(self, result):
        assert result.map_error(_identity) == result


class TestShortCircuitLaw:
    @given(errors)
    def test_map_never_invokes_mapper_on_error(self, err):
        calls = []

        def mapper(value):
            calls.append(value)
            return value

        mapped = err.map(mapper)
        assert mapped.error is err.error
        assert calls == []

    @given(errors)
    def test_bind_never_invokes_mapper_on_error(self, err):
        calls = []
        assert err.bind(lambda v: calls.append(v) or Success(v)) == err
        assert calls == []


class TestCaptureLaw:
    @given(payloads)
    def test_returning_fn_is_success(self, value):
        assert from_throwing(lambda: value) == Success(value)

    @given(st.text())
    def test_raising_fn_is_error(self, message):
        exc = RuntimeError(message)

        def fail():
            raise exc

        assert from_throwing(fail) == Error(exc)


class TestUnwrapLaw:
    @given(payloads)
    def test_success_unwraps(self, value):
        assert success(value).unwrap_or_throw() == value

    @given(payloads)
    def test_error_raises_with_cause(self, value):
        with pytest.raises(UnwrappedError) as exc_info:
            error(value).unwrap_or_throw()
        assert exc_info.value.cause == value


class TestRecoveryLaw:
    @given(payloads)
    def test_error_recovers(self, value):
        assert error(value).recover(repr) == success(repr(value))

    @given(successes)
    def test_success_unchanged(self, ok):
        assert ok.recover(repr) == ok


class TestPairLaw:
    @given(payloads)
    def test_success_pair(self, value):
        assert success(value).to_pair() == (value, None)

    @given(payloads)
    def test_error_pair(self, value):
        assert error(value).to_pair() == (None, value)


class TestDeferredEquivalence:
    """A chain run through DeferredResult matches the same chain run directly."""

    @given(results, chains)
    def test_deferred_matches_sync(self, initial, chain):
        expected = _apply_chain(initial, chain)
        deferred = _apply_chain(DeferredResult.from_result(initial), chain)
        assert asyncio.run(_resolve(deferred)) == expected

    @given(results, chains)
    def test_deferred_over_coroutine_matches_sync(self, initial, chain):
        async def produce():
            await asyncio.sleep(0)
            return initial

        expected = _apply_chain(initial, chain)
        deferred = _apply_chain(DeferredResult(produce()), chain)
        assert asyncio.run(_resolve(deferred)) == expected
