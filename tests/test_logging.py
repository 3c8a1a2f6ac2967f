"""Tests for logging configuration and library log events."""

from __future__ import annotations

import json
import logging

import pytest

from twofold import Error, UnwrappedError, configure_logging, from_async, from_throwing, get_logger


def _records(caplog: pytest.LogCaptureFixture, event: str) -> list[logging.LogRecord]:
    return [r for r in caplog.records if r.getMessage() == event]


class TestGetLogger:
    def test_silent_by_default(self, caplog: pytest.LogCaptureFixture) -> None:
        """Debug events are filtered out unless the twofold logger is lowered."""
        with caplog.at_level(logging.WARNING):
            get_logger('test').debug('quiet_event')
        assert _records(caplog, 'quiet_event') == []

    def test_routes_through_stdlib(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger='twofold')
        get_logger('test').info('hello', key='value')

        (record,) = _records(caplog, 'hello')
        assert record.name == 'twofold.test'
        assert record.key == 'value'

    def test_package_logger_name(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger='twofold')
        get_logger().info('root_event')
        (record,) = _records(caplog, 'root_event')
        assert record.name == 'twofold'


class TestLibraryEvents:
    """The capturing constructors and unwrap emit debug events."""

    def test_from_throwing_logs_capture(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger='twofold')

        def fail() -> None:
            raise ValueError('bad')

        from_throwing(fail)
        (record,) = _records(caplog, 'exception_captured')
        assert record.exc_type == 'ValueError'
        assert record.source == 'from_throwing'

    @pytest.mark.asyncio
    async def test_from_async_logs_capture(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger='twofold')

        async def fail() -> None:
            raise KeyError('k')

        await from_async(fail())
        (record,) = _records(caplog, 'exception_captured')
        assert record.exc_type == 'KeyError'
        assert record.source == 'from_async'

    def test_unwrap_logs_failure(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger='twofold')

        with pytest.raises(UnwrappedError):
            Error('boom').unwrap_or_throw()
        (record,) = _records(caplog, 'unwrap_failed')
        assert record.error == "'boom'"

    def test_unwrap_skips_repr_when_debug_disabled(self, caplog: pytest.LogCaptureFixture) -> None:
        calls: list[str] = []

        class Payload:
            def __repr__(self) -> str:
                calls.append('repr')
                return 'Payload()'

        caplog.set_level(logging.WARNING, logger='twofold')
        with pytest.raises(UnwrappedError):
            Error(Payload()).unwrap_or_throw()
        assert calls == []

    def test_no_events_for_plain_combinators(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger='twofold')
        Error('e').map(str).recover(str)
        assert [r for r in caplog.records if r.name.startswith('twofold')] == []


class TestConfigureLogging:
    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging('DEBUG', json_output=True)
        get_logger('test').info('structured', answer=42)

        lines = [line for line in capsys.readouterr().err.splitlines() if line.strip()]
        entry = json.loads(lines[-1])
        assert entry['event'] == 'structured'
        assert entry['answer'] == 42
        assert entry['level'] == 'info'
        assert entry['logger'] == 'twofold.test'
        assert 'timestamp' in entry

    def test_console_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging('INFO', json_output=False)
        get_logger('test').info('readable')
        assert 'readable' in capsys.readouterr().err

    def test_level_filters(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging('WARNING')
        get_logger('test').info('dropped')
        assert 'dropped' not in capsys.readouterr().err

    def test_reconfigure_replaces_handler(self) -> None:
        configure_logging('INFO')
        configure_logging('DEBUG')
        logger = logging.getLogger('twofold')
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG
