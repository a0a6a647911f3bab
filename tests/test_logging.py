"""Tests for logging configuration and event listeners."""

from __future__ import annotations

import pytest

from might import MightAsync, MightEvent, err, mightify, ok
from might._logging import (
    add_event_listener,
    clear_event_listeners,
    configure_logging,
    get_logger,
)


@pytest.fixture(autouse=True)
def cleanup_listeners() -> None:
    """Clear event listeners before and after each test."""
    clear_event_listeners()
    yield
    clear_event_listeners()


@pytest.fixture
def events() -> list[MightEvent]:
    """Capture every event might emits while the test runs."""
    received: list[MightEvent] = []
    configure_logging(level='DEBUG', json_output=True)
    add_event_listener(received.append)
    return received


class TestEventListeners:
    """Tests for the event listener registry."""

    def test_listener_receives_library_events(self, events: list[MightEvent]) -> None:
        get_logger('might.test').info('might.test.event', extra_field='extra_value')

        assert len(events) == 1
        assert events[0].event == 'might.test.event'
        assert events[0].logger == 'might.test'
        assert events[0].level == 'info'
        assert events[0].fields == {'extra_field': 'extra_value'}

    def test_default_logger_is_library_logger(self, events: list[MightEvent]) -> None:
        get_logger().warning('something')

        assert [e.logger for e in events] == ['might']

    def test_other_loggers_are_ignored(self, events: list[MightEvent]) -> None:
        get_logger('app').info('Test message')
        get_logger('mighty').info('Test message')

        assert events == []

    def test_unsubscribe(self) -> None:
        calls: list[str] = []

        configure_logging(level='DEBUG', json_output=True)
        unsubscribe = add_event_listener(lambda event: calls.append(event.event))

        logger = get_logger('might.test')
        logger.info('first')
        assert calls == ['first']

        unsubscribe()
        unsubscribe()
        logger.info('second')
        assert calls == ['first']

    def test_failing_listener_does_not_break_logging(self) -> None:
        calls: list[str] = []

        def bad_listener(event: MightEvent) -> None:
            raise RuntimeError('listener failed')

        configure_logging(level='DEBUG', json_output=True)
        add_event_listener(bad_listener)
        add_event_listener(lambda event: calls.append('good'))

        get_logger('might.test').info('Test')
        assert calls == ['good']


class TestLibraryEvents:
    """Events emitted by the adapters and MightAsync."""

    def test_mightify_logs_caught_failure(self, events: list[MightEvent]) -> None:
        def explode():
            raise ValueError('bad')

        mightify(explode, str)()

        caught = [e for e in events if e.event == 'might.mightify.caught']
        assert len(caught) == 1
        assert caught[0].fields['function'] == 'explode'
        assert caught[0].fields['exc_type'] == 'ValueError'

    def test_mightify_success_logs_nothing(self, events: list[MightEvent]) -> None:
        mightify(lambda: 1, str)()
        assert events == []

    @pytest.mark.asyncio
    async def test_rejected_awaitable_logged(self, events: list[MightEvent]) -> None:
        async def fail():
            raise KeyError('k')

        await MightAsync(fail(), str)

        rejected = [e for e in events if e.event == 'might.async.rejected']
        assert len(rejected) == 1
        assert rejected[0].fields['exc_type'] == 'KeyError'

    @pytest.mark.asyncio
    async def test_pipe_failure_logged(self, events: list[MightEvent]) -> None:
        await MightAsync.resolved(1, str).pipe(lambda x: err('nope'))
        await MightAsync.resolved(1, str).pipe(ok)

        failed = [e for e in events if e.event == 'might.async.pipe.failed']
        assert len(failed) == 1
        assert failed[0].fields['error_type'] == 'str'
