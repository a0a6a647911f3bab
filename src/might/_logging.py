"""Structured logging configuration for might.

Uses structlog's ProcessorFormatter to unify structlog and stdlib logging
output, so events emitted by might and by the application end up in one
consistent stream.

Library loggers sit on top of stdlib loggers named `might.*`. Until
`configure_logging()` (or `might.init(log_level=...)`) is called, they
follow the stdlib defaults and stay quiet below WARNING.

Listeners registered with `add_event_listener()` see the events of those
loggers, and only those, as MightEvent records.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import msgspec
import structlog

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = [
    'EventListener',
    'MightEvent',
    'add_event_listener',
    'clear_event_listeners',
    'configure_logging',
    'get_logger',
]


def _get_shared_processors() -> list[Any]:
    """Get processors shared between structlog and stdlib foreign logs."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.stdlib.ExtraAdder(),
    ]


def _get_structlog_processors() -> list[Any]:
    """Get the full processor chain for structlog loggers."""
    return [
        *_get_shared_processors(),
        _notify_listeners,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]


def _get_renderer(json_output: bool = True) -> Any:
    """Get the appropriate renderer based on output format."""
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    level: str = 'INFO',
    *,
    json_output: bool = True,
) -> None:
    """Configure structlog with ProcessorFormatter for unified output.

    Args:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL").
        json_output: If True, emit JSON logs. If False, use colored console output.
    """
    structlog.configure(
        processors=_get_structlog_processors(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_get_shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _get_renderer(json_output),
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger backed by the stdlib logger of the same name.

    Args:
        name: Logger name. Defaults to "might".

    Returns:
        A lazily bound structlog BoundLogger.
    """
    return structlog.wrap_logger(
        logging.getLogger(name or 'might'),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


# --- Event listeners ---

_LIBRARY_LOGGER = 'might'
_RESERVED_KEYS = frozenset({'event', 'logger', 'level', 'timestamp'})

type EventListener = Callable[[MightEvent], None]

_listeners: list[EventListener] = []


class MightEvent(msgspec.Struct, frozen=True, gc=False):
    """A log event emitted by might itself.

    Attributes:
        event: Event name, e.g. "might.mightify.caught".
        logger: Name of the might logger that emitted it.
        level: Log level name.
        fields: The remaining key/value pairs bound to the event.
    """

    event: str
    logger: str
    level: str
    fields: dict[str, Any] = msgspec.field(default_factory=dict)


def add_event_listener(listener: EventListener) -> Callable[[], None]:
    """Register a listener for might's own log events.

    Events from other loggers never reach the listener. Events flow once
    logging has been configured with `configure_logging()` or `init()`.

    Args:
        listener: Called with a MightEvent for every event might emits.

    Returns:
        A callable that unregisters the listener.
    """
    _listeners.append(listener)

    def remove() -> None:
        if listener in _listeners:
            _listeners.remove(listener)

    return remove


def clear_event_listeners() -> None:
    """Unregister every event listener."""
    _listeners.clear()


def _is_library_logger(name: str) -> bool:
    return name == _LIBRARY_LOGGER or name.startswith(_LIBRARY_LOGGER + '.')


def _notify_listeners(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    if not _listeners or not _is_library_logger(event_dict.get('logger', '')):
        return event_dict

    event = MightEvent(
        event=str(event_dict.get('event', '')),
        logger=event_dict['logger'],
        level=event_dict.get('level', method_name),
        fields={k: v for k, v in event_dict.items() if k not in _RESERVED_KEYS},
    )
    for listener in list(_listeners):
        try:
            listener(event)
        except Exception:
            pass  # a failing listener must not break the call that logged
    return event_dict
