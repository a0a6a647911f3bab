"""Settled outcomes of a pending computation and a once-only memo for them.

A MightAsync never stores a normalized error. What it stores is one of:

- Resolved: the computation produced a value.
- Rejected: the computation raised; the raw reason is kept as is and only
  normalized when someone looks at it.
- Failed: an error that is already concrete (e.g. unwrapped from a nested
  Err) and must not be normalized again.

SharedOutcome drives the wrapped awaitable at most once and hands the same
outcome to every observer. Coroutines can only be awaited once, so without
the memo a MightAsync could not be chained and awaited independently.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

import aiologic
import msgspec

from might._logging import get_logger

__all__ = ['Failed', 'Outcome', 'Rejected', 'Resolved', 'SharedOutcome']

logger = get_logger(__name__)


class Resolved[V](msgspec.Struct, frozen=True, gc=False):
    value: V


class Rejected(msgspec.Struct, frozen=True, gc=False):
    reason: object


class Failed[E](msgspec.Struct, frozen=True, gc=False):
    error: E


type Outcome[V, E] = Resolved[V] | Rejected | Failed[E]


async def settle[V](
    awaitable: Awaitable[V],
    catch: tuple[type[BaseException], ...] = (Exception,),
) -> Resolved[V] | Rejected:
    """Await a raw awaitable and capture how it settled.

    Only exceptions matching catch become a Rejected outcome; anything
    else propagates to the caller.
    """
    try:
        value = await awaitable
    except catch as exc:
        logger.debug('might.async.rejected', exc_type=type(exc).__name__)
        return Rejected(exc)
    return Resolved(value)


class SharedOutcome[V, E]:
    """Outcome of a pending computation, computed once and shared.

    Thread-safe and async-safe using aiologic.Lock: concurrent observers
    wait for the single settle instead of driving the awaitable twice.

    If settling raises instead of producing an outcome (a callback defect,
    an exception outside the caught types, or the settling observer being
    cancelled), that exception is memoized too and re-raised to every later
    observer. The awaitable and the callbacks never run a second time.

    Examples:
        >>> shared = SharedOutcome.of(Resolved(1))
        >>> shared.is_set()
        True
    """

    __slots__ = ('_init', '_is_set', '_lock', '_outcome', '_raised')

    def __init__(self, init: Callable[[], Awaitable[Outcome[V, E]]]) -> None:
        """Create a SharedOutcome.

        Args:
            init: Zero-argument callable producing the awaitable whose
                result is the outcome. Called at most once.
        """
        self._lock = aiologic.Lock()
        self._init: Callable[[], Awaitable[Outcome[V, E]]] | None = init
        self._outcome: Outcome[V, E] | None = None
        self._raised: BaseException | None = None
        self._is_set = False

    @classmethod
    def of(cls, outcome: Outcome[V, E]) -> SharedOutcome[V, E]:
        """Create an already settled SharedOutcome."""
        shared: SharedOutcome[V, E] = cls.__new__(cls)
        shared._lock = aiologic.Lock()
        shared._init = None
        shared._outcome = outcome
        shared._raised = None
        shared._is_set = True
        return shared

    @classmethod
    def wrap(
        cls,
        awaitable: Awaitable[Any],
        catch: tuple[type[BaseException], ...] = (Exception,),
    ) -> SharedOutcome[Any, Any]:
        """Create a SharedOutcome settling a raw awaitable of a value."""
        return cls(lambda: settle(awaitable, catch))

    def is_set(self) -> bool:
        """Check if the outcome has been computed."""
        return self._is_set

    async def get(self) -> Outcome[V, E]:
        """Return the outcome, settling the computation on first use.

        Raises:
            BaseException: Whatever settling raised, on this and every
                later call.
        """
        if not self._is_set:
            async with self._lock:
                if not self._is_set:
                    init = self._init
                    assert init is not None
                    self._init = None
                    try:
                        self._outcome = await init()
                    except BaseException as exc:
                        self._raised = exc
                        raise
                    finally:
                        self._is_set = True

        if self._raised is not None:
            raise self._raised
        return self._outcome  # type: ignore[return-value]

    def __repr__(self) -> str:
        if self._raised is not None:
            return f'SharedOutcome(<raised {type(self._raised).__name__}>)'
        if self._is_set:
            return f'SharedOutcome({self._outcome!r})'
        return 'SharedOutcome(<pending>)'
