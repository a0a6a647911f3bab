"""MightAsync: a pending computation that can be handled like a Might.

MightAsync wraps one awaitable together with a normalization function
(`transform_error`). It can be awaited to get a `Might[V, E]`, or chained
immediately with the same combinators a Might has.

Failures raised by the wrapped awaitable are kept raw and only passed
through `transform_error` when they are observed, so every derived wrapper
normalizes with its own function at the moment someone looks at the error.

Example:
    ```python
    async def fetch_user(id: int) -> dict: ...

    async def main():
        name = await (
            MightAsync(fetch_user(1), transform_error=str)
            .with_value(lambda user: user['name'])
            .peek('anonymous')
        )
    ```
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Coroutine, Generator
from typing import Any

from might._internal.outcome import (
    Failed,
    Outcome,
    Rejected,
    Resolved,
    SharedOutcome,
    settle,
)
from might._logging import get_logger
from might.errors import NotAMightError
from might.result import ABSENT, Err, Ok

__all__ = ['MightAsync']

logger = get_logger(__name__)


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class MightAsync[V, E]:
    """Awaitable, chainable wrapper around a single pending computation.

    The wrapped awaitable is driven at most once, on first observation, and
    its outcome is shared by every observer and every derived wrapper. A
    MightAsync can therefore be awaited several times and chained from
    several places, even when it wraps a coroutine.

    Callbacks given to the combinators may return awaitables; those are
    awaited before the chain continues. Exceptions raised by callbacks are
    not caught and surface when the resulting wrapper is observed.

    Attributes:
        _shared: Memoized outcome of the pending computation.
        _transform_error: Normalization applied to raw failures on observation.

    Example:
        ```python
        async def example():
            result = await MightAsync.resolved(5, str).with_value(lambda x: x * 2)
            assert result == Ok(10)
        ```
    """

    __slots__ = ('_shared', '_transform_error')

    def __init__(
        self,
        awaitable: Awaitable[V],
        transform_error: Callable[[Any], E],
        *,
        catch: tuple[type[BaseException], ...] = (Exception,),
    ) -> None:
        """Wrap an awaitable.

        Args:
            awaitable: The pending computation. If it raises one of the
                catch types, the exception is the raw failure.
            transform_error: Maps a raw failure to the error type E.
            catch: Exception types captured as raw failures. Anything else
                raised by the awaitable propagates to every observer.
        """
        self._shared: SharedOutcome[V, E] = SharedOutcome.wrap(awaitable, catch)
        self._transform_error = transform_error

    @classmethod
    def _derive[U, F](
        cls,
        shared: SharedOutcome[U, F],
        transform_error: Callable[[Any], F],
    ) -> MightAsync[U, F]:
        derived: MightAsync[U, F] = cls.__new__(cls)
        derived._shared = shared
        derived._transform_error = transform_error
        return derived

    @classmethod
    def resolved(cls, value: V, transform_error: Callable[[Any], E]) -> MightAsync[V, E]:
        """Create a MightAsync that has already succeeded with value."""
        return cls._derive(SharedOutcome.of(Resolved(value)), transform_error)

    @classmethod
    def rejected(cls, reason: object, transform_error: Callable[[Any], E]) -> MightAsync[V, E]:
        """Create a MightAsync that has already failed with a raw reason.

        The reason is not normalized until it is observed.
        """
        return cls._derive(SharedOutcome.of(Rejected(reason)), transform_error)

    @classmethod
    def from_might(cls, might: Ok[V] | Err[E], transform_error: Callable[[Any], E]) -> MightAsync[V, E]:
        """Create a MightAsync from a synchronous Might.

        The error of an Err is already concrete and is never passed
        through transform_error.
        """
        if isinstance(might, Ok):
            return cls._derive(SharedOutcome.of(Resolved(might.value)), transform_error)
        return cls._derive(SharedOutcome.of(Failed(might.error)), transform_error)

    async def _observe(self, outcome: Outcome[V, E]) -> Ok[V] | Err[E]:
        if isinstance(outcome, Resolved):
            return Ok(outcome.value)
        if isinstance(outcome, Rejected):
            return Err(await _resolve(self._transform_error(outcome.reason)))
        return Err(outcome.error)

    async def _might(self) -> Ok[V] | Err[E]:
        return await self._observe(await self._shared.get())

    def __await__(self) -> Generator[Any, Any, Ok[V] | Err[E]]:
        """Support await syntax to get the resolved Might.

        Example:
            ```python
            async def example():
                assert await MightAsync.resolved(42, str) == Ok(42)
            ```
        """
        return self._might().__await__()

    def match[R](
        self,
        on_value: Callable[[V], R | Awaitable[R]],
        on_error: Callable[[E], R | Awaitable[R]],
    ) -> Coroutine[Any, Any, R]:
        """Resolve with on_value(value) or on_error(error).

        Returns:
            Coroutine producing the result of whichever callback ran.
        """

        async def _matched() -> R:
            might = await self._might()
            return await _resolve(might.match(on_value, on_error))

        return _matched()

    def with_value[U](self, f: Callable[[V], U | Awaitable[U]]) -> MightAsync[U, E]:
        """Replace the success value with f(value).

        Failures pass through untouched and are still normalized by this
        wrapper's transform_error when observed.
        """
        parent = self._shared

        async def _mapped() -> Outcome[U, E]:
            outcome = await parent.get()
            if isinstance(outcome, Resolved):
                return Resolved(await _resolve(f(outcome.value)))
            return outcome

        return MightAsync._derive(SharedOutcome(_mapped), self._transform_error)

    def with_error[F](self, f: Callable[[E], F | Awaitable[F]]) -> MightAsync[V, F]:
        """Map the error through f, applied after normalization.

        Successes pass through untouched.
        """
        parent = self._shared
        transform_error = self._transform_error

        async def _mapped() -> Outcome[V, F]:
            outcome = await parent.get()
            if isinstance(outcome, Failed):
                return Failed(await _resolve(f(outcome.error)))
            return outcome

        async def _normalize(reason: object) -> F:
            return await _resolve(f(await _resolve(transform_error(reason))))

        return MightAsync._derive(SharedOutcome(_mapped), _normalize)

    def recover(self, f: Callable[[E], V | Awaitable[V]]) -> MightAsync[V, E]:
        """Turn a failure into a success holding f(error)."""

        async def _recovered() -> Outcome[V, E]:
            might = await self._might()
            if isinstance(might, Ok):
                return Resolved(might.value)
            return Resolved(await _resolve(f(might.error)))

        return MightAsync._derive(SharedOutcome(_recovered), self._transform_error)

    def pipe[U, F](
        self,
        f: Callable[[V], Ok[U] | Err[F] | MightAsync[U, F] | Awaitable[Ok[U] | Err[F]]],
    ) -> MightAsync[U, E | F]:
        """Chain a function returning a Might or a MightAsync.

        On success, f(value) decides the outcome. A failed nested result
        fails this chain with its error as is: it is already a concrete
        error and is not passed through transform_error again. On failure,
        f is never called.

        Raises:
            NotAMightError: When observed, if f returned neither a Might nor
                something that resolves to one.
        """
        parent = self._shared

        async def _piped() -> Outcome[U, E | F]:
            outcome = await parent.get()
            if not isinstance(outcome, Resolved):
                return outcome

            nested: Any = f(outcome.value)
            if not isinstance(nested, MightAsync) and inspect.isawaitable(nested):
                settled = await settle(nested)
                if isinstance(settled, Rejected):
                    return settled
                nested = settled.value
            if isinstance(nested, MightAsync):
                nested = await nested

            if isinstance(nested, Ok):
                return Resolved(nested.value)
            if isinstance(nested, Err):
                logger.debug('might.async.pipe.failed', error_type=type(nested.error).__name__)
                return Failed(nested.error)
            raise NotAMightError(type(nested).__name__)

        return MightAsync._derive(SharedOutcome(_piped), self._transform_error)

    def peek[T](self, default: T = ABSENT) -> Coroutine[Any, Any, V | T]:  # type: ignore[assignment]
        """Resolve with the success value, or default on failure.

        Never normalizes the error and never fails for a domain failure.
        """

        async def _peeked() -> V | T:
            outcome = await self._shared.get()
            if isinstance(outcome, Resolved):
                return outcome.value
            return default

        return _peeked()

    def then[R](
        self,
        on_ok: Callable[[Ok[V]], R | Awaitable[R]] | None = None,
        on_err: Callable[[Err[E]], R | Awaitable[R]] | None = None,
    ) -> Coroutine[Any, Any, R | Ok[V] | Err[E]]:
        """Resolve the Might and hand it to the matching continuation.

        A missing continuation resolves with the Might itself.
        """

        async def _continued() -> R | Ok[V] | Err[E]:
            might = await self._might()
            if isinstance(might, Ok):
                return might if on_ok is None else await _resolve(on_ok(might))
            return might if on_err is None else await _resolve(on_err(might))

        return _continued()

    def catch[R](self, on_err: Callable[[Err[E]], R | Awaitable[R]]) -> Coroutine[Any, Any, R | Ok[V]]:
        """Resolve the Might, handing an Err to on_err."""
        return self.then(on_err=on_err)

    def finally_(self, cleanup: Callable[[], object]) -> MightAsync[V, E]:
        """Run cleanup once the computation settles, keeping its outcome.

        Exceptions raised by cleanup propagate when the returned wrapper is
        observed.
        """
        parent = self._shared

        async def _finalized() -> Outcome[V, E]:
            outcome = await parent.get()
            await _resolve(cleanup())
            return outcome

        return MightAsync._derive(SharedOutcome(_finalized), self._transform_error)

    def __repr__(self) -> str:
        return f'MightAsync({self._shared!r})'
