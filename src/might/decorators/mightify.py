"""mightify and mightify_async: lift raising functions into Might values."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, overload

import wrapt

from might._config import current_config
from might._logging import get_logger
from might.async_.result import MightAsync
from might.result import Err, Ok

__all__ = ['mightify', 'mightify_async']

logger = get_logger(__name__)


def _caught(exceptions: tuple[type[BaseException], ...] | None) -> tuple[type[BaseException], ...]:
    return exceptions if exceptions is not None else current_config().catch


@overload
def mightify[**P, T, E](
    func: Callable[P, T],
    transform_error: Callable[[Any], E],
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Callable[P, Ok[T] | Err[E]]: ...


@overload
def mightify[**P, T, E](
    func: None = None,
    *,
    transform_error: Callable[[Any], E],
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Callable[[Callable[P, T]], Callable[P, Ok[T] | Err[E]]]: ...


def mightify(
    func: Callable[..., Any] | None = None,
    transform_error: Callable[[Any], Any] | None = None,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Any:
    """Convert a function so that it returns a Might instead of raising.

    The returned function has the same signature as func. It returns
    Ok(result) when func returns normally and Err(transform_error(exc))
    when func raises one of the caught exception types. transform_error
    is called exactly once per caught failure.

    Can be used as a plain function or as a decorator:
        parse = mightify(int, transform_error=str)

        @mightify(transform_error=lambda e: e.args[0])
        def risky(): ...

    Args:
        func: The function to convert (omit to get a decorator).
        transform_error: Maps the caught exception to the error type E.
        exceptions: Exception types to catch. Defaults to the configured
            `MightConfig.catch`, which is (Exception,) unless changed.

    Returns:
        A wrapped function that returns Might[T, E] instead of T.

    Example:
        ```python
        parse = mightify(int, transform_error=lambda e: type(e).__name__)
        parse('12')
        # Ok(value=12)
        parse('twelve')
        # Err(error='ValueError')
        ```
    """
    if transform_error is None:
        msg = 'mightify() requires a transform_error function'
        raise TypeError(msg)

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[..., Any],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Ok[Any] | Err[Any]:
        try:
            result = wrapped(*args, **kwargs)
        except _caught(exceptions) as e:
            logger.debug(
                'might.mightify.caught',
                function=getattr(wrapped, '__name__', repr(wrapped)),
                exc_type=type(e).__name__,
            )
            return Err(transform_error(e))
        return Ok(result)

    if func is not None:
        return wrapper(func)
    return wrapper


@overload
def mightify_async[**P, T, E](
    func: Callable[P, Awaitable[T]],
    transform_error: Callable[[Any], E],
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Callable[P, MightAsync[T, E]]: ...


@overload
def mightify_async[**P, T, E](
    func: None = None,
    *,
    transform_error: Callable[[Any], E],
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, MightAsync[T, E]]]: ...


def mightify_async(
    func: Callable[..., Awaitable[Any]] | None = None,
    transform_error: Callable[[Any], Any] | None = None,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Any:
    """Convert an async function so that it returns a MightAsync.

    The returned function is synchronous: it calls func and wraps the
    awaitable it returns without awaiting it. A failure raised by that
    awaitable is normalized with transform_error only when the MightAsync
    is observed. If func raises before it even produces an awaitable, the
    exception is treated the same way.

    Note:
        The same exception types are caught whether func raises before
        returning an awaitable or the awaitable raises later. Anything else
        propagates, from the call or from observing the MightAsync.

    Args:
        func: The async function to convert (omit to get a decorator).
        transform_error: Maps the raw failure to the error type E.
        exceptions: Exception types to catch. Defaults to
            `MightConfig.catch` at call time.

    Returns:
        A wrapped function that returns MightAsync[T, E].

    Example:
        ```python
        @mightify_async(transform_error=str)
        async def fetch(url: str) -> bytes:
            ...

        body = await fetch('https://example.org').peek(b'')
        ```
    """
    if transform_error is None:
        msg = 'mightify_async() requires a transform_error function'
        raise TypeError(msg)

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[..., Awaitable[Any]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> MightAsync[Any, Any]:
        caught = _caught(exceptions)
        try:
            awaitable = wrapped(*args, **kwargs)
        except caught as e:
            logger.debug(
                'might.mightify.caught',
                function=getattr(wrapped, '__name__', repr(wrapped)),
                exc_type=type(e).__name__,
            )
            return MightAsync.rejected(e, transform_error)
        return MightAsync(awaitable, transform_error, catch=caught)

    if func is not None:
        return wrapper(func)
    return wrapper
