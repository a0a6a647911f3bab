"""Might type: Ok[V] | Err[E] for explicit, value-based error handling.

A Might is the reified outcome of a fallible operation. Both variants are
frozen msgspec structs exposing the same combinators, so code can transform
and chain outcomes without raising or catching exceptions.

Example:
    ```python
    from might import err, ok

    ok(5).with_value(lambda x: x * 2).match(lambda v: v, lambda _: -1)
    # 10

    err('boom').pipe(lambda x: ok(x + 1)).peek('fallback')
    # 'fallback'
    ```
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, ClassVar, Final, TypeIs

import msgspec

__all__ = ['ABSENT', 'Absent', 'Err', 'Might', 'Ok', 'err', 'is_might', 'ok']


class Absent(msgspec.Struct, frozen=True, gc=False):
    """Marker for a value that is not there.

    Returned by `Err.peek()` when no default is supplied. This is a
    singleton - use the `ABSENT` constant instead of instantiating directly.
    """

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return 'ABSENT'


ABSENT: Final[Absent] = Absent()


class Ok[V](msgspec.Struct, frozen=True, gc=False):
    """Success variant of Might containing a value of type V.

    Examples:
        >>> ok(42).peek()
        42
        >>> ok(42).with_value(lambda x: x * 2)
        Ok(value=84)
    """

    value: V

    is_ok: ClassVar[bool] = True
    is_error: ClassVar[bool] = False

    def match[R](self, on_value: Callable[[V], R], on_error: Callable[[Any], R]) -> R:  # noqa: ARG002
        """Call on_value with the contained value and return its result."""
        return on_value(self.value)

    def with_value[U](self, f: Callable[[V], U]) -> Ok[U]:
        """Apply a function to the contained value.

        Args:
            f: Function to apply to the Ok value.

        Returns:
            A new Ok containing f(value).
        """
        return Ok(f(self.value))

    def with_error(self, _f: Callable[[Any], object]) -> Ok[V]:
        """Return an equal Ok since there is no error to transform."""
        return Ok(self.value)

    def recover(self, _f: Callable[[Any], V]) -> Ok[V]:
        """Return an equal Ok since there is nothing to recover from."""
        return Ok(self.value)

    def pipe[U, F](self, f: Callable[[V], Ok[U] | Err[F]]) -> Ok[U] | Err[F]:
        """Chain a Might-returning function on the contained value.

        Also known as flatmap or bind. The result of f is returned as is,
        so it decides which variant comes out.

        Args:
            f: Function that takes V and returns Might[U, F].

        Returns:
            The Might returned by f.
        """
        return f(self.value)

    def peek(self, default: object = ABSENT) -> V:  # noqa: ARG002
        """Return the contained value, ignoring the default."""
        return self.value


class Err[E](msgspec.Struct, frozen=True, gc=False):
    """Error variant of Might containing an error of type E.

    Examples:
        >>> err('bad').is_error
        True
        >>> err('bad').peek(0)
        0
        >>> err('bad').peek()
        ABSENT
    """

    error: E

    is_ok: ClassVar[bool] = False
    is_error: ClassVar[bool] = True

    def match[R](self, on_value: Callable[[Any], R], on_error: Callable[[E], R]) -> R:  # noqa: ARG002
        """Call on_error with the contained error and return its result."""
        return on_error(self.error)

    def with_value(self, _f: Callable[[Any], object]) -> Err[E]:
        """Return an equal Err; the value function is never called."""
        return Err(self.error)

    def with_error[F](self, f: Callable[[E], F]) -> Err[F]:
        """Apply a function to the contained error.

        Args:
            f: Function to apply to the error.

        Returns:
            A new Err containing f(error).
        """
        return Err(f(self.error))

    def recover[V](self, f: Callable[[E], V]) -> Ok[V]:
        """Convert the failure into a success.

        Args:
            f: Function computing a value from the error.

        Returns:
            Ok containing f(error).
        """
        return Ok(f(self.error))

    def pipe(self, _f: Callable[[Any], object]) -> Err[E]:
        """Short-circuit: return an equal Err without calling the function."""
        return Err(self.error)

    def peek[T](self, default: T = ABSENT) -> T:  # type: ignore[assignment]
        """Return the default, or ABSENT when none was given."""
        return default


type Might[V, E] = Ok[V] | Err[E]


def ok[V](value: V) -> Ok[V]:
    """Create a successful Might holding value."""
    return Ok(value)


def err[E](error: E) -> Err[E]:
    """Create a failed Might holding error."""
    return Err(error)


def is_might(obj: object) -> TypeIs[Ok[Any] | Err[Any]]:
    """Return True if obj is an Ok or an Err."""
    return isinstance(obj, Ok | Err)
