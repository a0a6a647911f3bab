"""Library error types: dual struct+exception for Might and raise-based code."""

from __future__ import annotations

import msgspec

__all__ = ['NotAMight', 'NotAMightError']


class NotAMight(msgspec.Struct, frozen=True, gc=False):
    """A chained callback returned something other than a Might - struct variant."""

    type_name: str

    def to_exception(self) -> NotAMightError:
        """Convert to exception for raise-based code."""
        return NotAMightError(self.type_name)


class NotAMightError(TypeError):
    """A chained callback returned something other than a Might - exception variant.

    Raised when a callback given to `MightAsync.pipe` returns a value that
    is neither a Might, a MightAsync, nor an awaitable resolving to a Might.
    This is a defect in the callback and is never turned into a domain
    failure.
    """

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f'Expected Ok, Err or MightAsync from pipe callback, got {type_name}')

    def to_struct(self) -> NotAMight:
        """Convert to struct for Might-based code."""
        return NotAMight(self.type_name)
