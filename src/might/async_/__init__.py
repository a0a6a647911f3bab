"""Async support: MightAsync, a pending computation with Might combinators.

Examples:
    >>> from might.async_ import MightAsync
    >>>
    >>> async def main():
    ...     result = await MightAsync.resolved(1, str).with_value(lambda x: x + 1)
    ...     assert result == Ok(2)
"""

from might.async_.result import MightAsync

__all__ = ['MightAsync']
