"""Adapters: mightify and mightify_async lift raising functions into Might."""

from might.decorators.mightify import mightify, mightify_async

__all__ = ['mightify', 'mightify_async']
