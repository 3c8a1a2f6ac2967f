"""Decorators: @capture and @capture_async."""

from twofold.decorators.capture import capture, capture_async

__all__ = [
    'capture',
    'capture_async',
]
