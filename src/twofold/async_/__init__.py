"""Async utilities: DeferredResult for chaining Result operations through awaitables.

Examples:
    >>> from twofold.async_ import DeferredResult
    >>>
    >>> async def fetch(id: int) -> Result[dict, str]:
    ...     return Success({'id': id})
    >>>
    >>> async def main():
    ...     result = await DeferredResult(fetch(1)).map(lambda d: d['id'])
"""

from twofold.async_.deferred import DeferredResult, DeferredSuccess

__all__ = [
    'DeferredResult',
    'DeferredSuccess',
]
