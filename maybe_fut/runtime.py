"""A minimal runtime that drives awaitables to completion in sync code."""

from collections.abc import Awaitable
from typing import Any, TypeVar

__all__ = ["PendingInSyncContextError", "SyncRuntime", "block_on"]

T = TypeVar("T")


class PendingInSyncContextError(RuntimeError):
    """Raised when an awaitable suspends while driven by the sync runtime."""


class SyncRuntime:
    """Runs awaitables that complete without ever suspending.

    Meant for exposing the sync side of an API built on dual sync/async
    wrappers: in a sync context their coroutines never wait on an event loop.
    """

    @staticmethod
    def block_on(awaitable: Awaitable[T]) -> T:
        """Drive ``awaitable`` to completion and return its result.

        Raises PendingInSyncContextError if the awaitable suspends.
        """
        iterator: Any = awaitable.__await__()
        try:
            iterator.send(None)
        except StopIteration as stop:
            return stop.value
        close = getattr(iterator, "close", None)
        if close is not None:
            close()
        raise PendingInSyncContextError(
            "awaitable should not be pending in sync context"
        )


def block_on(awaitable: Awaitable[T]) -> T:
    """Drive ``awaitable`` to completion; same as SyncRuntime.block_on."""
    return SyncRuntime.block_on(awaitable)