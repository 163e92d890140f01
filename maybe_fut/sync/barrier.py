"""A barrier that works both from threads and from asyncio tasks."""

import asyncio
import threading
from dataclasses import dataclass

from ..context import is_async_context
from ..unwrap import Unwrap

__all__ = ["Barrier", "BarrierWaitResult"]


@dataclass(frozen=True)
class BarrierWaitResult:
    """Outcome of Barrier.wait: whether the caller was the leader."""

    leader: bool
    is_async: bool = False

    def is_leader(self) -> bool:
        """Return True for exactly one of the parties of each rendezvous."""
        return self.leader


class Barrier(Unwrap):
    """Lets a fixed number of parties synchronize the start of some computation.

    Created inside a running event loop it wraps an asyncio barrier;
    otherwise it wraps a threading barrier. A count of 0 behaves like 1.
    """

    def __init__(self, n: int) -> None:
        if n < 0:
            raise ValueError(f"barrier size must not be negative, got {n}")
        parties = max(n, 1)
        if is_async_context():
            self._inner = asyncio.Barrier(parties)
            self._is_async = True
        else:
            self._inner = threading.Barrier(parties)
            self._is_async = False

    async def wait(self) -> BarrierWaitResult:
        """Wait until all parties have arrived; the last to arrive is the leader.

        The barrier can be reused once every party has passed.
        """
        if self._is_async:
            index = await self._inner.wait()
        else:
            index = self._inner.wait()
        return BarrierWaitResult(
            leader=index == self._inner.parties - 1, is_async=self._is_async
        )