"""A mutual exclusion lock usable from threads and from asyncio tasks."""

import asyncio
import threading
from types import TracebackType
from typing import Any, Generic, TypeVar

from ..context import is_async_context
from ..unwrap import Unwrap

__all__ = ["Mutex", "MutexGuard", "PoisonError", "WouldBlockError"]

T = TypeVar("T")


class PoisonError(RuntimeError):
    """Raised when a lock is taken after a holder failed with an exception."""


class WouldBlockError(RuntimeError):
    """Raised by a try-lock operation when the lock is held elsewhere."""


class Mutex(Unwrap, Generic[T]):
    """Protects a value so only one holder at a time can access it.

    Created inside a running event loop it wraps an asyncio lock; otherwise
    it wraps a threading lock. The value is reached through the guard
    returned by ``lock`` or ``try_lock``.

    A thread-backed mutex becomes poisoned when a guard used as a context
    manager exits with an exception; further locking then raises
    PoisonError until ``clear_poison`` is called. An asyncio-backed mutex
    is never poisoned.
    """

    def __init__(self, value: T) -> None:
        self._value = value
        self._poisoned = False
        if is_async_context():
            self._inner: Any = asyncio.Lock()
            self._is_async = True
        else:
            self._inner = threading.Lock()
            self._is_async = False

    def __repr__(self) -> str:
        flavour = "async" if self._is_async else "sync"
        return f"Mutex({flavour}, poisoned={self._poisoned})"

    def clear_poison(self) -> None:
        """Clear the poisoned state; a no-op for an asyncio-backed mutex."""
        if not self._is_async:
            self._poisoned = False

    def is_poisoned(self) -> bool:
        """Return True if the mutex is poisoned; always False when asyncio-backed."""
        return self._poisoned

    async def lock(self) -> "MutexGuard[T]":
        """Acquire the mutex, waiting until it is available, and return a guard.

        Raises PoisonError if the mutex is poisoned; the lock is then released.
        """
        if self._is_async:
            await self._inner.acquire()
        else:
            self._inner.acquire()
        return self._make_guard()

    async def try_lock(self) -> "MutexGuard[T]":
        """Acquire the mutex only if it is free right now and return a guard.

        Raises WouldBlockError if it is held, PoisonError if it is poisoned.
        """
        if self._is_async:
            if self._inner.locked():
                raise WouldBlockError("mutex is already locked")
            await self._inner.acquire()
        elif not self._inner.acquire(blocking=False):
            raise WouldBlockError("mutex is already locked")
        return self._make_guard()

    def _make_guard(self) -> "MutexGuard[T]":
        guard = MutexGuard(self)
        if self._poisoned:
            guard.release()
            raise PoisonError("mutex is poisoned: a previous holder failed")
        return guard

    def _poison(self) -> None:
        if not self._is_async:
            self._poisoned = True

    def _release(self) -> None:
        self._inner.release()


class MutexGuard(Generic[T]):
    """Scoped access to the value of a locked Mutex.

    The lock is released by ``release``, on leaving a ``with`` or
    ``async with`` block, or when the guard is garbage collected.
    """

    def __init__(self, mutex: Mutex[T]) -> None:
        self._mutex = mutex
        self._held = True

    def _check(self) -> None:
        if not self._held:
            raise RuntimeError("mutex guard has already been released")

    @property
    def value(self) -> T:
        """The protected value."""
        self._check()
        return self._mutex._value

    @value.setter
    def value(self, new_value: T) -> None:
        self._check()
        self._mutex._value = new_value

    def release(self) -> None:
        """Unlock the mutex; later calls do nothing."""
        if self._held:
            self._held = False
            self._mutex._release()

    def _exit(self, exc_type: type[BaseException] | None) -> None:
        if exc_type is not None and self._held:
            self._mutex._poison()
        self.release()

    def __enter__(self) -> "MutexGuard[T]":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._exit(exc_type)

    async def __aenter__(self) -> "MutexGuard[T]":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._exit(exc_type)

    def __del__(self) -> None:
        if getattr(self, "_held", False):
            self.release()

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        state = "held" if self._held else "released"
        return f"MutexGuard({state})"