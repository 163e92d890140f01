"""A reader-writer lock usable from threads and from asyncio tasks."""

import asyncio
import threading
from collections import deque
from contextlib import suppress
from types import TracebackType
from typing import Any, Generic, TypeVar

from ..context import is_async_context
from ..unwrap import Unwrap
from .mutex import PoisonError, WouldBlockError

__all__ = ["RwLock", "RwLockReadGuard", "RwLockWriteGuard"]

T = TypeVar("T")


class _ThreadRwLock:
    """Reader-writer lock for threads; waiting writers block new readers."""

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self.readers = 0
        self.writer = False
        self._waiting_writers = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self.writer or self._waiting_writers:
                self._cond.wait()
            self.readers += 1

    def try_acquire_read(self) -> bool:
        with self._cond:
            if self.writer or self._waiting_writers:
                return False
            self.readers += 1
            return True

    def release_read(self) -> None:
        with self._cond:
            self.readers -= 1
            if self.readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self.writer or self.readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self.writer = True

    def try_acquire_write(self) -> bool:
        with self._cond:
            if self.writer or self.readers:
                return False
            self.writer = True
            return True

    def release_write(self) -> None:
        with self._cond:
            self.writer = False
            self._cond.notify_all()


class _AsyncRwLock:
    """Reader-writer lock for asyncio tasks; waiting writers block new readers."""

    def __init__(self) -> None:
        self.readers = 0
        self.writer = False
        self._waiting_writers = 0
        self._waiters: deque[asyncio.Future[None]] = deque()

    async def _wait(self) -> None:
        future: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._waiters.append(future)
        try:
            await future
        finally:
            with suppress(ValueError):
                self._waiters.remove(future)

    def _wake(self) -> None:
        while self._waiters:
            future = self._waiters.popleft()
            if not future.done():
                future.set_result(None)

    async def acquire_read(self) -> None:
        while self.writer or self._waiting_writers:
            await self._wait()
        self.readers += 1

    def try_acquire_read(self) -> bool:
        if self.writer or self._waiting_writers:
            return False
        self.readers += 1
        return True

    def release_read(self) -> None:
        self.readers -= 1
        if self.readers == 0:
            self._wake()

    async def acquire_write(self) -> None:
        self._waiting_writers += 1
        try:
            while self.writer or self.readers:
                await self._wait()
        except BaseException:
            self._waiting_writers -= 1
            self._wake()
            raise
        self._waiting_writers -= 1
        self.writer = True

    def try_acquire_write(self) -> bool:
        if self.writer or self.readers:
            return False
        self.writer = True
        return True

    def release_write(self) -> None:
        self.writer = False
        self._wake()


class RwLock(Unwrap, Generic[T]):
    """Allows many readers or at most one writer at any point in time.

    Created inside a running event loop it is driven by asyncio; otherwise
    by threads. A thread-backed lock becomes poisoned when a write guard used
    as a context manager exits with an exception; ``read`` and ``write`` then
    raise PoisonError until ``clear_poison`` is called. An asyncio-backed lock
    is never poisoned.
    """

    def __init__(self, value: T) -> None:
        self._value = value
        self._poisoned = False
        if is_async_context():
            self._inner: Any = _AsyncRwLock()
            self._is_async = True
        else:
            self._inner = _ThreadRwLock()
            self._is_async = False

    def __repr__(self) -> str:
        flavour = "async" if self._is_async else "sync"
        return f"RwLock({flavour}, poisoned={self._poisoned})"

    def clear_poison(self) -> None:
        """Clear the poisoned state; a no-op for an asyncio-backed lock."""
        if not self._is_async:
            self._poisoned = False

    def is_poisoned(self) -> bool:
        """Return True if the lock is poisoned; always False when asyncio-backed."""
        return self._poisoned

    async def read(self) -> "RwLockReadGuard[T]":
        """Take shared read access, waiting until it can be had."""
        if self._is_async:
            await self._inner.acquire_read()
        else:
            self._inner.acquire_read()
        return self._checked(RwLockReadGuard(self))

    async def try_read(self) -> "RwLockReadGuard[T]":
        """Take shared read access now; raise WouldBlockError if a writer holds or awaits it."""
        if not self._inner.try_acquire_read():
            raise WouldBlockError("lock is held for writing")
        return self._checked(RwLockReadGuard(self))

    async def write(self) -> "RwLockWriteGuard[T]":
        """Take exclusive write access, waiting until it can be had."""
        if self._is_async:
            await self._inner.acquire_write()
        else:
            self._inner.acquire_write()
        return self._checked(RwLockWriteGuard(self))

    async def try_write(self) -> "RwLockWriteGuard[T]":
        """Take exclusive write access now; raise WouldBlockError if the lock is held."""
        if not self._inner.try_acquire_write():
            raise WouldBlockError("lock is already held")
        return self._checked(RwLockWriteGuard(self))

    def _checked(self, guard: Any) -> Any:
        if self._poisoned:
            guard.release()
            raise PoisonError("rwlock is poisoned: a previous writer failed")
        return guard

    def _poison(self) -> None:
        if not self._is_async:
            self._poisoned = True


class _RwLockGuard(Generic[T]):
    def __init__(self, lock: RwLock[T]) -> None:
        self._lock = lock
        self._held = True

    def _check(self) -> None:
        if not self._held:
            raise RuntimeError("lock guard has already been released")

    def _unlock(self) -> None:
        raise NotImplementedError

    def release(self) -> None:
        """Give up the access this guard holds; later calls do nothing."""
        if self._held:
            self._held = False
            self._unlock()

    def __del__(self) -> None:
        if getattr(self, "_held", False):
            self.release()

    def __str__(self) -> str:
        self._check()
        return str(self._lock._value)


class RwLockReadGuard(_RwLockGuard[T]):
    """Shared read access to the value of an RwLock."""

    def _unlock(self) -> None:
        self._lock._inner.release_read()

    @property
    def value(self) -> T:
        """The protected value."""
        self._check()
        return self._lock._value

    def release(self) -> None:
        """Release the read access; later calls do nothing."""
        super().release()

    def __enter__(self) -> "RwLockReadGuard[T]":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()


class RwLockWriteGuard(_RwLockGuard[T]):
    """Exclusive write access to the value of an RwLock."""

    def _unlock(self) -> None:
        self._lock._inner.release_write()

    @property
    def value(self) -> T:
        """The protected value."""
        self._check()
        return self._lock._value

    @value.setter
    def value(self, new_value: T) -> None:
        self._check()
        self._lock._value = new_value

    def release(self) -> None:
        """Release the write access; later calls do nothing."""
        super().release()

    def __enter__(self) -> "RwLockWriteGuard[T]":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is not None and self._held:
            self._lock._poison()
        self.release()