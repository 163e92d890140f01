"""A writer adapter that buffers its output."""

from typing import Generic, TypeVar

from .traits import Write

__all__ = ["BufWriter"]

DEFAULT_BUF_SIZE = 8 * 1024

W = TypeVar("W", bound=Write)


class BufWriter(Write, Generic[W]):
    """Wraps a writer and buffers small writes until flushed.

    Writes smaller than the capacity are collected in memory; larger ones go
    straight to the inner writer after any pending data.
    """

    def __init__(self, inner: W, capacity: int = DEFAULT_BUF_SIZE) -> None:
        if capacity < 0:
            raise ValueError(f"capacity must not be negative, got {capacity}")
        self._inner = inner
        self._capacity = capacity
        self._buf = bytearray()

    @property
    def inner(self) -> W:
        """The underlying writer."""
        return self._inner

    def buffer(self) -> bytes:
        """Return the data buffered but not yet written."""
        return bytes(self._buf)

    def capacity(self) -> int:
        """Return the number of bytes the buffer can hold."""
        return self._capacity

    def into_inner(self) -> W:
        """Return the underlying writer; buffered data is not written."""
        return self._inner

    def into_parts(self) -> tuple[W, bytes]:
        """Return the underlying writer and the buffered but unwritten data."""
        return self._inner, bytes(self._buf)

    async def _flush_buf(self) -> None:
        if self._buf:
            pending = bytes(self._buf)
            self._buf.clear()
            await self._inner.write_all(pending)

    async def write(self, data: bytes) -> int:
        """Buffer ``data``, or write it directly if it does not fit the buffer."""
        data = bytes(data)
        if len(data) < self._capacity:
            if len(self._buf) + len(data) > self._capacity:
                await self._flush_buf()
            self._buf += data
            return len(data)
        await self._flush_buf()
        return await self._inner.write(data)

    async def flush(self) -> None:
        """Write out all buffered data and flush the inner writer."""
        await self._flush_buf()
        await self._inner.flush()