"""Buffered reading: the BufRead interface, BufReader, and line/token iterators."""

from abc import abstractmethod
from typing import Generic, TypeVar

from .traits import Read

__all__ = ["BufRead", "BufReader", "Lines", "Split"]

DEFAULT_BUF_SIZE = 8192

R = TypeVar("R", bound=Read)


def _check_byte(byte: int) -> int:
    if not 0 <= byte <= 0xFF:
        raise ValueError(f"byte must be in range 0..=255, got {byte}")
    return byte


class BufRead(Read):
    """A reader with an internal buffer that can be inspected and consumed."""

    @abstractmethod
    async def fill_buf(self) -> bytes:
        """Return the buffered data, refilling from the source if it is empty."""

    @abstractmethod
    async def consume(self, amount: int) -> None:
        """Mark ``amount`` bytes of the buffer as consumed."""

    async def read_until(self, byte: int) -> bytes:
        """Read up to and including ``byte``, or to end of stream if it never appears."""
        _check_byte(byte)
        data = bytearray()
        while True:
            available = await self.fill_buf()
            index = available.find(byte)
            if index >= 0:
                data += available[: index + 1]
                await self.consume(index + 1)
                return bytes(data)
            data += available
            await self.consume(len(available))
            if not available:
                return bytes(data)

    async def skip_until(self, byte: int) -> int:
        """Discard bytes up to and including ``byte``; return how many were skipped."""
        _check_byte(byte)
        skipped = 0
        while True:
            available = await self.fill_buf()
            index = available.find(byte)
            used = index + 1 if index >= 0 else len(available)
            await self.consume(used)
            skipped += used
            if index >= 0 or used == 0:
                return skipped

    async def read_line(self) -> str:
        """Read a line including its newline; an empty string means end of stream.

        Raises UnicodeDecodeError if the line is not valid UTF-8.
        """
        return (await self.read_until(ord("\n"))).decode("utf-8")

    def split(self, delim: int) -> "Split":
        """Return an async iterator over tokens separated by ``delim``."""
        return Split(self, delim)

    def lines(self) -> "Lines":
        """Return an async iterator over the lines of this reader."""
        return Lines(self)


class BufReader(BufRead, Generic[R]):
    """Adds buffering to any reader by reading it in large chunks."""

    def __init__(self, inner: R, capacity: int = DEFAULT_BUF_SIZE) -> None:
        if capacity < 0:
            raise ValueError(f"capacity must not be negative, got {capacity}")
        self._inner = inner
        self._capacity = capacity
        self._buf = b""
        self._pos = 0

    @property
    def inner(self) -> R:
        """The underlying reader."""
        return self._inner

    def buffer(self) -> bytes:
        """Return the buffered data not yet consumed."""
        return self._buf[self._pos :]

    def capacity(self) -> int:
        """Return the number of bytes the buffer can hold."""
        return self._capacity

    def into_inner(self) -> R:
        """Return the underlying reader; buffered data is discarded."""
        return self._inner

    async def read(self, size: int) -> bytes:
        """Read at most ``size`` bytes, going through the buffer."""
        if size < 0:
            raise ValueError(f"size must not be negative, got {size}")
        if self._pos >= len(self._buf) and size >= self._capacity:
            self._buf = b""
            self._pos = 0
            return await self._inner.read(size)
        available = await self.fill_buf()
        chunk = available[:size]
        await self.consume(len(chunk))
        return chunk

    async def fill_buf(self) -> bytes:
        """Return the buffered data, refilling from the inner reader if it is empty."""
        if self._pos >= len(self._buf):
            self._pos = 0
            self._buf = bytes(await self._inner.read(self._capacity))
        return self._buf[self._pos :]

    async def consume(self, amount: int) -> None:
        """Advance past ``amount`` buffered bytes, never beyond the buffered data."""
        if amount < 0:
            raise ValueError(f"amount must not be negative, got {amount}")
        self._pos = min(self._pos + amount, len(self._buf))


class Lines:
    """Async iterator over the lines of a buffered reader, without line endings."""

    def __init__(self, reader: BufRead) -> None:
        self.reader = reader

    async def next(self) -> str | None:
        """Return the next line with ``\\n`` or ``\\r\\n`` removed, or None at end."""
        line = await self.reader.read_line()
        if not line:
            return None
        if line.endswith("\n"):
            line = line[:-1]
            if line.endswith("\r"):
                line = line[:-1]
        return line

    def __aiter__(self) -> "Lines":
        return self

    async def __anext__(self) -> str:
        line = await self.next()
        if line is None:
            raise StopAsyncIteration
        return line


class Split:
    """Async iterator over the tokens of a buffered reader separated by a byte."""

    def __init__(self, reader: BufRead, delim: int) -> None:
        self.reader = reader
        self.delim = _check_byte(delim)

    async def next(self) -> bytes | None:
        """Return the next token without its delimiter, or None at end."""
        token = await self.reader.read_until(self.delim)
        if not token:
            return None
        if token[-1] == self.delim:
            token = token[:-1]
        return token

    def __aiter__(self) -> "Split":
        return self

    async def __anext__(self) -> bytes:
        token = await self.next()
        if token is None:
            raise StopAsyncIteration
        return token