"""Asynchronous reader, writer and seeker interfaces."""

import io
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass

__all__ = ["Read", "Seek", "SeekFrom", "Write"]

_PROBE_SIZE = 32


@dataclass(frozen=True)
class SeekFrom:
    """A seek target: an offset relative to the start, the current position or the end."""

    whence: int
    offset: int

    @staticmethod
    def start(offset: int) -> "SeekFrom":
        """Seek to ``offset`` bytes from the start; the offset may not be negative."""
        if offset < 0:
            raise ValueError(f"offset from start must not be negative, got {offset}")
        return SeekFrom(io.SEEK_SET, offset)

    @staticmethod
    def current(offset: int) -> "SeekFrom":
        """Seek ``offset`` bytes relative to the current position."""
        return SeekFrom(io.SEEK_CUR, offset)

    @staticmethod
    def end(offset: int) -> "SeekFrom":
        """Seek ``offset`` bytes relative to the end of the stream."""
        return SeekFrom(io.SEEK_END, offset)


class Read(ABC):
    """A source of bytes read asynchronously."""

    @abstractmethod
    async def read(self, size: int) -> bytes:
        """Read at most ``size`` bytes; an empty result means end of stream."""

    async def read_vectored(self, sizes: Iterable[int]) -> list[bytes]:
        """Perform one read for each requested size and return the chunks."""
        return [await self.read(size) for size in sizes]

    def is_read_vectored(self) -> bool:
        """Return whether this reader has an efficient vectored read."""
        return False

    async def read_to_end(self) -> bytes:
        """Read until end of stream and return everything read."""
        chunks = bytearray()
        while chunk := await self.read(_PROBE_SIZE):
            chunks += chunk
        return bytes(chunks)

    async def read_to_string(self) -> str:
        """Read until end of stream and decode it as UTF-8.

        Raises UnicodeDecodeError if the data is not valid UTF-8.
        """
        return (await self.read_to_end()).decode("utf-8")

    async def read_exact(self, size: int) -> bytes:
        """Read exactly ``size`` bytes; raise EOFError if the stream ends first."""
        data = bytearray()
        while len(data) < size:
            chunk = await self.read(size - len(data))
            if not chunk:
                raise EOFError("failed to fill whole buffer")
            data += chunk
        return bytes(data)


class Write(ABC):
    """A sink of bytes written asynchronously."""

    @abstractmethod
    async def write(self, data: bytes) -> int:
        """Write some of ``data`` and return how many bytes were written."""

    @abstractmethod
    async def flush(self) -> None:
        """Push any buffered data to its destination."""

    async def write_vectored(self, buffers: Iterable[bytes]) -> int:
        """Write each buffer once and return the total number of bytes written."""
        total = 0
        for buffer in buffers:
            total += await self.write(buffer)
        return total

    async def write_all(self, data: bytes) -> None:
        """Write ``data`` until all of it is written or the writer accepts nothing."""
        view = memoryview(bytes(data))
        while view:
            written = await self.write(bytes(view))
            if written == 0:
                break
            view = view[written:]


class Seek(ABC):
    """A cursor that can be moved within a stream of bytes."""

    @abstractmethod
    async def seek(self, pos: SeekFrom) -> int:
        """Move the cursor and return the new position from the start."""

    async def rewind(self) -> int:
        """Move the cursor back to the start of the stream."""
        return await self.seek(SeekFrom.start(0))

    async def stream_position(self) -> int:
        """Return the current position from the start of the stream."""
        return await self.seek(SeekFrom.current(0))

    async def seek_relative(self, offset: int) -> int:
        """Move the cursor ``offset`` bytes relative to the current position."""
        return await self.seek(SeekFrom.current(offset))