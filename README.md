# maybe_fut

Awaitable I/O and synchronization primitives that work both inside and
outside an asyncio event loop. Every operation is a coroutine: inside a
running event loop you `await` it, and in plain synchronous code you drive
it to completion with `block_on`.

Requires Python 3.11 or later and has no runtime dependencies.

## Detecting the context

```python
from maybe_fut.context import is_async_context

is_async_context()  # False in ordinary code, True while an event loop runs in this thread
```

## Running awaitables from sync code

`maybe_fut.runtime.block_on` (the same as `SyncRuntime.block_on`) runs an
awaitable that completes without ever suspending and returns its result.
If the awaitable suspends, `PendingInSyncContextError` (a `RuntimeError`)
is raised.

```python
from maybe_fut.runtime import block_on

async def answer():
    return 42

assert block_on(answer()) == 42
```

## Reaching the wrapped implementation

The lock and barrier types pick their implementation when created: an
asyncio primitive inside a running event loop, a thread-based one otherwise.
They share the `maybe_fut.unwrap.Unwrap` interface:

- `is_std()` / `is_async()` tell which implementation is wrapped;
- `unwrap_std()` / `unwrap_async()` return it, raising `TypeError` for the
  wrong kind;
- `get_std()` / `get_async()` return it, or `None` for the wrong kind.

## I/O

`maybe_fut.io.traits` defines the abstract interfaces:

- `Read`: implement `async read(size)`; you get `read_vectored(sizes)`,
  `read_to_end()`, `read_to_string()` (UTF-8, raises `UnicodeDecodeError`)
  and `read_exact(size)` (raises `EOFError` if the stream ends early).
- `Write`: implement `async write(data)` and `async flush()`; you get
  `write_vectored(buffers)` and `write_all(data)`.
- `Seek`: implement `async seek(pos)`; you get `rewind()`,
  `stream_position()` and `seek_relative(offset)`. Positions are built with
  `SeekFrom.start(offset)`, `SeekFrom.current(offset)` and
  `SeekFrom.end(offset)`.

`maybe_fut.io.buf_reader.BufReader(inner, capacity=8192)` adds buffering to
any `Read`. It offers `fill_buf()`, `consume(amount)`, `buffer()`,
`capacity()`, `into_inner()`, `read_until(byte)`, `skip_until(byte)`,
`read_line()`, and the async iterators `lines()` (endings `\n` and `\r\n`
stripped) and `split(delim)`.

```python
from maybe_fut.io.buf_reader import BufReader
from maybe_fut.io.traits import Read
from maybe_fut.runtime import block_on

class BytesReader(Read):
    def __init__(self, data: bytes) -> None:
        self._data = data

    async def read(self, size: int) -> bytes:
        chunk, self._data = self._data[:size], self._data[size:]
        return chunk

reader = BufReader(BytesReader(b"line1|line2|line3"))
assert block_on(reader.read_until(ord("|"))) == b"line1|"
assert reader.buffer() == b"line2|line3"
```

Inside an event loop the iterators are used with `async for`:

```python
import asyncio

async def main():
    async for line in BufReader(BytesReader(b"a\nb\r\nc\n")).lines():
        print(line)

asyncio.run(main())
```

`maybe_fut.io.buf_writer.BufWriter(inner, capacity=8192)` collects writes
smaller than its capacity in memory and passes larger ones straight to the
inner writer; `flush()` writes out the buffer and flushes the inner writer.
It also offers `buffer()`, `capacity()`, `into_inner()` and `into_parts()`.

## Synchronization

- `maybe_fut.sync.mutex.Mutex(value)`: `lock()` and `try_lock()` return a
  `MutexGuard` whose `value` can be read and assigned. The guard is released
  by `release()`, on leaving a `with` / `async with` block, or when garbage
  collected.
- `maybe_fut.sync.rwlock.RwLock(value)`: `read()` / `try_read()` return an
  `RwLockReadGuard`, `write()` / `try_write()` an `RwLockWriteGuard`
  (whose `value` is assignable). Waiting writers keep new readers out.
- `maybe_fut.sync.barrier.Barrier(n)`: `wait()` returns a
  `BarrierWaitResult`; `is_leader()` is true for exactly one party of each
  rendezvous. A count of 0 behaves like 1.

The `try_*` methods raise `WouldBlockError` instead of waiting. A
thread-backed `Mutex` or `RwLock` becomes poisoned when a guard (for
`RwLock`, a write guard) used as a context manager exits with an
exception; locking then raises `PoisonError` until `clear_poison()` is
called, and `is_poisoned()` reports the state. Asyncio-backed locks are
never poisoned.

```python
from maybe_fut.runtime import block_on
from maybe_fut.sync.barrier import Barrier
from maybe_fut.sync.mutex import Mutex

mutex = Mutex(42)
with block_on(mutex.lock()) as guard:
    guard.value = 43
assert block_on(mutex.lock()).value == 43

assert block_on(Barrier(1).wait()).is_leader()
```

## What is not included

The package provides no handles for the process's standard input, output
and error streams, no ready-made trivial readers and writers (such as one
that is always empty, one that repeats a byte, or one that discards
everything), and no helpers that choose between a synchronous and an
asynchronous implementation of a function at call time. Readers and writers
are whatever you implement against the `Read`, `Write` and `Seek`
interfaces.