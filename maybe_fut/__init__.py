"""Awaitable I/O and locking primitives usable inside and outside an event loop."""

__version__ = "0.1.0"

__all__ = ["context", "io", "runtime", "sync", "unwrap"]