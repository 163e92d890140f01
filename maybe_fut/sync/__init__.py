"""Mutex, read-write lock and barrier usable from threads and asyncio tasks."""

__all__ = ["barrier", "mutex", "rwlock"]