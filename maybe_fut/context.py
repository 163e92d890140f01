"""Detection of the execution context the caller runs in."""

import asyncio

__all__ = ["is_async_context"]


def is_async_context() -> bool:
    """Return True when called while an asyncio event loop runs in this thread."""
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True