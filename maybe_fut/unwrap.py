"""Access to the underlying implementation held by a dual sync/async wrapper."""

from typing import Any

__all__ = ["Unwrap"]


class Unwrap:
    """Mixin giving access to the implementation a wrapper holds.

    A subclass stores the wrapped object in ``_inner`` and sets
    ``_is_async`` to True when that object is the async implementation.
    """

    _inner: Any
    _is_async: bool = False

    def is_std(self) -> bool:
        """Return True if the sync implementation is wrapped."""
        return not self._is_async

    def is_async(self) -> bool:
        """Return True if the async implementation is wrapped."""
        return bool(self._is_async)

    def unwrap_std(self) -> Any:
        """Return the sync implementation; raise TypeError if it is async."""
        if self._is_async:
            raise TypeError(
                f"{type(self).__name__} wraps an async implementation, not a sync one"
            )
        return self._inner

    def unwrap_async(self) -> Any:
        """Return the async implementation; raise TypeError if it is sync."""
        if not self._is_async:
            raise TypeError(
                f"{type(self).__name__} wraps a sync implementation, not an async one"
            )
        return self._inner

    def get_std(self) -> Any | None:
        """Return the sync implementation, or None if it is async."""
        return None if self._is_async else self._inner

    def get_async(self) -> Any | None:
        """Return the async implementation, or None if it is sync."""
        return self._inner if self._is_async else None