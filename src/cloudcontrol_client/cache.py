"""Single-slot cache for values fetched from the API.

Holds at most one value. The slot is only written once a fetch has fully
completed, so a failed or cancelled fetch leaves the previous value in place.
"""

from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class SingleValueCache(Generic[T]):
    """Cache slot holding at most one value.

    There is no lock: concurrent refreshes may race and the last write wins,
    which is fine for interchangeable snapshots of the same remote value.
    """

    def __init__(self, name: str, value: T | None = None):
        """Initialize the cache.

        Args:
            name: Name of the cached value, used for logging.
            value: Optional value to pre-populate the slot.
        """
        self._name = name
        self._value: T | None = value

    @property
    def value(self) -> T | None:
        """The cached value, or None if the slot is empty."""
        return self._value

    def clear(self) -> None:
        """Empty the slot."""
        self._value = None
        logger.debug("Cleared cached value", cache=self._name)

    async def get_or_fetch(
        self,
        fetch_func: Callable[[], Awaitable[T]],
        refresh: bool = False,
    ) -> T:
        """Return the cached value, fetching it if the slot is empty.

        Args:
            fetch_func: Coroutine function that fetches a fresh value.
            refresh: Fetch a fresh value even if one is cached.

        Returns:
            The cached or freshly fetched value.
        """
        if self._value is not None and not refresh:
            logger.debug("Using cached value", cache=self._name)
            return self._value

        value = await fetch_func()
        self._value = value
        logger.debug("Fetched fresh value", cache=self._name, refresh=refresh)
        return value
