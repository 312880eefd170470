"""Owned, single-writer storage for authentication headers.

Every request snapshots the current headers just before it is sent. A
refresh replaces the whole header mapping at once under a lock, so readers
racing a refresh observe either the old or the new credentials, never a
partially updated set.
"""

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from types import MappingProxyType

import structlog

logger = structlog.get_logger(__name__)


class CredentialCell:
    """Holds the header set produced by an auth provider.

    Readers call :meth:`snapshot` without locking. Refreshes go through
    :meth:`update`, which serializes them with an ``asyncio.Lock``. Every
    swap bumps :attr:`generation`.
    """

    def __init__(self, headers: Mapping[str, str] | None = None):
        """Initialize the cell.

        Args:
            headers: Initial header set.
        """
        self._lock = asyncio.Lock()
        self._headers: Mapping[str, str] = MappingProxyType(dict(headers or {}))
        self._generation = 0

    @property
    def generation(self) -> int:
        """Number of times the headers have been replaced."""
        return self._generation

    def snapshot(self) -> dict[str, str]:
        """Return a copy of the current headers."""
        return dict(self._headers)

    def replace(self, headers: Mapping[str, str]) -> None:
        """Swap in a new header set unconditionally.

        Used for per-request values such as signatures, where every caller
        must install its own headers.
        """
        self._headers = MappingProxyType(dict(headers))
        self._generation += 1

    async def update(
        self,
        produce: Callable[[], Awaitable[Mapping[str, str] | None]],
        seen_generation: int | None = None,
    ) -> bool:
        """Replace the headers with the result of ``produce``.

        ``produce`` runs while holding the writer lock. If the headers were
        swapped after ``seen_generation`` (by default, the generation when
        this call started), ``produce`` is not called and the newer headers
        are kept.

        Args:
            produce: Coroutine function returning the new headers, or None
                to keep the current ones.
            seen_generation: Generation of the headers the caller last used,
                e.g. the ones a rejected request was sent with.

        Returns:
            True if the headers are newer than ``seen_generation``.
        """
        seen = self._generation if seen_generation is None else seen_generation
        async with self._lock:
            if self._generation != seen:
                logger.debug("Credentials already replaced by a concurrent writer")
                return True

            headers = await produce()
            if headers is None:
                return False
            self.replace(headers)
            logger.debug("Credentials replaced", generation=self._generation)
            return True
