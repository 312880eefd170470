"""Cooperative cancellation for in-flight requests."""

import asyncio


class CancellationToken:
    """A one-shot signal that aborts the requests it is attached to.

    A single token may be shared by several requests; cancelling it aborts
    all of them. Once cancelled it stays cancelled.
    """

    def __init__(self):
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    async def wait(self) -> None:
        """Block until the token is cancelled."""
        await self._event.wait()
