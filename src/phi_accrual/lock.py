"""Asyncio reader/writer lock.

Any number of readers may hold the lock together; a writer holds it
alone. A waiting writer blocks readers that arrive after it, so a busy
stream of readers cannot starve writers.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

__all__ = ["ReadWriteLock"]


class ReadWriteLock:
    """Shared/exclusive guard for coroutines on a single event loop.

    Examples
    --------
    >>> lock = ReadWriteLock()
    >>> async def read_value() -> int:
    ...     async with lock.read():
    ...         return 42
    """

    def __init__(self) -> None:
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0
        self._notifiers: set[asyncio.Future[None]] = set()

    @property
    def readers(self) -> int:
        """Number of coroutines currently holding the read side."""
        return self._readers

    @property
    def writer_active(self) -> bool:
        return self._writer

    async def acquire_read(self) -> None:
        async with self._cond:
            await self._cond.wait_for(
                lambda: not self._writer and self._waiting_writers == 0
            )
            self._readers += 1

    async def release_read(self) -> None:
        # state changes before the first await so cancellation cannot leak it
        self._readers -= 1
        if self._readers == 0:
            await self._wake_waiters()

    async def _wake_waiters(self) -> None:
        task = asyncio.ensure_future(self._notify_all())
        self._notifiers.add(task)
        task.add_done_callback(self._notifiers.discard)
        await asyncio.shield(task)

    async def _notify_all(self) -> None:
        async with self._cond:
            self._cond.notify_all()

    async def acquire_write(self) -> None:
        async with self._cond:
            self._waiting_writers += 1
            try:
                await self._cond.wait_for(
                    lambda: not self._writer and self._readers == 0
                )
            except BaseException:
                # readers queued behind this writer must be woken up
                self._waiting_writers -= 1
                self._cond.notify_all()
                raise
            self._waiting_writers -= 1
            self._writer = True

    async def release_write(self) -> None:
        self._writer = False
        await self._wake_waiters()

    @asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        """Hold the shared side for the duration of the block."""
        await self.acquire_read()
        try:
            yield
        finally:
            await self.release_read()

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        """Hold the exclusive side for the duration of the block."""
        await self.acquire_write()
        try:
            yield
        finally:
            await self.release_write()
