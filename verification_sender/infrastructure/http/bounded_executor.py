"""Bounded concurrency for calls to a single external dependency."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

from ...config import ExecutorSettings
from ...domain.errors import QueueFullError

T = TypeVar("T")


class BoundedExecutor:
    """
    Runs at most ``max_workers`` calls at once with at most ``queue_size``
    more waiting. Submissions beyond that fail fast with QueueFullError
    instead of queueing without bound.
    """

    def __init__(self, name: str, settings: ExecutorSettings) -> None:
        self._name = name
        self._max_workers = settings.max_workers
        self._capacity = settings.max_workers + settings.queue_size
        self._semaphore = asyncio.Semaphore(settings.max_workers)
        self._pending = 0

    @property
    def pending(self) -> int:
        """Calls currently running or waiting for a worker."""
        return self._pending

    @property
    def active(self) -> int:
        return min(self._pending, self._max_workers)

    async def submit(self, func: Callable[[], Awaitable[T]]) -> T:
        if self._pending >= self._capacity:
            raise QueueFullError(self._name, self._capacity)

        self._pending += 1
        try:
            async with self._semaphore:
                return await func()
        finally:
            self._pending -= 1
