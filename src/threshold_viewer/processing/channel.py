"""Bounded channel carrying file selections to the controller."""

import asyncio
from typing import AsyncIterator

from threshold_viewer.core.files import SelectedFile

_CLOSED = object()


class ChannelClosed(Exception):
    """Raised when sending on a closed channel."""


class EventChannel:
    """Decouples whatever produces selections (CLI, GUI, tests) from the controller."""

    def __init__(self, maxsize: int = 8):
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=maxsize)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def send(self, file: SelectedFile | None) -> None:
        """Queue a selection; None means the picker was cancelled."""
        if self._closed:
            raise ChannelClosed("cannot send on a closed channel")
        await self._queue.put(file)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._queue.put(_CLOSED)

    async def __aiter__(self) -> AsyncIterator[SelectedFile | None]:
        while True:
            item = await self._queue.get()
            if item is _CLOSED:
                return
            yield item
