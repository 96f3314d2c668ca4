"""Collection point for failed uploads."""
from typing import List
import asyncio

from ..models import UploadResult

_CLOSED = object()


class ErrorSink:
    """
    Unbounded many-producer queue of failures.

    Workers put() without ever blocking. The orchestrator closes the sink
    once every worker has finished, then iterates it to the end.
    """

    def __init__(self):
        self._queue: asyncio.Queue = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def qsize(self) -> int:
        """Failures buffered and not yet drained."""
        size = self._queue.qsize()
        return size - 1 if self._closed and size else size

    def put(self, failure: UploadResult) -> None:
        if self._closed:
            raise RuntimeError("ErrorSink is closed")
        self._queue.put_nowait(failure)

    def close(self) -> None:
        if self._closed:
            raise RuntimeError("ErrorSink already closed")
        self._closed = True
        self._queue.put_nowait(_CLOSED)

    def __aiter__(self):
        return self

    async def __anext__(self) -> UploadResult:
        item = await self._queue.get()
        if item is _CLOSED:
            # Keep the marker so later iterations also terminate.
            self._queue.put_nowait(_CLOSED)
            raise StopAsyncIteration
        return item

    async def drain(self) -> List[UploadResult]:
        """Collect every failure until the sink is closed and empty."""
        return [failure async for failure in self]
