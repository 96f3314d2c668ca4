"""Admission gate bounding how many uploads run at once."""
import asyncio


class ConcurrencyLimiter:
    """
    Counting semaphore with instrumentation.

    acquire() waits until fewer than `capacity` holders are admitted;
    release() frees one slot and wakes at most one waiter. Counters are
    only touched from the event loop thread, so updates are atomic.
    """

    def __init__(self, capacity: int = 10):
        if not isinstance(capacity, int) or capacity < 1:
            raise ValueError(f"capacity must be a positive integer, got {capacity!r}")
        self._capacity = capacity
        self._semaphore = asyncio.Semaphore(capacity)
        self._in_flight = 0
        self._peak = 0
        self._admitted = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def in_flight(self) -> int:
        """Holders currently admitted."""
        return self._in_flight

    @property
    def peak(self) -> int:
        """Highest number of simultaneous holders observed."""
        return self._peak

    @property
    def admitted(self) -> int:
        """Total admissions since creation."""
        return self._admitted

    async def acquire(self) -> None:
        await self._semaphore.acquire()
        self._in_flight += 1
        self._admitted += 1
        if self._in_flight > self._peak:
            self._peak = self._in_flight

    def release(self) -> None:
        if self._in_flight == 0:
            raise RuntimeError("release() called with no admitted holder")
        self._in_flight -= 1
        self._semaphore.release()

    def locked(self) -> bool:
        """True when every slot is taken."""
        return self._in_flight >= self._capacity

    async def __aenter__(self):
        await self.acquire()
        return self

    async def __aexit__(self, *args):
        self.release()
