import asyncio
from typing import Optional


class ResizableAsyncSemaphore:
    """
    An asyncio semaphore whose capacity can be changed at runtime.
    Used to bound the number of pooled connections handed out at once.
    """

    def __init__(self, max_permits: int) -> None:
        if max_permits < 0:
            raise ValueError("Semaphore initial max permits must be non-negative")
        self._max_permits = max_permits
        self._in_use = 0
        self._cond = asyncio.Condition()

    async def acquire(self, timeout: Optional[float] = None) -> bool:
        """
        Acquire a permit from the semaphore.

        Args:
            timeout: Maximum time in seconds to wait for a permit, or None to wait forever

        Returns:
            True if a permit was acquired, False if the timeout expired
        """
        async with self._cond:
            try:
                await asyncio.wait_for(
                    self._cond.wait_for(lambda: self._in_use < self._max_permits),
                    timeout,
                )
            except asyncio.TimeoutError:
                return False
            self._in_use += 1
            return True

    async def release(self) -> None:
        """Release a permit back to the semaphore."""
        async with self._cond:
            if self._in_use <= 0:
                raise ValueError("Semaphore released too many times")
            self._in_use -= 1
            self._cond.notify()

    async def resize(self, new_max: int) -> None:
        """
        Resize the semaphore to a new maximum number of permits.

        Shrinking never takes permits away from holders; new acquires block
        until enough releases bring usage under the lowered ceiling.

        Raises:
            ValueError: If new_max is negative
        """
        if new_max < 0:
            raise ValueError("Semaphore max permits cannot be negative")
        async with self._cond:
            self._max_permits = new_max
            self._cond.notify_all()

    @property
    def max_permits(self) -> int:
        return self._max_permits

    @property
    def in_use(self) -> int:
        return self._in_use

    @property
    def available_permits(self) -> int:
        return max(self._max_permits - self._in_use, 0)
