import asyncio
import logging
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class ShutdownCoordinator:
    """Counts in-flight requests so shutdown can wait for them to drain.

    Only touched from the event loop thread. Background hash workers are not
    tracked here.
    """

    def __init__(self) -> None:
        self._count = 0
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def in_flight(self) -> int:
        return self._count

    def enter(self) -> None:
        self._count += 1
        self._idle.clear()

    def exit(self) -> None:
        self._count -= 1
        if self._count == 0:
            self._idle.set()

    @contextmanager
    def track(self):
        self.enter()
        try:
            yield
        finally:
            self.exit()

    async def wait_drained(self, timeout: float | None = None) -> bool:
        """Block until no request is in flight. False if the timeout expired first."""
        if self._count == 0:
            return True
        logger.info("Waiting for %d pending request(s) to complete...", self._count)
        try:
            await asyncio.wait_for(self._idle.wait(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning("Drain timed out after %.1fs with %d request(s) in flight", timeout, self._count)
            return False
        return True
