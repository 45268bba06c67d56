import asyncio
import logging
import time

from hasher.stats import StatsAggregator
from hasher.store import JobStore
from hasher.work import HASH_DELAY_SECONDS, compute_digest

logger = logging.getLogger(__name__)


class HashScheduler:
    """Spawns one hash worker task per submitted job.

    Workers are asyncio tasks that outlive the request that scheduled them.
    The scheduler keeps their handles so they can be awaited or, on process
    exit, abandoned.
    """

    def __init__(
        self,
        store: JobStore,
        stats: StatsAggregator,
        delay: float = HASH_DELAY_SECONDS,
    ) -> None:
        self._store = store
        self._stats = stats
        self._delay = delay
        self._tasks: set[asyncio.Task] = set()

    @property
    def running(self) -> int:
        return len(self._tasks)

    def schedule(self, job_id: int, password: str) -> asyncio.Task:
        task = asyncio.create_task(self._run(job_id, password), name=f"hash-job-{job_id}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, job_id: int, password: str) -> None:
        start = time.monotonic()
        await asyncio.sleep(self._delay)

        logger.info("Computing hash for job %d", job_id)
        try:
            digest = await asyncio.to_thread(compute_digest, password)
            self._store.complete(job_id, digest)
        except Exception:
            # No error state exists for a job: it stays pending.
            logger.exception("Hash worker failed for job %d", job_id)
            return

        elapsed_us = int((time.monotonic() - start) * 1_000_000)
        self._stats.record(elapsed_us)
        logger.debug("Job %d complete in %dus", job_id, elapsed_us)

    async def join(self) -> None:
        """Wait for every worker scheduled so far to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def abandon(self) -> int:
        """Cancel outstanding workers. Returns how many were dropped."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        if tasks:
            logger.warning("Abandoned %d unfinished hash job(s) on shutdown", len(tasks))
        return len(tasks)
