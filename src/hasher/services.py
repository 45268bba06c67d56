import time
from dataclasses import dataclass, field

from fastapi import Request

from hasher.drain import ShutdownCoordinator
from hasher.ids import IdAllocator
from hasher.scheduler import HashScheduler
from hasher.stats import StatsAggregator
from hasher.store import JobStore
from hasher.work import HASH_DELAY_SECONDS


@dataclass
class Services:
    """Process-wide service objects, built once and handed to the routes."""

    ids: IdAllocator
    store: JobStore
    stats: StatsAggregator
    scheduler: HashScheduler
    coordinator: ShutdownCoordinator
    started_at: float = field(default_factory=time.monotonic)


def build_services(hash_delay: float = HASH_DELAY_SECONDS) -> Services:
    store = JobStore()
    stats = StatsAggregator()
    return Services(
        ids=IdAllocator(),
        store=store,
        stats=stats,
        scheduler=HashScheduler(store, stats, delay=hash_delay),
        coordinator=ShutdownCoordinator(),
    )


def get_services(request: Request) -> Services:
    return request.app.state.services
