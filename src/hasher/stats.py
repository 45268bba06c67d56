import threading
from typing import NamedTuple


class StatsSnapshot(NamedTuple):
    total: int
    average: int


class StatsAggregator:
    """Count and running average latency (microseconds) of completed jobs.

    Keeps the running sum rather than the history, so the average is always
    the integer-truncated mean of every latency recorded so far.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._total = 0
        self._sum = 0
        self._average = 0

    def record(self, latency_micros: int) -> None:
        with self._lock:
            self._sum += latency_micros
            self._total += 1
            self._average = self._sum // self._total

    def snapshot(self) -> StatsSnapshot:
        with self._lock:
            return StatsSnapshot(total=self._total, average=self._average)
