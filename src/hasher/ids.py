import threading


class IdAllocator:
    """Issues strictly increasing job ids, starting at 1.

    The increment and the read of the new value happen inside one critical
    section, so concurrent callers never observe the same id.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last = 0

    def next_id(self) -> int:
        with self._lock:
            self._last += 1
            return self._last

    @property
    def last_issued(self) -> int:
        with self._lock:
            return self._last
