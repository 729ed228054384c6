import threading
import time
from typing import Callable, List, Optional


class RateLimiter:
    """Global throttle shared by every worker.

    Ticks are handed out at most once per `interval_seconds` across all callers
    combined, so adding workers raises fetch concurrency but not the aggregate
    request rate. The first tick is due one interval after construction.

    A caller that gives up while waiting hands its tick back, so a stopped run
    leaves no queued reservations behind for the next one.
    """

    def __init__(
        self,
        interval_seconds: float = 0.5,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if interval_seconds < 0:
            raise ValueError("interval_seconds must be >= 0")
        self._interval = float(interval_seconds)
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._last_granted = clock()
        self._last_tick = self._last_granted
        self._pending: List[float] = []

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._pending)

    def _reserve(self) -> float:
        with self._lock:
            slot = max(self._clock(), self._last_tick + self._interval)
            self._last_tick = slot
            self._pending.append(slot)
            return slot

    def _settle(self, slot: float, granted: bool) -> None:
        with self._lock:
            self._pending.remove(slot)
            if granted:
                self._last_granted = max(self._last_granted, slot)
            else:
                self._last_tick = max(self._pending + [self._last_granted])

    def acquire(self, stop_event: Optional[threading.Event] = None) -> bool:
        """Block until the caller's tick.

        Returns False if `stop_event` was set before the tick arrived.
        """
        slot = self._reserve()
        delay = slot - self._clock()
        if stop_event is None:
            if delay > 0:
                self._sleep(delay)
            granted = True
        elif delay > 0:
            granted = not stop_event.wait(delay)
        else:
            granted = not stop_event.is_set()
        self._settle(slot, granted)
        return granted
