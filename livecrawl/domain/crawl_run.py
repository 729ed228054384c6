from __future__ import annotations

import threading
import time
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from livecrawl.domain.visited_tracker import VisitedTracker
from livecrawl.utils.datetime_utils import utc_now

if TYPE_CHECKING:
    from livecrawl.services.frontier import Frontier


class CrawlRun:
    """One crawl session: its frontier, visited set, stop signal and worker threads.

    A run is built by the controller, handed to its workers, and retired as a
    whole. Nothing in it is reused by a later run.
    """

    def __init__(self, run_id: str, seed_url: str, worker_count: int, frontier: "Frontier", visited: Optional[VisitedTracker] = None):
        self.run_id = run_id
        self.seed_url = seed_url
        self.worker_count = worker_count
        self.frontier = frontier
        self.visited = visited if visited is not None else VisitedTracker()
        self.stop_event = threading.Event()
        self.started_at: datetime = utc_now()
        self.finished_at: Optional[datetime] = None
        self.workers: List[threading.Thread] = []
        self._lock = threading.Lock()
        self._active_workers = worker_count

    def __repr__(self):
        return (
            f"<CrawlRun id={self.run_id} seed={self.seed_url} "
            f"workers={self.worker_count} active={self.active_workers}>"
        )

    @property
    def active_workers(self) -> int:
        with self._lock:
            return self._active_workers

    @property
    def stopping(self) -> bool:
        return self.stop_event.is_set()

    def is_alive(self) -> bool:
        return self.active_workers > 0

    def admit(self, url: str) -> bool:
        """Mark `url` visited and queue it, if no one admitted it earlier in this run."""
        if not self.visited.admit(url):
            return False
        return self.frontier.push(url)

    def worker_exited(self) -> None:
        with self._lock:
            self._active_workers -= 1
            if self._active_workers <= 0 and self.finished_at is None:
                self.finished_at = utc_now()

    def request_stop(self) -> None:
        self.stop_event.set()
        self.frontier.close()

    def abandon_unstarted(self, started: int) -> None:
        """Forget worker threads past the first `started`, which never ran."""
        with self._lock:
            unstarted = len(self.workers) - started
            del self.workers[started:]
            self.worker_count = started
            self._active_workers -= unstarted
            if self._active_workers <= 0 and self.finished_at is None:
                self.finished_at = utc_now()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for every worker, at most `timeout` seconds in total.

        Returns True if all of them exited.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        for thread in self.workers:
            if deadline is None:
                thread.join()
            else:
                thread.join(max(deadline - time.monotonic(), 0))
        return not any(thread.is_alive() for thread in self.workers)
