import threading
from typing import Set


class VisitedTracker:
    """
    Tracks which URLs have been admitted to the frontier during one crawl run.

    Every operation takes the tracker's own lock, so workers can share a single
    instance. `admit` is the only operation that should gate admission: it
    inserts and reports novelty in one step, which `is_visited` followed by
    `mark` cannot guarantee under concurrency.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._visited: Set[str] = set()

    def admit(self, url: str) -> bool:
        """Mark `url` visited. Return True only if it was not visited before."""
        with self._lock:
            if url in self._visited:
                return False
            self._visited.add(url)
            return True

    def mark(self, url: str) -> None:
        """Mark a URL as visited."""
        with self._lock:
            self._visited.add(url)

    def is_visited(self, url: str) -> bool:
        """Check if a URL has been visited."""
        with self._lock:
            return url in self._visited

    def __len__(self) -> int:
        with self._lock:
            return len(self._visited)
