import logging
import threading
from collections import deque
from typing import Deque, Optional

logger = logging.getLogger(__name__)


class Frontier:
    """Queue of URLs awaiting fetch, shared by every worker of one crawl run.

    Consumers block in `pop()` until a URL arrives or the frontier ends. The
    frontier ends either when `close()` is called or when it drains: nothing is
    queued and every popped URL has been acknowledged with `task_done()`.

    `push()` never blocks. Up to `capacity` URLs sit in the primary buffer;
    anything beyond that spills into an overflow deque that refills the buffer
    as consumers pop, so producers that are also consumers cannot wedge each
    other on a full queue.
    """

    def __init__(self, capacity: int = 100):
        if capacity <= 0:
            raise ValueError("capacity must be > 0")
        self._capacity = int(capacity)
        self._cond = threading.Condition()
        self._buffer: Deque[str] = deque()
        self._overflow: Deque[str] = deque()
        self._in_progress = 0
        self._spilled = 0
        self._closed = False
        self._drained = False

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    @property
    def drained(self) -> bool:
        with self._cond:
            return self._drained

    @property
    def spilled(self) -> int:
        """Number of pushes that landed in the overflow deque."""
        with self._cond:
            return self._spilled

    def __len__(self) -> int:
        with self._cond:
            return len(self._buffer) + len(self._overflow)

    def push(self, url: str) -> bool:
        """Enqueue `url`. Returns False, dropping the URL, once the frontier has ended."""
        with self._cond:
            if self._closed or self._drained:
                logger.debug("Dropping %s: frontier no longer accepts work", url)
                return False
            if len(self._buffer) < self._capacity:
                self._buffer.append(url)
            else:
                self._overflow.append(url)
                self._spilled += 1
            self._cond.notify()
            return True

    def pop(self) -> Optional[str]:
        """Block until a URL is available. Returns None at end-of-work."""
        with self._cond:
            while True:
                if self._closed or self._drained:
                    return None
                if self._buffer:
                    url = self._buffer.popleft()
                    if self._overflow:
                        self._buffer.append(self._overflow.popleft())
                    self._in_progress += 1
                    return url
                self._cond.wait()

    def task_done(self) -> None:
        """Acknowledge that a URL returned by `pop()` has been fully processed."""
        with self._cond:
            if self._in_progress <= 0:
                raise ValueError("task_done() called more times than pop()")
            self._in_progress -= 1
            if self._in_progress == 0 and not self._buffer and not self._closed:
                self._drained = True
                logger.info("Frontier drained")
                self._cond.notify_all()

    def close(self) -> int:
        """End the frontier, discarding queued URLs. Returns how many were discarded."""
        with self._cond:
            if self._closed:
                return 0
            discarded = len(self._buffer) + len(self._overflow)
            self._buffer.clear()
            self._overflow.clear()
            self._closed = True
            self._cond.notify_all()
        if discarded:
            logger.info("Frontier closed, discarded %d queued URLs", discarded)
        return discarded
