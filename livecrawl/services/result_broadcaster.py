import logging
import queue
import threading
import uuid
from typing import List, Optional, Set

from livecrawl.domain.crawl_result import CrawlResult

logger = logging.getLogger(__name__)


class Subscription:
    """One live observer's inbound message queue.

    The broadcaster only ever enqueues into it, so a slow or broken observer
    cannot stall recording or delivery to anyone else.
    """

    def __init__(self, broadcaster: "ResultBroadcaster"):
        self.id = str(uuid.uuid4())
        self._broadcaster = broadcaster
        self._messages: "queue.Queue[str]" = queue.Queue()
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def put(self, message: str) -> None:
        if not self._closed.is_set():
            self._messages.put(message)

    def pending(self) -> int:
        return self._messages.qsize()

    def get(self, timeout: Optional[float] = None) -> Optional[str]:
        """Return the next message, or None if none arrived within `timeout`."""
        try:
            return self._messages.get(timeout=timeout)
        except queue.Empty:
            return None

    def close(self) -> None:
        if self._closed.is_set():
            return
        self._closed.set()
        self._broadcaster.unsubscribe(self)


class ResultBroadcaster:
    """Run-scoped, append-only result log with fan-out to live subscribers.

    The log and the subscriber set share one lock, so a new subscriber gets
    the whole log queued before any result recorded after it joined.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._results: List[CrawlResult] = []
        self._subscribers: Set[Subscription] = set()
        self._run_id: Optional[str] = None

    @property
    def run_id(self) -> Optional[str]:
        with self._lock:
            return self._run_id

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)

    def reset(self, run_id: Optional[str]) -> None:
        """Empty the log and accept results only from `run_id` from now on."""
        with self._lock:
            self._results = []
            self._run_id = run_id

    def record(self, result: CrawlResult) -> bool:
        """Append `result` and queue it to every subscriber.

        Results from any run other than the current one are dropped.
        """
        message = result.to_json()
        with self._lock:
            if result.run_id != self._run_id:
                logger.debug("Dropping result for retired run %s: %s", result.run_id, result.url)
                return False
            self._results.append(result)
            for subscription in self._subscribers:
                subscription.put(message)
        return True

    def subscribe(self) -> Subscription:
        """Register a subscriber and queue the current log to it."""
        subscription = Subscription(self)
        with self._lock:
            for result in self._results:
                subscription.put(result.to_json())
            self._subscribers.add(subscription)
            replayed = len(self._results)
        logger.info("Subscriber %s connected, replaying %d results", subscription.id, replayed)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        with self._lock:
            removed = subscription in self._subscribers
            self._subscribers.discard(subscription)
        if removed:
            logger.info("Subscriber %s disconnected", subscription.id)

    def snapshot(self) -> List[CrawlResult]:
        with self._lock:
            return list(self._results)
