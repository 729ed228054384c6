from __future__ import annotations

import logging
import threading
import uuid
from enum import Enum
from typing import Callable, Dict, Optional
from urllib.parse import urlparse

from livecrawl.domain.crawl_run import CrawlRun
from livecrawl.domain.visited_tracker import VisitedTracker
from livecrawl.exceptions import InvalidCrawlRequest
from livecrawl.services.crawl_worker import CrawlWorker
from livecrawl.services.frontier import Frontier
from livecrawl.services.protocols import LinkExtractor, PageFetcher, RobotsPolicy, UrlNormalizer
from livecrawl.services.rate_limiter import RateLimiter
from livecrawl.services.result_broadcaster import ResultBroadcaster, Subscription
from livecrawl.utils.datetime_utils import to_utc_iso

logger = logging.getLogger(__name__)


class CrawlState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPING = "stopping"


class CrawlController:
    """Owns the start/stop/restart protocol for crawl runs.

    At most one run executes at a time. Starting a crawl while another is
    active first stops it and joins every one of its workers; only then is a
    fresh frontier and visited set built for the new run. Start and stop are
    serialized by a single lifecycle lock.
    """

    def __init__(
        self,
        *,
        fetcher: PageFetcher,
        link_parser: LinkExtractor,
        robots_policy: RobotsPolicy,
        url_resolver: UrlNormalizer,
        rate_limiter: RateLimiter,
        broadcaster: ResultBroadcaster,
        frontier_capacity: int = 100,
        default_workers: int = 10,
        max_workers: int = 100,
        stop_timeout: Optional[float] = 30.0,
        worker_factory: Callable[..., CrawlWorker] = CrawlWorker,
    ):
        if default_workers <= 0:
            raise ValueError("default_workers must be > 0")
        self.fetcher = fetcher
        self.link_parser = link_parser
        self.robots_policy = robots_policy
        self.url_resolver = url_resolver
        self.rate_limiter = rate_limiter
        self.broadcaster = broadcaster
        self.frontier_capacity = int(frontier_capacity)
        self.default_workers = int(default_workers)
        self.max_workers = max(int(max_workers), 1)
        self.stop_timeout = stop_timeout
        self.worker_factory = worker_factory
        self._lifecycle_lock = threading.Lock()
        self._run: Optional[CrawlRun] = None
        self._last_run: Optional[CrawlRun] = None

    @property
    def current_run(self) -> Optional[CrawlRun]:
        return self._run

    @property
    def state(self) -> CrawlState:
        run = self._run
        if run is None or not run.is_alive():
            return CrawlState.IDLE
        if run.stopping:
            return CrawlState.STOPPING
        return CrawlState.RUNNING

    def validate_seed(self, seed_url) -> str:
        if not seed_url or not isinstance(seed_url, str):
            raise InvalidCrawlRequest(seed_url, "URL is required")
        seed_url = seed_url.strip()
        try:
            parsed = urlparse(seed_url)
        except ValueError as e:
            raise InvalidCrawlRequest(seed_url) from e
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise InvalidCrawlRequest(seed_url)
        return seed_url

    def resolve_worker_count(self, worker_count: Optional[int]) -> int:
        if worker_count is None or worker_count <= 0:
            return self.default_workers
        if worker_count > self.max_workers:
            logger.warning("Clamping worker count %d to %d", worker_count, self.max_workers)
            return self.max_workers
        return int(worker_count)

    def start_crawl(self, seed_url: str, worker_count: Optional[int] = None) -> CrawlRun:
        """Replace any active crawl with a new one seeded at `seed_url`.

        Raises InvalidCrawlRequest, without touching the active run, if the
        seed is not an absolute http(s) URL.
        """
        seed_url = self.validate_seed(seed_url)
        worker_count = self.resolve_worker_count(worker_count)

        with self._lifecycle_lock:
            self._retire_current()

            run = CrawlRun(
                run_id=str(uuid.uuid4()),
                seed_url=seed_url,
                worker_count=worker_count,
                frontier=Frontier(self.frontier_capacity),
                visited=VisitedTracker(),
            )
            self.broadcaster.reset(run.run_id)
            run.admit(seed_url)
            for worker_id in range(worker_count):
                worker = self.worker_factory(
                    worker_id,
                    run,
                    rate_limiter=self.rate_limiter,
                    fetcher=self.fetcher,
                    link_parser=self.link_parser,
                    robots_policy=self.robots_policy,
                    url_resolver=self.url_resolver,
                    broadcaster=self.broadcaster,
                )
                run.workers.append(
                    threading.Thread(target=worker, name=f"crawl-worker-{worker_id}", daemon=True)
                )
            self._run = run
            logger.info("Starting %d workers for URL: %s (run %s)", worker_count, seed_url, run.run_id)
            self._start_workers(run)
            return run

    def stop_crawl(self) -> bool:
        """Stop the active crawl and wait for its workers.

        Returns False, doing nothing, when no crawl is running.
        """
        with self._lifecycle_lock:
            run = self._run
            if run is None:
                logger.info("Stop requested while idle")
                return False
            was_active = run.is_alive()
            self._retire_current()
            if was_active:
                logger.info("Crawler stopped by user (run %s)", run.run_id)
            return was_active

    def shutdown(self) -> None:
        self.stop_crawl()

    def subscribe_results(self) -> Subscription:
        """Live result stream, starting with a replay of the current run's log."""
        return self.broadcaster.subscribe()

    def status(self) -> Dict:
        run = self._run or self._last_run
        info = {
            "state": self.state.value,
            "run_id": None,
            "seed_url": None,
            "workers": 0,
            "active_workers": 0,
            "queued": 0,
            "admitted": 0,
            "results": len(self.broadcaster),
            "subscribers": self.broadcaster.subscriber_count,
            "started_at": None,
            "finished_at": None,
        }
        if run is not None:
            info.update(
                run_id=run.run_id,
                seed_url=run.seed_url,
                workers=run.worker_count,
                active_workers=run.active_workers,
                queued=len(run.frontier),
                admitted=len(run.visited),
                started_at=to_utc_iso(run.started_at),
                finished_at=to_utc_iso(run.finished_at),
            )
        return info

    def _retire_current(self) -> None:
        # Caller holds the lifecycle lock.
        run = self._run
        if run is None:
            return
        run.request_stop()
        if not run.join(self.stop_timeout):
            logger.warning(
                "Run %s: %d workers still busy after %ss, abandoning them",
                run.run_id, run.active_workers, self.stop_timeout,
            )
        self._last_run = run
        self._run = None
        logger.info("Run %s retired", run.run_id)

    def _start_workers(self, run: CrawlRun) -> None:
        started = 0
        try:
            for thread in run.workers:
                thread.start()
                started += 1
        except RuntimeError as e:
            run.abandon_unstarted(started)
            if started == 0:
                run.request_stop()
                self._last_run = run
                self._run = None
                raise
            logger.error("Run %s: only %d workers started: %s", run.run_id, started, e)
