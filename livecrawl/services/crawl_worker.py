import logging

from livecrawl.domain.crawl_result import CrawlResult, FetchStatus
from livecrawl.domain.crawl_run import CrawlRun
from livecrawl.exceptions import HttpFetchError, LinkParseError
from livecrawl.services.protocols import LinkExtractor, PageFetcher, RobotsPolicy, UrlNormalizer
from livecrawl.services.rate_limiter import RateLimiter
from livecrawl.services.result_broadcaster import ResultBroadcaster

logger = logging.getLogger(__name__)


class CrawlWorker:
    """Pulls URLs from a run's frontier, fetches them, and feeds discovered links back.

    Every URL that gets past the stop check and the rate limiter yields exactly
    one result: Success, Blocked or Fetch error.
    """

    def __init__(
        self,
        worker_id: int,
        run: CrawlRun,
        *,
        rate_limiter: RateLimiter,
        fetcher: PageFetcher,
        link_parser: LinkExtractor,
        robots_policy: RobotsPolicy,
        url_resolver: UrlNormalizer,
        broadcaster: ResultBroadcaster,
    ):
        self.worker_id = worker_id
        self.run = run
        self.rate_limiter = rate_limiter
        self.fetcher = fetcher
        self.link_parser = link_parser
        self.robots_policy = robots_policy
        self.url_resolver = url_resolver
        self.broadcaster = broadcaster

    def __call__(self) -> int:
        """Work until the frontier ends. Returns the number of URLs processed."""
        processed = 0
        frontier = self.run.frontier
        try:
            while True:
                url = frontier.pop()
                if url is None:
                    break
                try:
                    if self.process(url):
                        processed += 1
                except Exception:
                    logger.exception("Worker %d failed processing %s", self.worker_id, url)
                finally:
                    frontier.task_done()
        finally:
            self.run.worker_exited()
            logger.debug("Worker %d exiting after %d URLs", self.worker_id, processed)
        return processed

    def process(self, url: str) -> bool:
        """Handle one dequeued URL. Returns False if it was discarded without a result."""
        if self.run.stopping:
            logger.debug("Worker %d discarding %s (stopped)", self.worker_id, url)
            return False
        if not self.rate_limiter.acquire(self.run.stop_event):
            logger.debug("Worker %d discarding %s (stopped while throttled)", self.worker_id, url)
            return False

        if not self.robots_policy.can_fetch(url):
            logger.info("Worker %d blocked by robots.txt: %s", self.worker_id, url)
            self._emit(url, FetchStatus.BLOCKED)
            return True

        logger.info("Worker %d fetching URL: %s", self.worker_id, url)
        try:
            content = self.fetcher.fetch(url)
        except HttpFetchError as e:
            logger.warning("Fetch failed for %s: %s", url, e)
            self._emit(url, FetchStatus.fetch_error(e))
            return True
        except Exception as e:
            logger.error("Fetch error for %s: %s", url, e, exc_info=True)
            self._emit(url, FetchStatus.fetch_error(e))
            return True

        self._emit(url, FetchStatus.SUCCESS)
        self.expand(url, content)
        return True

    def expand(self, url: str, content: str) -> int:
        """Admit every link found in `content`. Returns how many were newly queued."""
        try:
            links = self.link_parser.parse_links(content)
        except LinkParseError as e:
            logger.warning("Error parsing page %s: %s", url, e)
            return 0

        admitted = 0
        for link in links:
            absolute_url = self.url_resolver.normalize(link, self.run.seed_url)
            if self.run.admit(absolute_url):
                admitted += 1
        logger.debug("Worker %d queued %d of %d links from %s", self.worker_id, admitted, len(links), url)
        return admitted

    def _emit(self, url: str, status: str) -> None:
        self.broadcaster.record(
            CrawlResult(url=url, worker_id=self.worker_id, status=status, run_id=self.run.run_id)
        )
