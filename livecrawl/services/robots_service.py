import logging
from typing import Optional
from urllib.parse import urljoin, urlparse

from livecrawl.services.robots_cache import MISSING, RobotsCache
from livecrawl.services.robots_fetcher import RobotsFetcher

logger = logging.getLogger(__name__)


class RobotsService:
    """
    Robots policy consulted by crawl workers before every fetch.

    Orchestrates fetching, caching, and permission checking for robots.txt files.
    Fails open: a host without a readable robots.txt allows everything.
    """

    def __init__(self, http_service, user_agent: str, enabled: bool = True,
                 robots_fetcher: Optional[RobotsFetcher] = None,
                 cache: Optional[RobotsCache] = None):
        self.http_service = http_service
        self.user_agent = user_agent
        self.enabled = enabled
        self.robots_fetcher = robots_fetcher if robots_fetcher is not None else RobotsFetcher(http_service)
        self.cache = cache if cache is not None else RobotsCache()

    def can_fetch(self, url: str) -> bool:
        if not self.enabled:
            return True

        parsed = urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            # Invalid/relative URLs are left for the transport to reject.
            return True

        base = f"{parsed.scheme}://{parsed.netloc}"
        robots_parser = self.cache.lookup(base)
        if robots_parser is MISSING:
            robots_parser = self.robots_fetcher.fetch(urljoin(base, "/robots.txt"))
            self.cache.set(base, robots_parser)

        if robots_parser is None:
            return True

        try:
            return robots_parser.can_fetch(self.user_agent, url)
        except Exception:
            logger.exception("Error checking robots permission for %s", url)
            return True
