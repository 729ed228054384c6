import logging
from typing import Optional
from urllib.robotparser import RobotFileParser

from livecrawl.exceptions import HttpFetchError

logger = logging.getLogger(__name__)


class RobotsFetcher:
    """Fetch robots.txt content and return a parsed RobotFileParser or None.

    `http_service.fetch(url, accept=...)` must return an HttpResponse. Only a
    200 with a non-empty plain text body is parsed; anything else means the
    host has no usable robots.txt.
    """
    ACCEPT = "text/plain"

    def __init__(self, http_service):
        self.http_service = http_service

    def fetch(self, robots_url: str) -> Optional[RobotFileParser]:
        try:
            response = self.http_service.fetch(robots_url, accept=self.ACCEPT)
        except HttpFetchError as e:
            logger.warning("Network error fetching robots.txt from %s: %s", robots_url, e)
            return None

        if response.status_code != 200 or not response.text:
            return None
        if response.media_type not in (None, "text/plain"):
            logger.info("Ignoring robots.txt from %s served as %s", robots_url, response.media_type)
            return None

        try:
            robots_parser = RobotFileParser()
            robots_parser.parse(response.text.splitlines())
            return robots_parser
        except Exception:
            logger.exception("Error parsing robots.txt from %s", robots_url)
            return None
