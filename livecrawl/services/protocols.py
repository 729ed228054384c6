"""Protocol (interface) definitions for the crawl engine's collaborators."""

from typing import List, Protocol


class PageFetcher(Protocol):
    """Fetch a page body. Raises `HttpFetchError` on transport or HTTP failure."""
    def fetch(self, url: str) -> str:
        ...


class LinkExtractor(Protocol):
    """Return the raw link targets found in a page body. Raises `LinkParseError`."""
    def parse_links(self, content: str) -> List[str]:
        ...


class RobotsPolicy(Protocol):
    def can_fetch(self, url: str) -> bool:
        ...


class UrlNormalizer(Protocol):
    def normalize(self, link: str, base_url: str) -> str:
        ...
