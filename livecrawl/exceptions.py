"""Custom exceptions for LiveCrawl services."""
from typing import Optional


class InvalidCrawlRequest(ValueError):
    """Raised when a crawl cannot be started because its input is invalid."""

    def __init__(self, seed_url, reason: str = "must be a valid http or https URL"):
        self.seed_url = seed_url
        self.reason = reason
        super().__init__(f"Invalid URL {seed_url!r}: {reason}")


class HttpFetchError(Exception):
    """Raised when an HTTP fetch fails due to network/transport errors."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"HTTP fetch failed for {url}: {original}")


class HttpStatusError(HttpFetchError):
    """Raised when a page is served with a non-success HTTP status."""

    def __init__(self, url: str, status_code: int):
        self.status_code = status_code
        super().__init__(url, RuntimeError(f"status {status_code}"))


class LinkParseError(Exception):
    """Raised when links cannot be extracted from fetched content."""

    def __init__(self, original: Exception, url: Optional[str] = None):
        self.url = url
        self.original = original
        where = f" from {url}" if url else ""
        super().__init__(f"Could not parse links{where}: {original}")
