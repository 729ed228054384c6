"""Domain objects for LiveCrawl - explicit re-exports to satisfy linters."""
from .crawl_result import CrawlResult as CrawlResult
from .crawl_result import FetchStatus as FetchStatus
from .crawl_run import CrawlRun as CrawlRun
from .http_response import HttpResponse as HttpResponse
from .visited_tracker import VisitedTracker as VisitedTracker

__all__ = ["CrawlResult", "FetchStatus", "CrawlRun", "HttpResponse", "VisitedTracker"]
