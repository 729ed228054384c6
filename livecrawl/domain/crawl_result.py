"""Crawl result data model."""
import json
from dataclasses import dataclass, field
from datetime import datetime

from livecrawl.utils.datetime_utils import to_utc_iso, utc_now


class FetchStatus:
    """Status strings carried by a `CrawlResult`."""

    SUCCESS = "Success"
    BLOCKED = "Blocked by robots.txt"
    FETCH_ERROR_PREFIX = "Fetch error: "

    @classmethod
    def fetch_error(cls, detail) -> str:
        return f"{cls.FETCH_ERROR_PREFIX}{detail}"

    @classmethod
    def is_fetch_error(cls, status: str) -> bool:
        return status.startswith(cls.FETCH_ERROR_PREFIX)


@dataclass(frozen=True)
class CrawlResult:
    """Outcome of processing one URL.

    Appended once to the run's result log and never mutated afterwards.
    """
    url: str
    worker_id: int
    status: str
    run_id: str
    timestamp: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "worker_id": self.worker_id,
            "time": to_utc_iso(self.timestamp),
            "status": self.status,
            "run_id": self.run_id,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())
