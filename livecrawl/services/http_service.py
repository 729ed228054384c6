import requests
from typing import Callable, Optional

from livecrawl.domain.http_response import HttpResponse
from livecrawl.exceptions import HttpFetchError

PAGE_ACCEPT = "text/html,application/xhtml+xml;q=0.9,*/*;q=0.5"


class HttpService:
    """
    Outbound HTTP for page and robots.txt fetches.

    `http_client` is a `requests.get`-compatible callable, injected so tests
    can hand in a Mock. Transport failures surface as HttpFetchError; HTTP
    error statuses are returned as-is for callers to judge.
    """

    def __init__(self, user_agent: str, http_client: Callable, timeout: int = 10):
        self.user_agent = user_agent
        self.timeout = timeout
        self.http_client = http_client

    def fetch(self, url: str, accept: Optional[str] = None) -> HttpResponse:
        headers = {"User-Agent": self.user_agent, "Accept": accept or PAGE_ACCEPT}
        try:
            resp = self.http_client(url, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise HttpFetchError(url, e) from e

        content_type = None
        if hasattr(resp, 'headers'):
            content_type = resp.headers.get('Content-Type')

        return HttpResponse(resp.status_code, resp.text, content_type)
