from __future__ import annotations

import logging

from livecrawl.exceptions import HttpStatusError
from livecrawl.services.http_service import HttpService

logger = logging.getLogger(__name__)


class HttpServiceFetcher:
    """Page transport used by crawl workers.

    Returns the body of a successful HTML response. Other media types count
    as fetched but yield an empty body, so no links are looked for in them.
    Responses with a status of 400 or above are failures, same as network
    errors.
    """

    def __init__(self, http_service: HttpService):
        self._http_service = http_service

    def fetch(self, url: str) -> str:
        response = self._http_service.fetch(url)
        if response.status_code >= 400:
            raise HttpStatusError(url, response.status_code)
        if response.status_code >= 300:
            logger.warning("Unfollowed redirect status for %s: %s", url, response.status_code)
        if not response.is_html:
            logger.debug("Not expanding %s (%s)", url, response.media_type)
            return ""
        return response.text
