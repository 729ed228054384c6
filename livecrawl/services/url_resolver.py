import logging
from urllib.parse import urldefrag, urljoin

logger = logging.getLogger(__name__)


class UrlResolver:
    def normalize(self, link: str, base_url: str) -> str:
        """Resolve `link` against `base_url` and drop any fragment.

        If either input cannot be parsed the link is returned unchanged.
        """
        try:
            absolute = urljoin(base_url, link)
            return urldefrag(absolute).url
        except ValueError:
            logger.debug("Could not resolve %r against %r", link, base_url)
            return link
