from typing import List

from bs4 import BeautifulSoup

from livecrawl.exceptions import LinkParseError


class LinkParser:
    """Extracts `<a href>` targets from HTML, unresolved and in document order."""

    def __init__(self, features: str = "html.parser"):
        self.features = features

    def parse_links(self, content: str) -> List[str]:
        try:
            soup = BeautifulSoup(content, self.features)
        except Exception as e:
            raise LinkParseError(e) from e
        links = []
        for a in soup.find_all("a", href=True):
            href = a.get("href").strip()
            if href:
                links.append(href)
        return links
