from typing import NamedTuple, Optional

HTML_MEDIA_TYPES = ("text/html", "application/xhtml+xml")


class HttpResponse(NamedTuple):
    """Status, body and declared media type of one fetched URL."""
    status_code: int
    text: str
    content_type: Optional[str] = None

    @property
    def media_type(self) -> Optional[str]:
        """`content_type` without parameters, lowercased; None if absent."""
        if not self.content_type:
            return None
        return self.content_type.split(";", 1)[0].strip().lower() or None

    @property
    def is_html(self) -> bool:
        # Servers that omit Content-Type are assumed to serve HTML.
        media_type = self.media_type
        return media_type is None or media_type in HTML_MEDIA_TYPES
