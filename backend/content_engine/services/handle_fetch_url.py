"""Source Import — fetch a URL server-side and return its visible text.

Invariants:
    - Missing url → MissingFieldError; malformed or non-http(s) → InvalidURLError
    - Body truncated to max_chars before HTML parsing
    - Empty extraction is a 200 with a warning, not an error
"""

import logging

from content_engine.core.errors import ErrorContext, MissingFieldError
from content_engine.core.html_text import html_to_text
from content_engine.infrastructure.url_fetcher import UrlFetcher, validate_url

logger = logging.getLogger(__name__)


class SourceImporter:
    """Turns a public URL into plain source text."""

    def __init__(self, fetcher: UrlFetcher, max_chars: int) -> None:
        self.fetcher = fetcher
        self.max_chars = max_chars

    async def import_url(self, url: str | None) -> dict:
        if not url or not url.strip():
            raise MissingFieldError("Missing url", field="url")

        target = validate_url(url)
        html = await self.fetcher.fetch_text(
            target, context=ErrorContext(endpoint="/api/fetch-url"),
        )
        text = html_to_text(html, self.max_chars)
        if not text:
            logger.info("No visible text extracted from source URL")
            return {
                "url": target,
                "text": "",
                "warning": "No visible text could be extracted from URL",
            }
        return {"url": target, "text": text}
