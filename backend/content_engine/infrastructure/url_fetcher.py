"""URL Fetcher — server-side GET of user-supplied source URLs.

Invariants:
    - Only http and https URLs are fetched (InvalidURLError otherwise)
    - Redirects are followed; the final body is returned as text
    - Non-2xx responses raise UpstreamFetchError carrying status and reason
    - Transport failures raise UpstreamFetchError without a status
"""

import logging
from urllib.parse import urlsplit

import httpx

from content_engine.core.errors import ErrorContext, InvalidURLError, UpstreamFetchError

logger = logging.getLogger(__name__)

_ALLOWED_SCHEMES = ("http", "https")
_USER_AGENT = "ContentEngine/1.0 (+source-import)"


def validate_url(url: str) -> str:
    """Return the URL unchanged if it is an absolute http(s) URL."""
    try:
        parts = urlsplit(url.strip())
    except ValueError as e:
        raise InvalidURLError("Invalid URL format", url) from e
    if not parts.scheme or not parts.netloc:
        raise InvalidURLError("Invalid URL format", url)
    if parts.scheme.lower() not in _ALLOWED_SCHEMES:
        raise InvalidURLError("Only http and https URLs are allowed", url)
    return parts.geturl()


class UrlFetcher:
    """Fetches remote documents for source import."""

    def __init__(
        self,
        timeout_seconds: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def fetch_text(self, url: str, context: ErrorContext | None = None) -> str:
        """GET the URL and return the decoded body."""
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                follow_redirects=True,
                headers={"User-Agent": _USER_AGENT},
                transport=self._transport,
            ) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            raise UpstreamFetchError(
                f"Upstream fetch failed: {e}", context=context,
            ) from e

        if response.is_error:
            logger.warning(
                "Source fetch returned an error",
                extra={"upstream_status": response.status_code},
            )
            raise UpstreamFetchError(
                "Upstream fetch failed",
                upstream_status=response.status_code,
                status_text=response.reason_phrase,
                context=context,
            )
        return response.text
