"""Tavily Search Client — POST /search over httpx with error mapping.

Invariants:
    - Every call uses search_depth "basic" without answer, raw content or images
    - Non-2xx responses and transport errors raise SearchProviderError
    - The API key travels in the JSON body (Tavily's documented scheme)
"""

import logging

import httpx

from content_engine.core.errors import ErrorContext, SearchProviderError
from content_engine.core.search_results import normalise_tavily_results

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 4


class TavilyClient:
    """Thin async client for the Tavily search API."""

    def __init__(
        self,
        api_key: str,
        api_url: str = "https://api.tavily.com/search",
        timeout_seconds: float = 20.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def search(
        self,
        query: str,
        max_results: int = DEFAULT_MAX_RESULTS,
        context: ErrorContext | None = None,
    ) -> dict:
        """Run a search and return {ok, query, results, raw}."""
        payload = {
            "api_key": self.api_key,
            "query": query,
            "max_results": max_results,
            "search_depth": "basic",
            "include_answer": False,
            "include_raw_content": False,
            "include_images": False,
        }
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self._transport,
            ) as client:
                response = await client.post(self.api_url, json=payload)
        except httpx.HTTPError as e:
            raise SearchProviderError(
                f"Tavily request failed: {e}", context=context,
            ) from e

        if response.is_error:
            text = response.text or "Unknown error from Tavily"
            logger.warning(
                "Tavily returned an error",
                extra={"upstream_status": response.status_code},
            )
            raise SearchProviderError(
                f"Tavily HTTP {response.status_code}: {text[:500]}",
                upstream_status=response.status_code,
                context=context,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise SearchProviderError(
                "Tavily returned a non-JSON body", context=context,
            ) from e

        results = normalise_tavily_results(data)
        logger.info("Tavily search complete", extra={"result_count": len(results)})
        return {"ok": True, "query": query, "results": results, "raw": data}
