"""Public Search Enrichment — metadata-only web search for drafting and Q&A.

Invariants:
    - Only entities (companies, geographies) leave the process — never draft
      bodies or uploaded source text
    - Never raises: any provider failure returns an empty list
    - Tavily preferred when configured; OpenAI web search used otherwise

Design Decisions:
    - Query built by core/extract_entities.build_search_query
"""

import logging

from content_engine.core.extract_entities import build_search_query, extract_entities
from content_engine.services.handle_web_search import OpenAIWebSearch
from content_engine.infrastructure.tavily_client import TavilyClient

logger = logging.getLogger(__name__)


class PublicSearch:
    """Looks up public context for the entities named in request text."""

    def __init__(
        self,
        tavily: TavilyClient | None = None,
        web_search: OpenAIWebSearch | None = None,
        max_results: int = 4,
    ) -> None:
        self.tavily = tavily
        self.web_search = web_search
        self.max_results = max_results

    @property
    def available(self) -> bool:
        return self.tavily is not None or self.web_search is not None

    async def search_for(self, *texts: str | None) -> list[dict]:
        """Search for the entities mentioned in texts (first text weighs most)."""
        entities = extract_entities("\n".join(t for t in texts if t))
        query = build_search_query(entities)
        if not query or not self.available:
            return []

        if self.tavily is not None:
            try:
                result = await self.tavily.search(query, self.max_results)
            except Exception as e:
                logger.warning("Public search via Tavily failed: %s", e)
                return []
            return result["results"]

        return await self.web_search.search_public_metadata(
            company=" ".join(entities.companies[:2]) or None,
            geography=" ".join(entities.geographies[:2]) or None,
            max_results=self.max_results,
        )
