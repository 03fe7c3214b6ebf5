"""Web Search Handlers — Tavily diagnostics and OpenAI web_search tool calls.

Invariants:
    - run_tavily_search requires a configured Tavily client (ConfigurationError otherwise)
    - OpenAIWebSearch.web_test raises ModelOutputError when the model answer is
      not JSON with a results array
    - OpenAIWebSearch.search_public_metadata never raises (returns [] on failure)
    - Metadata search sends only company / sector / geography / deal type

Design Decisions:
    - web_search_preview tool via the Responses API for both OpenAI paths
    - Result extraction tries web_search_result blocks, then url_citation annotations
"""

import logging

from content_engine.core.completion_payloads import response_text
from content_engine.core.errors import (
    ConfigurationError,
    ErrorContext,
    MissingFieldError,
    ModelOutputError,
)
from content_engine.core.parse_json import extract_json_object
from content_engine.core.search_results import (
    extract_url_citations,
    extract_web_search_results,
    normalise_model_results,
)
from content_engine.infrastructure.openai_client import ResilientOpenAIClient
from content_engine.infrastructure.tavily_client import DEFAULT_MAX_RESULTS, TavilyClient

logger = logging.getLogger(__name__)

_SEARCH_MODEL = "gpt-4.1-mini"
_WEB_SEARCH_TOOL = {"type": "web_search_preview"}

_WEB_TEST_SYSTEM_PROMPT = """
You are a retrieval assistant.

Use ONLY web search tools that are available to you.

Return JSON of the form:
{
  "results": [
    { "title": "", "url": "", "snippet": "", "domain": "" }
  ]
}

Snippets must be short plain text. Only include public sources.
""".strip()

_METADATA_SYSTEM_PROMPT = (
    "Perform a factual public web search. Return ONLY raw search results. No summaries."
)


async def run_tavily_search(
    tavily: TavilyClient | None, query: str | None, max_results: int | None = None,
) -> dict:
    """Validate the query and run it through Tavily."""
    if not query or not isinstance(query, str) or not query.strip():
        raise MissingFieldError(
            "Missing or invalid 'query' in request body", field="query",
        )
    context = ErrorContext(endpoint="/api/web-search")
    if tavily is None:
        raise ConfigurationError("TAVILY_API_KEY", context=context)
    return await tavily.search(
        query.strip(), max_results or DEFAULT_MAX_RESULTS, context=context,
    )


class OpenAIWebSearch:
    """Web search through the OpenAI Responses API web_search_preview tool."""

    def __init__(
        self, openai_client: ResilientOpenAIClient, model: str = _SEARCH_MODEL,
    ) -> None:
        self.client = openai_client
        self.model = model

    async def web_test(self, query: str | None) -> dict:
        """Ask the model to search and answer as JSON; normalise the results."""
        if not isinstance(query, str) or not query.strip():
            raise MissingFieldError("Missing query", field="query")

        context = ErrorContext(endpoint="/api/web-test", model=self.model)
        user_prompt = f'Query: "{query.strip()}"\n\nReturn ONLY JSON.'
        response = await self.client.create_response(
            model=self.model,
            input=[
                {"role": "system", "content": _WEB_TEST_SYSTEM_PROMPT},
                {"role": "user", "content": user_prompt},
            ],
            tools=[_WEB_SEARCH_TOOL],
            max_output_tokens=600,
            context=context,
        )

        raw = response_text(response)
        try:
            parsed = extract_json_object(raw)
        except ValueError as e:
            raise ModelOutputError(
                "Model did not return JSON", raw=raw, context=context,
            ) from e
        if not isinstance(parsed.get("results"), list):
            raise ModelOutputError(
                "Model did not return results array", raw=raw, context=context,
            )
        return {"results": normalise_model_results(parsed)}

    async def search_public_metadata(
        self,
        company: str | None = None,
        sector: str | None = None,
        geography: str | None = None,
        deal_type: str | None = None,
        max_results: int = DEFAULT_MAX_RESULTS,
    ) -> list[dict]:
        """Search the public web using only high-level deal metadata."""
        query = " ".join(
            part.strip() for part in (company, sector, geography, deal_type)
            if part and part.strip()
        )
        if not query:
            return []

        try:
            response = await self.client.create_response(
                model=self.model,
                input=[
                    {"role": "system", "content": _METADATA_SYSTEM_PROMPT},
                    {"role": "user", "content": f'Search the public domain for: "{query}"'},
                ],
                tools=[_WEB_SEARCH_TOOL],
                max_output_tokens=300,
                context=ErrorContext(endpoint="metadata_search", model=self.model),
            )
        except Exception as e:
            logger.error("Metadata web search failed: %s", e, exc_info=True)
            return []

        output = getattr(response, "output", None)
        results = extract_web_search_results(output, max_results)
        if not results:
            results = extract_url_citations(output, max_results)
        return results
