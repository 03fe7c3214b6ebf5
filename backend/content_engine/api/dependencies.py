"""Route Dependencies — client and handler construction for FastAPI Depends.

Invariants:
    - get_openai_client raises ConfigurationError when OPENAI_API_KEY is unset
    - get_tavily_client returns None when TAVILY_API_KEY is unset (search is optional)
    - Clients are cached per process; handlers are cheap and built per request

Design Decisions:
    - Tests override get_openai_client / get_tavily_client / get_url_fetcher via
      app.dependency_overrides; every handler factory depends on those three
"""

from functools import lru_cache

from fastapi import Depends

from content_engine.config import Settings, get_settings
from content_engine.core.errors import ConfigurationError
from content_engine.infrastructure.openai_client import ResilientOpenAIClient
from content_engine.infrastructure.tavily_client import TavilyClient
from content_engine.infrastructure.url_fetcher import UrlFetcher
from content_engine.services.handle_analysis import StatementAnalyser
from content_engine.services.handle_fetch_url import SourceImporter
from content_engine.services.handle_generate import DraftGenerator
from content_engine.services.handle_query import QueryAnswerer
from content_engine.services.handle_rewrite import DraftRewriter
from content_engine.services.handle_web_search import OpenAIWebSearch
from content_engine.services.public_search import PublicSearch


@lru_cache
def _build_openai_client(
    api_key: str, base_url: str | None, max_retries: int,
    base_delay_ms: int, max_delay_ms: int, timeout_seconds: float,
) -> ResilientOpenAIClient:
    return ResilientOpenAIClient(
        api_key=api_key,
        base_url=base_url,
        max_retries=max_retries,
        base_delay_ms=base_delay_ms,
        max_delay_ms=max_delay_ms,
        timeout_seconds=timeout_seconds,
    )


def get_openai_client(
    settings: Settings = Depends(get_settings),
) -> ResilientOpenAIClient:
    if not settings.openai_api_key:
        raise ConfigurationError("OPENAI_API_KEY")
    return _build_openai_client(
        settings.openai_api_key,
        settings.openai_base_url,
        settings.openai_max_retries,
        settings.openai_base_delay_ms,
        settings.openai_max_delay_ms,
        settings.openai_timeout_seconds,
    )


def get_tavily_client(
    settings: Settings = Depends(get_settings),
) -> TavilyClient | None:
    if not settings.tavily_api_key:
        return None
    return TavilyClient(
        api_key=settings.tavily_api_key,
        api_url=settings.tavily_api_url,
        timeout_seconds=settings.tavily_timeout_seconds,
    )


def get_url_fetcher(settings: Settings = Depends(get_settings)) -> UrlFetcher:
    return UrlFetcher(timeout_seconds=settings.fetch_timeout_seconds)


def get_public_search(
    openai_client: ResilientOpenAIClient = Depends(get_openai_client),
    tavily: TavilyClient | None = Depends(get_tavily_client),
) -> PublicSearch:
    return PublicSearch(tavily=tavily, web_search=OpenAIWebSearch(openai_client))


def get_statement_analyser(
    openai_client: ResilientOpenAIClient = Depends(get_openai_client),
) -> StatementAnalyser:
    return StatementAnalyser(openai_client)


def get_draft_generator(
    openai_client: ResilientOpenAIClient = Depends(get_openai_client),
    public_search: PublicSearch = Depends(get_public_search),
    analyser: StatementAnalyser = Depends(get_statement_analyser),
) -> DraftGenerator:
    return DraftGenerator(openai_client, public_search, analyser)


def get_draft_rewriter(
    openai_client: ResilientOpenAIClient = Depends(get_openai_client),
) -> DraftRewriter:
    return DraftRewriter(openai_client)


def get_query_answerer(
    openai_client: ResilientOpenAIClient = Depends(get_openai_client),
    public_search: PublicSearch = Depends(get_public_search),
    settings: Settings = Depends(get_settings),
) -> QueryAnswerer:
    return QueryAnswerer(openai_client, settings.openai_model_id, public_search)


def get_openai_web_search(
    openai_client: ResilientOpenAIClient = Depends(get_openai_client),
) -> OpenAIWebSearch:
    return OpenAIWebSearch(openai_client)


def get_source_importer(
    fetcher: UrlFetcher = Depends(get_url_fetcher),
    settings: Settings = Depends(get_settings),
) -> SourceImporter:
    return SourceImporter(fetcher, settings.fetch_max_chars)
