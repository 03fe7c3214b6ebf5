"""Web Search Route — POST /api/web-search (Tavily diagnostics).

Invariants:
    - Every response carries ok; failures (including body validation) get
      ok=false from api/error_handlers.py via OK_FLAG_PATHS
"""

from fastapi import APIRouter, Depends

from content_engine.api.dependencies import get_tavily_client
from content_engine.infrastructure.tavily_client import TavilyClient
from content_engine.schemas.requests import WebSearchRequest
from content_engine.services.handle_web_search import run_tavily_search

router = APIRouter(prefix="/api/web-search", tags=["search"])


@router.post("")
async def web_search(
    body: WebSearchRequest | None = None,
    tavily: TavilyClient | None = Depends(get_tavily_client),
):
    body = body or WebSearchRequest()
    return await run_tavily_search(tavily, body.query, body.max_results)
