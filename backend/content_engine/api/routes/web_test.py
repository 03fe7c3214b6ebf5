"""Web Test Route — GET|POST /api/web-test (OpenAI web_search diagnostics)."""

from fastapi import APIRouter, Depends, Query

from content_engine.api.dependencies import get_openai_web_search
from content_engine.schemas.requests import WebTestRequest
from content_engine.services.handle_web_search import OpenAIWebSearch

router = APIRouter(prefix="/api/web-test", tags=["search"])


@router.get("")
async def web_test_get(
    query: str = Query(""),
    web_search: OpenAIWebSearch = Depends(get_openai_web_search),
):
    return await web_search.web_test(query)


@router.post("")
async def web_test_post(
    body: WebTestRequest | None = None,
    web_search: OpenAIWebSearch = Depends(get_openai_web_search),
):
    return await web_search.web_test((body or WebTestRequest()).query)
