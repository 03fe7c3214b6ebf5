"""Draft Q&A Route — POST /api/query."""

from fastapi import APIRouter, Depends

from content_engine.api.dependencies import get_query_answerer
from content_engine.schemas.requests import QueryRequest
from content_engine.services.handle_query import QueryAnswerer

router = APIRouter(prefix="/api/query", tags=["analysis"])


@router.post("")
async def answer_query(
    body: QueryRequest | None = None,
    answerer: QueryAnswerer = Depends(get_query_answerer),
):
    return await answerer.answer(body or QueryRequest())
