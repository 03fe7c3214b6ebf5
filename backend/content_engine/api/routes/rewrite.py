"""Draft Rewrite Route — POST /api/rewrite."""

from fastapi import APIRouter, Depends

from content_engine.api.dependencies import get_draft_rewriter
from content_engine.schemas.requests import RewriteRequest
from content_engine.services.handle_rewrite import DraftRewriter

router = APIRouter(prefix="/api/rewrite", tags=["drafting"])


@router.post("")
async def rewrite_draft(
    body: RewriteRequest | None = None,
    rewriter: DraftRewriter = Depends(get_draft_rewriter),
):
    return await rewriter.rewrite(body or RewriteRequest())
