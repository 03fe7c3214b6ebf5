"""Draft Generation Route — POST /api/generate."""

from fastapi import APIRouter, Depends

from content_engine.api.dependencies import get_draft_generator
from content_engine.schemas.requests import GenerateRequest
from content_engine.services.handle_generate import DraftGenerator

router = APIRouter(prefix="/api/generate", tags=["drafting"])


@router.post("")
async def generate_draft(
    body: GenerateRequest | None = None,
    generator: DraftGenerator = Depends(get_draft_generator),
):
    """Draft text + reliability score (+ optional statement analysis)."""
    return await generator.generate(body or GenerateRequest())
