"""Source Import Route — POST /api/fetch-url."""

from fastapi import APIRouter, Depends

from content_engine.api.dependencies import get_source_importer
from content_engine.schemas.requests import FetchUrlRequest
from content_engine.services.handle_fetch_url import SourceImporter

router = APIRouter(prefix="/api/fetch-url", tags=["sources"])


@router.post("")
async def fetch_url(
    body: FetchUrlRequest | None = None,
    importer: SourceImporter = Depends(get_source_importer),
):
    """Fetch a public page server-side and return its visible text."""
    return await importer.import_url((body or FetchUrlRequest()).url)
