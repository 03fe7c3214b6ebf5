"""Health Probe — liveness endpoint for the hosting platform.

Invariants:
    - GET /api/health always returns 200 if the process is up
    - No upstream calls (OpenAI/Tavily reachability is not checked here)
"""

from fastapi import APIRouter, status

from content_engine import __version__

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe."""
    return {
        "ok": True,
        "service": "content-engine-api",
        "version": __version__,
    }
