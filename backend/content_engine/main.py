"""Content Engine API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ContentEngineError → structured JSON responses
    - CORS configured from settings; preflight OPTIONS answered by the middleware
    - Logging configured on startup via lifespan context manager
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from content_engine import __version__
from content_engine.api.error_handlers import register_error_handlers
from content_engine.api.routes import (
    analyse_statements,
    fetch_url,
    generate,
    health,
    query,
    rewrite,
    web_search,
    web_test,
)
from content_engine.config import get_settings
from content_engine.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set; LLM endpoints will return 500")
    logger.info("Content Engine API started")
    yield
    logger.info("Content Engine API shutting down")


app = FastAPI(
    title="Content Engine API", version=__version__, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(health.router)
app.include_router(generate.router)
app.include_router(rewrite.router)
app.include_router(query.router)
app.include_router(analyse_statements.router)
app.include_router(web_search.router)
app.include_router(web_test.router)
app.include_router(fetch_url.router)

register_error_handlers(app)
