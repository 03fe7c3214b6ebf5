"""Error Handlers — every failure leaves the API as one JSON error envelope.

Invariants:
    - ContentEngineError → its own envelope and http_status
    - RequestValidationError → 400 VALIDATION_ERROR, one detail per bad field
    - Anything else → 500 INTERNAL_ERROR; exception text stays in the logs
    - Endpoints in OK_FLAG_PATHS get "ok": false beside the envelope, whatever
      layer produced the error
    - 500s carry their own CORS headers: Starlette answers them from
      ServerErrorMiddleware, which sits outside CORSMiddleware

Design Decisions:
    - Handlers are module-level functions registered with add_exception_handler
    - CORS origins come from Settings, the same list CORSMiddleware uses
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from content_engine.config import get_settings
from content_engine.core.errors import ContentEngineError, ErrorSeverity

logger = logging.getLogger(__name__)

# Diagnostics endpoints whose clients branch on body["ok"].
OK_FLAG_PATHS = frozenset({"/api/web-search"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ContentEngineError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


def cors_headers(origin: str | None, allowed_origins: list[str]) -> dict[str, str]:
    """CORS response headers for a request Origin, mirroring CORSMiddleware."""
    if not origin:
        return {}
    if "*" in allowed_origins:
        return {"Access-Control-Allow-Origin": "*"}
    if origin in allowed_origins:
        return {"Access-Control-Allow-Origin": origin, "Vary": "Origin"}
    return {}


def _envelope_response(
    request: Request,
    status_code: int,
    body: dict,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    if request.url.path in OK_FLAG_PATHS:
        body = {"ok": False, **body}
    return JSONResponse(status_code=status_code, content=body, headers=headers)


async def handle_domain_error(request: Request, exc: ContentEngineError) -> JSONResponse:
    log = logger.warning if exc.http_status < 500 else logger.error
    log(
        f"{request.url.path} failed: {exc.message}",
        extra={"error_code": exc.code, "endpoint": request.url.path},
    )
    return _envelope_response(request, exc.http_status, exc.to_response())


async def handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.warning(
        f"Invalid request body on {request.url.path}",
        extra={"error_code": "VALIDATION_ERROR", "endpoint": request.url.path},
    )
    return _envelope_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        {
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request data",
                "category": "validation",
                "severity": ErrorSeverity.ERROR.value,
                "details": details,
            },
        },
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "endpoint": request.url.path},
    )
    return _envelope_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        {
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": "internal",
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
        headers=cors_headers(
            request.headers.get("origin"), get_settings().cors_origins,
        ),
    )
