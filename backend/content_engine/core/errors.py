"""Error Hierarchy — typed, categorized exceptions for all Content Engine failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request errors are 400-level; configuration and upstream errors are 500-level
    - to_response() produces the REST envelope used by every error response
    - No upstream response bodies or stack traces in user-facing messages

Design Decisions:
    - Single hierarchy with ContentEngineError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    EXTERNAL_API = "external_api"
    MODEL_OUTPUT = "model_output"
    INTERNAL = "internal"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and the response envelope."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    endpoint: str | None = None
    model: str | None = None
    upstream_status: int | None = None
    retry_after_ms: int | None = None
    debug_info: dict[str, Any] | None = None


class ContentEngineError(Exception):
    """Base exception for all Content Engine errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.details = details

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "details": self.details,
                "context": {
                    "endpoint": self.context.endpoint,
                    "model": self.context.model,
                    "upstream_status": self.context.upstream_status,
                    "retry_after_ms": self.context.retry_after_ms,
                },
            }
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class MissingFieldError(ContentEngineError):
    """Required request field missing or blank."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "MISSING_FIELD", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
            details={"field": field},
        )
        self.field = field


class InvalidURLError(ContentEngineError):
    """URL could not be parsed or uses a scheme other than http/https."""
    def __init__(self, message: str, url: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_URL", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
            details={"url": url},
        )
        self.url = url


# ─── Server Errors (500-level) ──────────────────────────────────

class ConfigurationError(ContentEngineError):
    """A required environment variable is not set."""
    def __init__(self, variable: str, context: ErrorContext | None = None):
        super().__init__(
            f"Missing {variable} environment variable",
            "CONFIGURATION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.variable = variable


class EmptyCompletionError(ContentEngineError):
    """Model call succeeded but returned no usable text."""
    def __init__(self, message: str = "Model returned empty content",
                 context: ErrorContext | None = None):
        super().__init__(
            message, "EMPTY_COMPLETION", ErrorCategory.MODEL_OUTPUT,
            ErrorSeverity.ERROR, context, 500,
        )


class ModelOutputError(ContentEngineError):
    """Model returned text that does not match the requested shape."""
    def __init__(self, message: str, raw: Any = None, context: ErrorContext | None = None):
        super().__init__(
            message, "MODEL_OUTPUT_INVALID", ErrorCategory.MODEL_OUTPUT,
            ErrorSeverity.ERROR, context, 500,
            details={"raw": raw} if raw is not None else None,
        )


_OPENAI_STATUS_BY_TYPE = {
    "timeout": 504,
    "rate_limit": 503,
    "connection_error": 503,
}


class OpenAIAPIError(ContentEngineError):
    """OpenAI API call failed."""
    def __init__(
        self,
        message: str,
        api_error_type: str,
        retry_after_ms: int | None = None,
        upstream_status: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_ms = retry_after_ms
        ctx.upstream_status = upstream_status
        category = (
            ErrorCategory.TIMEOUT if api_error_type == "timeout"
            else ErrorCategory.EXTERNAL_API
        )
        super().__init__(
            f"OpenAI API error ({api_error_type}): {message}",
            "OPENAI_API_ERROR", category,
            ErrorSeverity.CRITICAL, ctx,
            _OPENAI_STATUS_BY_TYPE.get(api_error_type, 502),
        )
        self.api_error_type = api_error_type


class SearchProviderError(ContentEngineError):
    """Tavily search call failed."""
    def __init__(
        self, message: str, upstream_status: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.upstream_status = upstream_status
        super().__init__(
            message, "SEARCH_PROVIDER_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, ctx, 502,
        )


class UpstreamFetchError(ContentEngineError):
    """Fetching a user-supplied URL failed."""
    def __init__(
        self, message: str, upstream_status: int | None = None,
        status_text: str | None = None, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.upstream_status = upstream_status
        super().__init__(
            message, "UPSTREAM_FETCH_FAILED", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, ctx, 502,
            details={"status": upstream_status, "statusText": status_text},
        )
