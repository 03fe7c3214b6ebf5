"""Resilient OpenAI Client — wraps AsyncOpenAI with retry, backoff, and error mapping.

Invariants:
    - Rate limits (429): exponential backoff with jitter, respects Retry-After header
    - Transient errors (5xx, connection): retried up to max_retries with backoff
    - Timeouts and client errors (4xx except 429): immediate failure, no retry
    - All failures mapped to OpenAIAPIError (core/errors.py)
    - SDK-level retries disabled (max_retries=0) so only this loop retries

Design Decisions:
    - Wrapper over raw client: handlers never see openai exceptions
    - ±25% jitter on backoff
    - One wrapper method per endpoint family: chat.completions and responses
"""

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable

import openai
from openai import (
    APIConnectionError,
    APIError,
    APIStatusError,
    APITimeoutError,
    InternalServerError,
    RateLimitError,
)

from content_engine.core.errors import ErrorContext, OpenAIAPIError

logger = logging.getLogger(__name__)


class ResilientOpenAIClient:
    """Wraps the OpenAI client with retry logic, timeouts, and error mapping."""

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        max_retries: int = 2,
        base_delay_ms: int = 500,
        max_delay_ms: int = 8_000,
        timeout_seconds: float = 60.0,
    ):
        self.client = openai.AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout_seconds,
            max_retries=0,
        )
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    async def chat_completion(
        self,
        *,
        model: str,
        messages: list[dict],
        temperature: float | None = None,
        max_completion_tokens: int | None = None,
        context: ErrorContext | None = None,
    ):
        """Create a chat completion with automatic retry on transient failures."""
        kwargs: dict = {"model": model, "messages": messages}
        if temperature is not None:
            kwargs["temperature"] = temperature
        if max_completion_tokens is not None:
            kwargs["max_completion_tokens"] = max_completion_tokens
        return await self._with_retry(
            lambda: self.client.chat.completions.create(**kwargs), context,
        )

    async def create_response(
        self,
        *,
        model: str,
        input: str | list[dict],
        tools: list[dict] | None = None,
        max_output_tokens: int | None = None,
        temperature: float | None = None,
        context: ErrorContext | None = None,
    ):
        """Call the Responses API with automatic retry on transient failures."""
        kwargs: dict = {"model": model, "input": input}
        if tools:
            kwargs["tools"] = tools
        if max_output_tokens is not None:
            kwargs["max_output_tokens"] = max_output_tokens
        if temperature is not None:
            kwargs["temperature"] = temperature
        return await self._with_retry(
            lambda: self.client.responses.create(**kwargs), context,
        )

    async def _with_retry(
        self,
        call: Callable[[], Awaitable],
        context: ErrorContext | None,
    ):
        for attempt in range(self.max_retries + 1):
            try:
                response = await call()
                self._log_success(response, attempt)
                return response

            except RateLimitError as e:
                await self._handle_rate_limit(e, attempt, context)

            # APITimeoutError subclasses APIConnectionError: catch it first.
            except APITimeoutError:
                raise OpenAIAPIError(
                    "API timeout", "timeout", context=context,
                )

            except (APIConnectionError, InternalServerError) as e:
                await self._handle_transient_error(e, attempt, context)

            except APIStatusError as e:
                raise OpenAIAPIError(
                    e.message, "client_error",
                    upstream_status=e.status_code, context=context,
                )

            except APIError as e:
                raise OpenAIAPIError(
                    str(e), "unknown", context=context,
                )

    def _log_success(self, response, attempt: int) -> None:
        """Log successful API call with token usage."""
        usage = getattr(response, "usage", None)
        prompt_tokens = getattr(usage, "prompt_tokens", None)
        if prompt_tokens is None:
            prompt_tokens = getattr(usage, "input_tokens", None)
        completion_tokens = getattr(usage, "completion_tokens", None)
        if completion_tokens is None:
            completion_tokens = getattr(usage, "output_tokens", None)
        logger.info(
            "OpenAI API success",
            extra={
                "attempt": attempt + 1,
                "model": getattr(response, "model", None),
                "prompt_tokens": prompt_tokens,
                "completion_tokens": completion_tokens,
                "total_tokens": getattr(usage, "total_tokens", None),
            },
        )

    async def _handle_rate_limit(
        self, e: RateLimitError, attempt: int, context: ErrorContext | None,
    ) -> None:
        """Handle rate limit error with retry or raise."""
        retry_after_ms = self._extract_retry_after(e)
        if attempt >= self.max_retries:
            raise OpenAIAPIError(
                "Rate limit exceeded after retries",
                "rate_limit",
                retry_after_ms=retry_after_ms,
                upstream_status=429,
                context=context,
            )
        delay = min(retry_after_ms or self._backoff(attempt), self.max_delay_ms)
        logger.warning(
            f"Rate limit hit, retry after {delay}ms (attempt {attempt + 1})",
        )
        await asyncio.sleep(delay / 1000)

    async def _handle_transient_error(
        self, e: Exception, attempt: int, context: ErrorContext | None,
    ) -> None:
        """Handle transient errors with retry or raise."""
        if attempt >= self.max_retries:
            raise OpenAIAPIError(
                f"Transient failure after {self.max_retries} retries: {e}",
                "connection_error",
                upstream_status=getattr(e, "status_code", None),
                context=context,
            )
        delay = self._backoff(attempt)
        logger.warning(f"Transient error, retry after {delay}ms: {e}")
        await asyncio.sleep(delay / 1000)

    def _backoff(self, attempt: int) -> int:
        """Exponential backoff with ±25% jitter."""
        delay = min(self.max_delay_ms, (2 ** attempt) * self.base_delay_ms)
        return int(delay * random.uniform(0.75, 1.25))  # nosec B311

    def _extract_retry_after(self, error: RateLimitError) -> int | None:
        """Extract Retry-After header (returns milliseconds)."""
        response = getattr(error, "response", None)
        if response is None:
            return None
        val = response.headers.get("retry-after")
        if not val:
            return None
        try:
            return int(float(val) * 1000)
        except ValueError:
            return None
