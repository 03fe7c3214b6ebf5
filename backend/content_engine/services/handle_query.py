"""Draft Q&A — answers a question about a draft and its sources.

Invariants:
    - question and draftText are both required (MissingFieldError otherwise)
    - At most 6 sources enter the prompt, each bounded to 1200 characters
    - Web context only for public_info / verification questions with publicSearch on
    - answer is always a string (falls back to a JSON dump of the payload)

Design Decisions:
    - Responses API (not chat.completions) with max_output_tokens 800
    - Model comes from settings.openai_model_id, not the request
"""

import logging

from content_engine.core.classify_question import (
    classify_question,
    guidance_for,
    needs_web_context,
)
from content_engine.core.completion_payloads import response_text
from content_engine.core.errors import ErrorContext, MissingFieldError
from content_engine.core.search_results import format_results_for_prompt
from content_engine.infrastructure.openai_client import ResilientOpenAIClient
from content_engine.schemas.requests import QueryRequest, SourceDocument
from content_engine.services.public_search import PublicSearch

logger = logging.getLogger(__name__)

_MAX_SOURCES = 6
_MAX_SNIPPET_CHARS = 1200
_MAX_OUTPUT_TOKENS = 800
_NO_SOURCES = "No structured sources were provided."

_SYSTEM_PROMPT = """
You are an AI assistant helping an investment and communications team reason about a draft
and its supporting sources.

Goals:
- Answer narrowly and directly the specific question asked by the user.
- Use the draft and the provided sources as primary context.
- If asked whether a detail is "public information", you MUST:
  - First infer whether it is clearly in the public domain (e.g., in press releases, news articles, company filings).
  - If uncertain, state that it is unclear and that the user should treat it as internal / non-public.
- If the question is about meaning or interpretation (e.g. "What is meant by ..."), explain concisely in plain language.
- If the draft appears to make a claim that is weakly supported by sources, call that out and suggest caution.

Output format:
- A short, well-structured answer in 1–3 concise paragraphs.
- Be explicit about uncertainty instead of guessing.
""".strip()


def summarise_sources(sources: list[SourceDocument]) -> str:
    """Labelled, bounded source snippets for the prompt."""
    if not sources:
        return _NO_SOURCES
    blocks = []
    for idx, source in enumerate(sources[:_MAX_SOURCES]):
        label = source.name or source.url or source.kind or f"Source {idx + 1}"
        snippet = (source.text or "")[:_MAX_SNIPPET_CHARS]
        blocks.append(f"Source {idx + 1} – {label}:\n{snippet}")
    return "\n\n".join(blocks)


def build_user_prompt(
    req: QueryRequest, guidance: str, web_results: list[dict],
) -> str:
    parts = [
        f"Scenario: {req.scenario or 'n/a'}",
        f"Version type: {req.version_type or 'n/a'}",
        "",
        "DRAFT TEXT:",
        req.draft_text or "",
        "",
        "SOURCES:",
        summarise_sources(req.sources),
    ]
    if web_results:
        parts += ["", "PUBLIC WEB RESULTS:", format_results_for_prompt(web_results)]
    parts += [
        "",
        "ANSWERING GUIDANCE:",
        guidance,
        "",
        "USER QUESTION:",
        req.question or "",
    ]
    return "\n".join(parts)


class QueryAnswerer:
    """Answers free-form questions about a draft."""

    def __init__(
        self,
        openai_client: ResilientOpenAIClient,
        model_id: str,
        public_search: PublicSearch | None = None,
    ) -> None:
        self.client = openai_client
        self.model_id = model_id
        self.public_search = public_search

    async def answer(self, req: QueryRequest) -> dict:
        if not (req.question or "").strip() or not (req.draft_text or "").strip():
            missing = "question" if not (req.question or "").strip() else "draftText"
            raise MissingFieldError(
                "Both 'question' and 'draftText' are required", field=missing,
            )

        kind = classify_question(req.question)
        web_results: list[dict] = []
        if req.public_search and self.public_search is not None and needs_web_context(kind):
            web_results = await self.public_search.search_for(req.question, req.draft_text)

        response = await self.client.create_response(
            model=self.model_id,
            input=[
                {"role": "system", "content": _SYSTEM_PROMPT},
                {"role": "user", "content": build_user_prompt(req, guidance_for(kind), web_results)},
            ],
            max_output_tokens=_MAX_OUTPUT_TOKENS,
            context=ErrorContext(endpoint="/api/query", model=self.model_id),
        )
        logger.info(
            "Query answered",
            extra={"endpoint": "/api/query", "question_type": kind.value},
        )
        return {
            "answer": response_text(response),
            "questionType": kind.value,
            "webResults": web_results,
            "model": self.model_id,
        }
