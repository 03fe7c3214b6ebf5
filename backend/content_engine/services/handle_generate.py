"""Draft Generation — recipe prompt → completion → house style → shorten/trim → score.

Invariants:
    - Empty model content raises EmptyCompletionError (never returns a blank draft)
    - A first draft more than 10% over maxWords triggers one shorten pass; whatever
      is still over the limit is trimmed
    - Word limits are checked against house-styled text, so the returned
      draft never exceeds maxWords after a trim
    - score always in [0, 1]
    - Web enrichment and statement analysis are fail-soft (never fail generation)

Design Decisions:
    - At most two sequential completions: the draft and an optional "shorten" pass
    - Uploaded source text is never sent to search providers; only title and
      notes entities are (see services/public_search.py)
"""

import logging
from datetime import datetime, timezone

from content_engine.core.completion_payloads import chat_text, merge_usage, usage_summary
from content_engine.core.errors import EmptyCompletionError, ErrorContext
from content_engine.core.house_style import apply_house_style
from content_engine.core.score_draft import score_draft
from content_engine.core.search_results import format_results_for_prompt
from content_engine.core.word_limits import (
    approximate_tokens_from_words,
    count_words,
    exceeds_word_limit,
    is_positive_number,
    trim_to_word_limit,
)
from content_engine.infrastructure.openai_client import ResilientOpenAIClient
from content_engine.schemas.requests import GenerateRequest
from content_engine.services.handle_analysis import StatementAnalyser
from content_engine.services.prompt_recipes import (
    build_draft_system_prompt,
    build_draft_user_prompt,
    build_shorten_prompt,
)
from content_engine.services.public_search import PublicSearch

logger = logging.getLogger(__name__)

DEFAULT_DRAFT_MODEL = "gpt-4o-mini"
_TEMPERATURE = 0.3
_SHORTEN_TEMPERATURE = 0.2
_DEFAULT_MAX_TOKENS = 2048
_MIN_MAX_TOKENS = 80
_TOKEN_HEADROOM = 200

_SHORTEN_SYSTEM_PROMPT = (
    "You are a precise editor of institutional investment writing. "
    "You shorten drafts without adding facts."
)


def completion_token_budget(max_words: int | None) -> int:
    """max_completion_tokens for a draft of at most max_words words."""
    if not max_words:
        return _DEFAULT_MAX_TOKENS
    approx = approximate_tokens_from_words(max_words) or 0
    return max(_MIN_MAX_TOKENS, approx + _TOKEN_HEADROOM)


class DraftGenerator:
    """Produces a scored draft from title, notes, sources and scenario."""

    def __init__(
        self,
        openai_client: ResilientOpenAIClient,
        public_search: PublicSearch | None = None,
        analyser: StatementAnalyser | None = None,
    ) -> None:
        self.client = openai_client
        self.public_search = public_search
        self.analyser = analyser

    async def generate(self, req: GenerateRequest) -> dict:
        model = req.model or DEFAULT_DRAFT_MODEL
        max_words = round(req.max_words) if is_positive_number(req.max_words) else None
        context = ErrorContext(endpoint="/api/generate", model=model)

        web_results = await self._search(req)
        source_text = "\n\n".join(s.text or "" for s in req.sources)
        user_prompt = build_draft_user_prompt(
            title=req.title,
            notes=req.notes,
            scenario=req.scenario,
            selected_types=req.selected_types,
            version_type=req.version_type,
            max_words=max_words,
            public_search=req.public_search,
            source_text=source_text,
            web_context=format_results_for_prompt(web_results),
        )

        completion = await self.client.chat_completion(
            model=model,
            messages=[
                {"role": "system", "content": build_draft_system_prompt()},
                {"role": "user", "content": user_prompt},
            ],
            temperature=_TEMPERATURE,
            max_completion_tokens=completion_token_budget(max_words),
            context=context,
        )
        draft = chat_text(completion)
        if not draft:
            logger.error("No draft text in OpenAI completion", extra={"model": model})
            raise EmptyCompletionError(context=context)
        usage = usage_summary(completion)

        draft = apply_house_style(draft)
        shortened = False
        if max_words and exceeds_word_limit(draft, max_words):
            draft, shorten_usage = await self._shorten(draft, max_words, model, context)
            usage = merge_usage(usage, shorten_usage)
            shortened = True

        result = {
            "draftText": draft,
            "score": score_draft(draft, model, public_search=req.public_search),
            "model": model,
            "projectId": req.project_id,
            "usage": usage,
            "createdAt": datetime.now(timezone.utc).isoformat(),
            "wordCount": count_words(draft),
            "shortened": shortened,
            "webResults": web_results,
        }
        if req.include_analysis and self.analyser is not None:
            result["analysis"] = await self.analyser.analyse(draft)
        logger.info(
            "Draft generated",
            extra={"endpoint": "/api/generate", "model": model, "word_count": result["wordCount"]},
        )
        return result

    async def _search(self, req: GenerateRequest) -> list[dict]:
        if not req.public_search or self.public_search is None:
            return []
        return await self.public_search.search_for(req.title, req.notes)

    async def _shorten(
        self, draft: str, max_words: int, model: str, context: ErrorContext,
    ) -> tuple[str, dict]:
        """Ask the model to shorten; hard-trim whatever is still over the limit."""
        logger.info(
            "Draft over word limit, shortening",
            extra={"word_count": count_words(draft), "model": model},
        )
        completion = await self.client.chat_completion(
            model=model,
            messages=[
                {"role": "system", "content": _SHORTEN_SYSTEM_PROMPT},
                {"role": "user", "content": build_shorten_prompt(draft, max_words)},
            ],
            temperature=_SHORTEN_TEMPERATURE,
            max_completion_tokens=completion_token_budget(max_words),
            context=context,
        )
        shorter = apply_house_style(chat_text(completion)) or draft
        if count_words(shorter) > max_words:
            shorter = trim_to_word_limit(shorter, max_words)
        return shorter, usage_summary(completion)
