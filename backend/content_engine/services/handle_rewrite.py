"""Draft Rewrite — revises an existing draft following author instructions.

Invariants:
    - Blank text or blank instructions raise MissingFieldError (400)
    - Empty model output raises EmptyCompletionError (500)
    - Output always passes through house style before returning
"""

import logging

from content_engine.core.completion_payloads import chat_text, usage_summary
from content_engine.core.errors import EmptyCompletionError, ErrorContext, MissingFieldError
from content_engine.core.house_style import apply_house_style
from content_engine.core.score_draft import score_draft
from content_engine.core.word_limits import approximate_tokens_from_words, is_positive_number
from content_engine.infrastructure.openai_client import ResilientOpenAIClient
from content_engine.schemas.requests import RewriteRequest
from content_engine.services.style_guides import HOUSE_STYLE_RULES

logger = logging.getLogger(__name__)

DEFAULT_REWRITE_MODEL = "gpt-4.1-mini"
_TEMPERATURE = 0.25
_MIN_TARGET_WORDS = 50
_TOKEN_HEADROOM = 200
_MAX_TOKENS_CAP = 2200
_DEFAULT_MAX_TOKENS = 1200


def length_guidance(max_words: object) -> tuple[str, int]:
    """Length instruction and max_completion_tokens for the rewrite call."""
    if is_positive_number(max_words):
        target = max(_MIN_TARGET_WORDS, round(max_words))
        approx = approximate_tokens_from_words(target)
        tokens = min(approx + _TOKEN_HEADROOM, _MAX_TOKENS_CAP)
        guidance = (
            f"Target rewritten length: around {target} words. "
            "If the instructions explicitly say to expand or shorten, obey those "
            "instructions first, but try to stay near this length."
        )
        return guidance, tokens
    return (
        "Rewrite for clarity and structure. Keep roughly similar length unless "
        "instructions explicitly say otherwise.",
        _DEFAULT_MAX_TOKENS,
    )


def _build_system_prompt() -> str:
    return "\n".join([
        "You are revising an investment draft based on instructions from the author.",
        "",
        HOUSE_STYLE_RULES,
        "",
        "Rewrite goals:",
        "- Obey the author's rewrite instructions exactly.",
        "- Preserve factual content from the original draft unless instructions say otherwise.",
        "- You may re-order and tighten the text.",
        "- Maintain professional, neutral tone.",
    ])


def _build_user_prompt(text: str, notes: str, guidance: str) -> str:
    return "\n\n".join([
        "ORIGINAL DRAFT:",
        text,
        "REWRITE INSTRUCTIONS FROM AUTHOR:",
        notes,
        guidance,
        "TASK:",
        "- Produce the full rewritten draft text.\n"
        "- Apply the house style rules strictly.\n"
        "- Do not explain what you changed – return only the rewritten draft.",
    ])


class DraftRewriter:
    """Rewrites a draft according to the author's notes."""

    def __init__(self, openai_client: ResilientOpenAIClient) -> None:
        self.client = openai_client

    async def rewrite(self, req: RewriteRequest) -> dict:
        text = (req.text or "").strip()
        notes = (req.notes or "").strip()
        if not text:
            raise MissingFieldError("Base draft text is required for rewrite.", field="text")
        if not notes:
            raise MissingFieldError("Rewrite instructions are required.", field="notes")

        model = (req.model or "").strip() or DEFAULT_REWRITE_MODEL
        context = ErrorContext(endpoint="/api/rewrite", model=model)
        guidance, max_tokens = length_guidance(req.max_words)

        completion = await self.client.chat_completion(
            model=model,
            messages=[
                {"role": "system", "content": _build_system_prompt()},
                {"role": "user", "content": _build_user_prompt(text, notes, guidance)},
            ],
            temperature=_TEMPERATURE,
            max_completion_tokens=max_tokens,
            context=context,
        )
        rewritten = chat_text(completion)
        if not rewritten:
            logger.error("Rewrite completion empty", extra={"model": model})
            raise EmptyCompletionError("Model returned empty rewrite text.", context=context)

        rewritten = apply_house_style(rewritten)
        return {
            "text": rewritten,
            "score": score_draft(rewritten, model),
            "model": model,
            "usage": usage_summary(completion),
        }
