"""Statement Analysis — splits a draft into scored, categorised statements.

Invariants:
    - analyse() never raises: blank drafts give the empty analysis, upstream
      failures give the empty analysis with ok=False and an error message
    - Unparsable model output gives the empty analysis with ok=True
    - Response always carries model and usage keys (values may be None)

Design Decisions:
    - Plain chat completion without response_format or tools; JSON enforced by prompt
    - JSON salvage (core/parse_json) + normalisation (core/statement_analysis)
"""

import logging

from content_engine.core.completion_payloads import chat_text, usage_summary
from content_engine.core.errors import ErrorContext
from content_engine.core.parse_json import extract_json_object
from content_engine.core.statement_analysis import (
    empty_analysis,
    normalise_analysis,
    resolve_max_statements,
)
from content_engine.infrastructure.openai_client import ResilientOpenAIClient
from content_engine.services.style_guides import ANALYSIS_STYLE_GUIDE

logger = logging.getLogger(__name__)

DEFAULT_ANALYSIS_MODEL = "gpt-4o-mini"
_MAX_COMPLETION_TOKENS = 1400

_RESPONSE_SCHEMA = """
type StatementCategory = "factual" | "subjective" | "speculative" | "uncertain";
type AnalysedStatement = {
  id: string;           // "s1", "s2", ...
  text: string;         // the atomic statement
  reliability: number;  // between 0 and 1
  category: StatementCategory;
  implication: string;  // 2–3 sentences as described above
};

type AnalysisResult = {
  summary: {
    totalStatements: number;
    byCategory: {
      factual: number;
      subjective: number;
      speculative: number;
      uncertain: number;
    };
  };
  statements: AnalysedStatement[];
};
""".strip()


def _build_system_prompt() -> str:
    return "\n\n".join([
        ANALYSIS_STYLE_GUIDE,
        "Return results as pure JSON only. Do not wrap in markdown or add commentary.",
    ])


def _build_user_prompt(draft_text: str, max_statements: int) -> str:
    return "\n".join([
        "You will receive a block of text from an investor-facing draft document.",
        "Your task is to help a compliance-conscious investment writer understand "
        "which statements are strong and which are weak.",
        "",
        f"1. Identify up to {max_statements} of the most important, distinct statements.",
        "2. For each, assign reliability (0–1), category, and implication.",
        "   - Focus reliability on how well-supported and precise the claim is.",
        "   - Use the categories consistently:",
        '       • "factual"      – concrete, well-supported, verifiable claims',
        '       • "subjective"   – opinions, qualitative judgements, tone statements',
        '       • "speculative"  – forward-looking or contingent claims, scenario language',
        '       • "uncertain"    – ambiguous, internally inconsistent, or clearly under-specified claims',
        "3. For implication, give 2–3 short sentences describing:",
        "       • why you gave that score and category, and",
        "       • what this means for investor communication (e.g. should be softened, "
        "requires specific caveats, probably fine as-is, etc.).",
        "4. Summarise the overall mix of statements at the end.",
        "",
        "INPUT DRAFT:",
        draft_text.strip(),
        "",
        "RESPONSE FORMAT (IMPORTANT):",
        "Respond ONLY with a single JSON object that matches this TypeScript type:",
        "",
        _RESPONSE_SCHEMA,
        "",
        "Respond with valid JSON for AnalysisResult. "
        "Do NOT include backticks or any text before/after the JSON.",
    ])


class StatementAnalyser:
    """Runs the statement analysis prompt and normalises its JSON answer."""

    def __init__(self, openai_client: ResilientOpenAIClient) -> None:
        self.client = openai_client

    async def analyse(
        self,
        draft_text: str | None,
        model_id: str | None = None,
        max_statements: object = None,
    ) -> dict:
        if not isinstance(draft_text, str) or not draft_text.strip():
            return empty_analysis()

        model = model_id or DEFAULT_ANALYSIS_MODEL
        limit = resolve_max_statements(max_statements)
        try:
            completion = await self.client.chat_completion(
                model=model,
                messages=[
                    {"role": "system", "content": _build_system_prompt()},
                    {"role": "user", "content": _build_user_prompt(draft_text, limit)},
                ],
                temperature=0,
                max_completion_tokens=_MAX_COMPLETION_TOKENS,
                context=ErrorContext(endpoint="/api/analyse-statements", model=model),
            )
        except Exception as e:
            logger.error("Statement analysis failed: %s", e, exc_info=True)
            return empty_analysis(ok=False, error="Failed to analyse statements")

        raw = chat_text(completion)
        try:
            analysis = normalise_analysis(extract_json_object(raw), limit)
        except ValueError as e:
            logger.warning("Failed to parse analysis JSON: %s", e)
            analysis = empty_analysis()

        analysis["model"] = getattr(completion, "model", None)
        analysis["usage"] = usage_summary(completion)
        return analysis
