"""Question Classification — keyword lists map a user question to a QuestionKind.

Invariants:
    - Pure function: case-insensitive substring and regex matching
    - Check order is fixed: public_info → verification → meaning → general
    - Blank questions are GENERAL
"""

import re

from content_engine.core.domain_types import QuestionKind

_PUBLIC_INFO_KEYWORDS = (
    "public information", "publicly", "public domain", "in the public",
    "is this public", "disclosed", "disclose", "press release", "announced",
    "announcement", "published", "filing", "confidential", "non-public",
    "can we say", "can we mention", "allowed to mention",
)

_VERIFICATION_KEYWORDS = (
    "is it true", "is this true", "true that", "accurate", "accuracy",
    "correct", "verify", "verified", "fact check", "fact-check", "supported",
    "evidence", "source for", "which source", "where does", "back up",
)

_MEANING_PATTERNS = (
    re.compile(r"\bwhat (?:is|was) meant\b"),
    re.compile(r"\bwhat does .+ mean\b"),
    re.compile(r"\bwhat is (?:a|an|the)\b"),
    re.compile(r"\bmeaning of\b"),
    re.compile(r"\bdefin(?:e|ition)\b"),
    re.compile(r"\bexplain\b"),
    re.compile(r"\binterpret"),
)

_GUIDANCE = {
    QuestionKind.PUBLIC_INFO: (
        "The user asks whether information is public. Judge whether it is clearly "
        "in the public domain (press releases, news articles, company filings). "
        "If uncertain, say so and advise treating it as internal / non-public."
    ),
    QuestionKind.VERIFICATION: (
        "The user asks whether a claim is accurate. Point to the draft passage and "
        "the supporting source, and call out claims that are weakly supported."
    ),
    QuestionKind.MEANING: (
        "The user asks about meaning or interpretation. Explain concisely in plain "
        "language, using the draft's own context."
    ),
    QuestionKind.GENERAL: (
        "Answer the question narrowly and directly."
    ),
}


def classify_question(question: str | None) -> QuestionKind:
    """Classify a question about a draft by its wording."""
    if not question or not question.strip():
        return QuestionKind.GENERAL

    lower = " ".join(question.lower().split())
    if any(kw in lower for kw in _PUBLIC_INFO_KEYWORDS):
        return QuestionKind.PUBLIC_INFO
    if any(kw in lower for kw in _VERIFICATION_KEYWORDS):
        return QuestionKind.VERIFICATION
    if any(p.search(lower) for p in _MEANING_PATTERNS):
        return QuestionKind.MEANING
    return QuestionKind.GENERAL


def guidance_for(kind: QuestionKind) -> str:
    """Prompt instruction tailored to the question kind."""
    return _GUIDANCE[kind]


def needs_web_context(kind: QuestionKind) -> bool:
    """True for questions about public status or accuracy."""
    return kind in (QuestionKind.PUBLIC_INFO, QuestionKind.VERIFICATION)
