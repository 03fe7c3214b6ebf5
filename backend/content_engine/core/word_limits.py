"""Word Limits — word counting, token budgeting and length trimming.

Invariants:
    - Pure functions: no IO, no async
    - Tokens ≈ words / 0.75 (OpenAI rule of thumb for English prose)
    - trim_to_word_limit never returns more than max_words words
    - Whole sentences are kept when at least half the word budget survives

Design Decisions:
    - Trimming is the last resort after the model's own "shorten" pass
"""

import math
import re

_WORDS_PER_TOKEN = 0.75
_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]+[\"')\]]*\s*|[^.!?]+$")
_ELLIPSIS = "…"


def count_words(text: str | None) -> int:
    if not text:
        return 0
    return len(text.split())


def approximate_tokens_from_words(word_count: object) -> int | None:
    """Token estimate for a word count. None for non-numeric or non-positive input."""
    if isinstance(word_count, bool) or not isinstance(word_count, (int, float)):
        return None
    if not math.isfinite(word_count) or word_count <= 0:
        return None
    return round(word_count / _WORDS_PER_TOKEN)


def is_positive_number(value: object) -> bool:
    """True for finite real numbers > 0 (bool excluded)."""
    return (
        not isinstance(value, bool)
        and isinstance(value, (int, float))
        and math.isfinite(value)
        and value > 0
    )


def exceeds_word_limit(text: str, max_words: int, tolerance: float = 0.1) -> bool:
    """True when text is more than `tolerance` over the limit."""
    return count_words(text) > max_words * (1 + tolerance)


def trim_to_word_limit(text: str, max_words: int) -> str:
    """Cut text down to max_words, preferring sentence boundaries.

    Paragraph breaks inside the kept sentences are preserved.
    """
    if max_words <= 0 or count_words(text) <= max_words:
        return text

    kept: list[str] = []
    used = 0
    for match in _SENTENCE_RE.finditer(text):
        sentence = match.group(0)
        words = count_words(sentence)
        if used + words > max_words:
            break
        kept.append(sentence)
        used += words

    if used >= max_words / 2:
        return "".join(kept).rstrip()

    words = text.split()[:max_words]
    return " ".join(words).rstrip(",;:") + _ELLIPSIS
