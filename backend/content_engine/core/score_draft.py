"""Draft Reliability Score — heuristic 0–1 quality estimate without an LLM call.

Invariants:
    - Pure function: no IO, no async
    - Result always in [0, 1]; blank or non-string input scores 0.4
    - Starts from a neutral 0.5 and applies additive adjustments

Design Decisions:
    - Structural and content signals only (length, sentences, paragraphs,
      numeric detail, red-flag phrases) — stable across models
    - model and public_search accepted for call-site symmetry; not weighted yet
"""

import math
import re

from content_engine.core.domain_types import ReliabilityScore, clamp_reliability

_EMPTY_SCORE = 0.4
_NEUTRAL_SCORE = 0.5

_RED_FLAG_PHRASES = (
    "as an ai language model",
    "lorem ipsum",
    "placeholder text",
    "cannot browse the internet",
    "i do not have access to real-time data",
)

_SENTENCE_END_RE = re.compile(r"[.!?]+")
_PARAGRAPH_SPLIT_RE = re.compile(r"\n{2,}")
_YEAR_RE = re.compile(r"\b\d{4}\b")
_PERCENT_RE = re.compile(r"\b\d+(\.\d+)?%")
_GROUPED_NUMBER_RE = re.compile(r"\b\d{1,3}(,\d{3})+\b")
_HEADING_RE = re.compile(r"^#+\s", re.MULTILINE)
_BULLET_RE = re.compile(r"(?:^|\n)\s*[-*•]\s+", re.MULTILINE)
_CAPS_RUN_RE = re.compile(r"[A-Z]{4,}")


def _length_adjustment(word_count: int) -> float:
    if word_count < 50:
        return -0.15
    if word_count < 150:
        return -0.05
    if word_count > 1200:
        return -0.05
    return 0.05


def _structure_adjustment(sentence_count: int, paragraph_count: int) -> float:
    delta = 0.0
    if sentence_count >= 4:
        delta += 0.05
    if sentence_count >= 8:
        delta += 0.03
    if paragraph_count >= 2:
        delta += 0.05
    if paragraph_count >= 4:
        delta += 0.02
    return delta


def _content_adjustment(raw: str) -> float:
    delta = 0.0
    if _YEAR_RE.search(raw):
        delta += 0.03
    if _PERCENT_RE.search(raw):
        delta += 0.03
    if _GROUPED_NUMBER_RE.search(raw):
        delta += 0.03
    if _HEADING_RE.search(raw) or _BULLET_RE.search(raw):
        delta += 0.02
    return delta


def _red_flag_adjustment(raw: str) -> float:
    delta = 0.0
    lower = raw.lower()
    if any(phrase in lower for phrase in _RED_FLAG_PHRASES):
        delta -= 0.3
    if len(_CAPS_RUN_RE.findall(raw)) > 10:
        delta -= 0.05
    return delta


def score_draft(
    text: object, model: str | None = None, *, public_search: bool = False,
) -> ReliabilityScore:
    """Score a draft between 0 and 1. Frontend renders it as a percentage."""
    if not isinstance(text, str) or not text.strip():
        return ReliabilityScore(_EMPTY_SCORE)

    raw = text.strip()
    word_count = len(raw.split())
    sentence_count = len(_SENTENCE_END_RE.findall(raw))
    paragraph_count = len([p for p in _PARAGRAPH_SPLIT_RE.split(raw) if p]) or 1

    score = _NEUTRAL_SCORE
    score += _length_adjustment(word_count)
    score += _structure_adjustment(sentence_count, paragraph_count)
    score += _content_adjustment(raw)
    score += _red_flag_adjustment(raw)

    if not math.isfinite(score):
        score = _NEUTRAL_SCORE
    return clamp_reliability(score)
