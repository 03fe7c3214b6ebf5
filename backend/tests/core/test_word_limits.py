"""Word Limits — counting, token approximation, limit checks and trimming."""

import pytest

from content_engine.core.word_limits import (
    approximate_tokens_from_words,
    count_words,
    exceeds_word_limit,
    is_positive_number,
    trim_to_word_limit,
)


def test_count_words():
    assert count_words("one  two\nthree") == 3
    assert count_words("") == 0
    assert count_words(None) == 0


@pytest.mark.parametrize(
    ("words", "tokens"),
    [(75, 100), (300, 400), (100, 133), (1.5, 2)],
)
def test_approximate_tokens(words, tokens):
    assert approximate_tokens_from_words(words) == tokens


@pytest.mark.parametrize("value", [0, -5, True, "10", None, float("nan")])
def test_approximate_tokens_rejects_invalid(value):
    assert approximate_tokens_from_words(value) is None


def test_is_positive_number():
    assert is_positive_number(3)
    assert is_positive_number(0.5)
    assert not is_positive_number(0)
    assert not is_positive_number(True)
    assert not is_positive_number("5")
    assert not is_positive_number(float("inf"))
    assert not is_positive_number(float("nan"))


def test_exceeds_word_limit_allows_ten_percent():
    assert not exceeds_word_limit(" ".join(["w"] * 110), 100)
    assert exceeds_word_limit(" ".join(["w"] * 111), 100)


def test_trim_keeps_whole_sentences():
    text = "One two three. Four five six. Seven eight nine ten."
    assert trim_to_word_limit(text, 7) == "One two three. Four five six."


def test_trim_hard_cuts_without_sentence_breaks():
    text = "a b c d e f g h i j"
    assert trim_to_word_limit(text, 4) == "a b c d…"


def test_trim_hard_cuts_when_first_sentence_too_long():
    text = "This opening sentence is far too long for the budget. Short."
    trimmed = trim_to_word_limit(text, 4)
    assert trimmed == "This opening sentence is…"
    assert count_words(trimmed) == 4


def test_trim_leaves_short_text_untouched():
    text = "Already short."
    assert trim_to_word_limit(text, 10) is text


def test_trim_preserves_paragraph_breaks():
    text = "First point here.\n\nSecond point here.\n\nThird point is dropped now."
    assert trim_to_word_limit(text, 7) == "First point here.\n\nSecond point here."
