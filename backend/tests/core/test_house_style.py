"""House Style — quote and currency normalisation of model output."""

import pytest

from content_engine.core.house_style import apply_house_style


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("raised $12.5m in", "raised USD 12.5 million in"),
        ("a $1,200 fee", "a USD 1,200 fee"),
        ("worth $5 million", "worth USD 5 million"),
        ("a S$50m round", "a SGD 50 million round"),
        ("priced at S$ 3.2", "priced at SGD 3.2"),
        ("a €40m fund", "a EUR 40 million fund"),
    ],
)
def test_currency_rules(raw, expected):
    assert apply_house_style(raw) == expected


def test_sgd_amount_never_becomes_usd():
    out = apply_house_style("Raised S$20m and $10m.")
    assert out == "Raised SGD 20 million and USD 10 million."
    assert "SUSD" not in out


def test_prefixed_dollar_left_alone():
    assert apply_house_style("a US$5m tranche") == "a US$5m tranche"


def test_curly_quotes_straightened():
    assert apply_house_style("“Growth” isn’t ‘guaranteed’") == "\"Growth\" isn't 'guaranteed'"


@pytest.mark.parametrize("value", [None, ""])
def test_empty_values_pass_through(value):
    assert apply_house_style(value) == value
