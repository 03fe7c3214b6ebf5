"""House Style — deterministic post-processing of model output.

Invariants:
    - Curly quotes become straight quotes
    - Currency symbols become ISO codes: $ → USD, S$ → SGD, € → EUR
    - "m" suffixes after an amount become "million"
    - S$ amounts are never rewritten by the bare $ rule
    - Other letter-prefixed dollars (US$, HK$) are left alone
"""

import re

_DOUBLE_CURLY_RE = re.compile(r"[“”]")
_SINGLE_CURLY_RE = re.compile(r"[‘’]")

# Order matters: SGD forms first so the USD rules never see "S$".
_CURRENCY_RULES: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r"(?<![A-Za-z])S\$\s?(\d+(?:\.\d+)?)\s?[mM]\b"), r"SGD \1 million"),
    (re.compile(r"(?<![A-Za-z])S\$\s?(\d[\d,.]*)\b"), r"SGD \1"),
    (re.compile(r"€\s?(\d+(?:\.\d+)?)\s?[mM]\b"), r"EUR \1 million"),
    (re.compile(r"(?<![A-Za-z])\$\s?(\d+(?:\.\d+)?)\s?[mM]\b"), r"USD \1 million"),
    (re.compile(r"(?<![A-Za-z])\$\s?(\d[\d,.]*)\b"), r"USD \1"),
)


def apply_house_style(text: str | None) -> str | None:
    """Normalise quotes and currency notation. Non-strings pass through."""
    if not text or not isinstance(text, str):
        return text

    out = _DOUBLE_CURLY_RE.sub('"', text)
    out = _SINGLE_CURLY_RE.sub("'", out)
    for pattern, replacement in _CURRENCY_RULES:
        out = pattern.sub(replacement, out)
    return out
