"""Statement Analysis Normalisation — coerce model JSON into a safe analysis shape.

Invariants:
    - Result always has ok, summary.totalStatements, summary.byCategory (all four
      categories) and a statements list
    - Every statement has id, text, reliability ∈ [0, 1], category, implication
    - Blank statements are dropped; unknown categories become "uncertain"
    - Non-numeric reliability becomes 0.5
    - summary counts use the model's numbers when numeric, else derived counts
"""

import copy
import math

from content_engine.core.domain_types import StatementCategory, clamp_reliability

DEFAULT_MAX_STATEMENTS = 40
_DEFAULT_RELIABILITY = 0.5

_CATEGORIES = [c.value for c in StatementCategory]

_EMPTY_ANALYSIS = {
    "ok": True,
    "summary": {
        "totalStatements": 0,
        "byCategory": {c: 0 for c in _CATEGORIES},
    },
    "statements": [],
}


def empty_analysis(ok: bool = True, error: str | None = None) -> dict:
    """Fresh copy of the empty analysis (callers may mutate it)."""
    result = copy.deepcopy(_EMPTY_ANALYSIS)
    result["ok"] = ok
    if error:
        result["error"] = error
    return result


def _is_number(value: object) -> bool:
    return (
        not isinstance(value, bool)
        and isinstance(value, (int, float))
        and math.isfinite(value)
    )


def _coerce_reliability(value: object) -> float:
    if isinstance(value, str):
        text = value.strip()
        try:
            value = float(text.rstrip("%"))
        except ValueError:
            return _DEFAULT_RELIABILITY
        if text.endswith("%"):
            value /= 100
    if not _is_number(value):
        return _DEFAULT_RELIABILITY
    return clamp_reliability(float(value))


def _coerce_category(value: object) -> str:
    if isinstance(value, str) and value.strip().lower() in _CATEGORIES:
        return value.strip().lower()
    return StatementCategory.UNCERTAIN.value


def normalise_statement(raw: object, index: int) -> dict | None:
    """Normalise one statement. None when it has no usable text."""
    if isinstance(raw, str):
        raw = {"text": raw}
    if not isinstance(raw, dict):
        return None

    text = raw.get("text") or raw.get("statement")
    if not isinstance(text, str) or not text.strip():
        return None

    statement_id = raw.get("id")
    implication = raw.get("implication")
    return {
        "id": statement_id if isinstance(statement_id, str) and statement_id.strip()
        else f"s{index + 1}",
        "text": text.strip(),
        "reliability": _coerce_reliability(raw.get("reliability")),
        "category": _coerce_category(raw.get("category")),
        "implication": implication.strip() if isinstance(implication, str) else "",
    }


def _count_by_category(statements: list[dict]) -> dict[str, int]:
    counts = {c: 0 for c in _CATEGORIES}
    for s in statements:
        counts[s["category"]] += 1
    return counts


def normalise_analysis(parsed: object, max_statements: int | None = None) -> dict:
    """Coerce a parsed model payload into the analysis response shape."""
    if not isinstance(parsed, dict):
        return empty_analysis()

    raw_statements = parsed.get("statements")
    statements: list[dict] = []
    if isinstance(raw_statements, list):
        for raw in raw_statements:
            normalised = normalise_statement(raw, len(statements))
            if normalised is not None:
                statements.append(normalised)
    if max_statements and max_statements > 0:
        statements = statements[:max_statements]

    summary = parsed.get("summary") if isinstance(parsed.get("summary"), dict) else {}
    by_category = summary.get("byCategory") if isinstance(summary.get("byCategory"), dict) else {}
    derived = _count_by_category(statements)

    total = summary.get("totalStatements")
    return {
        "ok": True,
        "summary": {
            "totalStatements": int(total) if _is_number(total) else len(statements),
            "byCategory": {
                c: int(by_category[c]) if _is_number(by_category.get(c)) else derived[c]
                for c in _CATEGORIES
            },
        },
        "statements": statements,
    }


def resolve_max_statements(value: object) -> int:
    """Positive numbers pass through (rounded); anything else → default."""
    if _is_number(value) and value > 0:
        return max(1, round(value))
    return DEFAULT_MAX_STATEMENTS
