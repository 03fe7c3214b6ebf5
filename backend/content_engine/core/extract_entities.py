"""Entity Extraction — regex pass over text to find search-safe metadata.

Invariants:
    - Pure function: no IO, no async
    - Every list is de-duplicated, first appearance order preserved
    - build_search_query uses companies and geographies only (never amounts,
      never free text) and caps the query at _MAX_QUERY_TERMS terms

Design Decisions:
    - Regex + keyword list over NER models: no model download, predictable output
"""

import re
from dataclasses import dataclass, field

_MAX_QUERY_TERMS = 6

_CORPORATE_SUFFIXES = (
    "Ltd", "Limited", "Inc", "Corp", "Corporation", "LLC", "LLP", "LP",
    "plc", "PLC", "AG", "GmbH", "SA", "S.A.", "NV", "BV", "Pte",
    "Capital", "Partners", "Holdings", "Group", "Fund", "Ventures",
    "Investments", "Management", "Advisors", "Bank",
)

_COMPANY_RE = re.compile(
    r"\b((?:[A-Z][\w&'\-]*\s+){0,3}[A-Z][\w&'\-]*\s+(?:"
    + "|".join(re.escape(s) for s in _CORPORATE_SUFFIXES)
    + r"))(?![\w])"
)
_CURRENCY_RE = re.compile(
    r"(?:\b(?:USD|SGD|EUR|GBP|HKD|JPY|CNY|AUD)\s?\d[\d,.]*(?:\s?(?:million|billion|bn|m)\b)?"
    r"|(?:S\$|\$|€|£)\s?\d[\d,.]*(?:\s?(?:million|billion|bn|m)\b)?)"
)
_YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")
_PERCENT_RE = re.compile(r"\b\d+(?:\.\d+)?\s?%")

_GEOGRAPHIES = (
    "Singapore", "Hong Kong", "China", "India", "Indonesia", "Malaysia",
    "Thailand", "Vietnam", "Philippines", "Japan", "Korea", "Australia",
    "New Zealand", "United States", "USA", "US", "United Kingdom", "UK",
    "Europe", "Germany", "France", "Netherlands", "Switzerland", "Asia",
    "Southeast Asia", "Asia Pacific", "APAC", "Middle East", "Africa",
    "Latin America", "Brazil", "Canada",
)
_GEOGRAPHY_RE = re.compile(
    r"\b(" + "|".join(
        re.escape(g) for g in sorted(_GEOGRAPHIES, key=len, reverse=True)
    ) + r")\b"
)

# Capitalised words that start sentences but are never company names.
_LEADING_STOPWORDS = {"The", "A", "An", "This", "That", "Our", "Its", "Their", "In", "On"}


@dataclass
class ExtractedEntities:
    companies: list[str] = field(default_factory=list)
    amounts: list[str] = field(default_factory=list)
    years: list[str] = field(default_factory=list)
    percentages: list[str] = field(default_factory=list)
    geographies: list[str] = field(default_factory=list)


def _unique(items) -> list[str]:
    seen: dict[str, None] = {}
    for item in items:
        cleaned = " ".join(item.split()).strip(" ,.;:")
        if cleaned and cleaned not in seen:
            seen[cleaned] = None
    return list(seen)


def _strip_leading_stopword(name: str) -> str:
    first, _, rest = name.partition(" ")
    if first in _LEADING_STOPWORDS and rest:
        return rest
    return name


def extract_entities(text: str | None) -> ExtractedEntities:
    """Find companies, amounts, years, percentages and geographies in text."""
    if not text:
        return ExtractedEntities()

    companies = _unique(
        _strip_leading_stopword(m.group(1)) for m in _COMPANY_RE.finditer(text)
    )
    return ExtractedEntities(
        companies=companies,
        amounts=_unique(m.group(0) for m in _CURRENCY_RE.finditer(text)),
        years=_unique(m.group(0) for m in _YEAR_RE.finditer(text)),
        percentages=_unique(m.group(0) for m in _PERCENT_RE.finditer(text)),
        geographies=_unique(m.group(1) for m in _GEOGRAPHY_RE.finditer(text)),
    )


def build_search_query(entities: ExtractedEntities, extra_terms: list[str] | None = None) -> str:
    """Compose a metadata-only search query. Empty string when nothing usable."""
    terms = _unique([*entities.companies, *entities.geographies, *(extra_terms or [])])
    return " ".join(terms[:_MAX_QUERY_TERMS])
