"""Search Result Shaping — normalise provider payloads into frontend result items.

Invariants:
    - Pure functions: no IO
    - safe_domain never raises; unparsable URLs give "unknown"
    - Tavily results are numbered from 1 and always carry title/url/snippet
"""

from urllib.parse import urlsplit

_UNKNOWN_DOMAIN = "unknown"


def safe_domain(url: object) -> str:
    """Hostname without a leading www., or "unknown"."""
    if not isinstance(url, str) or not url:
        return _UNKNOWN_DOMAIN
    try:
        host = urlsplit(url).hostname
    except ValueError:
        return _UNKNOWN_DOMAIN
    if not host:
        return _UNKNOWN_DOMAIN
    return host[4:] if host.startswith("www.") else host


def normalise_tavily_results(data: object) -> list[dict]:
    """Tavily /search payload → [{id, title, url, snippet}]."""
    raw = data.get("results") if isinstance(data, dict) else None
    if not isinstance(raw, list):
        return []
    results = []
    for index, r in enumerate(raw):
        if not isinstance(r, dict):
            continue
        results.append({
            "id": index + 1,
            "title": r.get("title") or f"Result {index + 1}",
            "url": r.get("url") or "",
            "snippet": r.get("content") or r.get("snippet") or "",
        })
    return results


def normalise_model_results(parsed: dict) -> list[dict]:
    """Model-produced {"results": [...]} → [{title, url, snippet, domain}]."""
    results = []
    for r in parsed.get("results", []):
        if not isinstance(r, dict):
            continue
        url = r.get("url") or ""
        results.append({
            "title": r.get("title") or "",
            "url": url,
            "snippet": r.get("snippet") or "",
            "domain": safe_domain(url),
        })
    return results


def extract_web_search_results(output: object, max_results: int) -> list[dict]:
    """Collect web_search_result items from a Responses API output list."""
    results: list[dict] = []
    for item in output if isinstance(output, list) else []:
        content = _get(item, "content") or []
        for block in content if isinstance(content, list) else []:
            if _get(block, "type") != "web_search_result":
                continue
            for r in _get(block, "results") or []:
                url = _get(r, "url") or ""
                results.append({
                    "title": _get(r, "title") or "",
                    "url": url,
                    "snippet": _get(r, "snippet") or "",
                    "domain": safe_domain(url),
                    "origin": "web",
                })
    return results[:max_results]


def extract_url_citations(output: object, max_results: int) -> list[dict]:
    """Collect url_citation annotations from Responses API message blocks."""
    results: list[dict] = []
    seen: set[str] = set()
    for item in output if isinstance(output, list) else []:
        content = _get(item, "content") or []
        for block in content if isinstance(content, list) else []:
            for ann in _get(block, "annotations") or []:
                url = _get(ann, "url")
                if _get(ann, "type") != "url_citation" or not url or url in seen:
                    continue
                seen.add(url)
                results.append({
                    "title": _get(ann, "title") or "",
                    "url": url,
                    "snippet": "",
                    "domain": safe_domain(url),
                    "origin": "web",
                })
    return results[:max_results]


def format_results_for_prompt(results: list[dict]) -> str:
    """Numbered plain-text block of search results for prompt context."""
    lines = []
    for index, r in enumerate(results, start=1):
        lines.append(f"[{index}] {r.get('title', '')} ({r.get('url', '')})\n{r.get('snippet', '')}")
    return "\n\n".join(lines)


def _get(obj: object, key: str):
    """Read a key from a dict or an attribute from an SDK object."""
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)
