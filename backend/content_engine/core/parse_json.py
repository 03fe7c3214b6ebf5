"""Model Output JSON Salvage — extract a JSON object from LLM text.

Invariants:
    - Pure function: no IO
    - Always returns a dict or raises ValueError (never returns partial text)

Fallback levels:
    1. Direct json.loads
    2. Strip ```json ... ``` fences and retry
    3. First {...} block in the text
"""

import json
import re

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)
_BRACE_BLOCK_RE = re.compile(r"\{[\s\S]*\}")


def _loads_object(text: str) -> dict | None:
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None


def extract_json_object(text: str | None) -> dict:
    """Parse the first JSON object found in text."""
    if not isinstance(text, str) or not text.strip():
        raise ValueError("Model output is empty")

    stripped = text.strip()
    parsed = _loads_object(stripped)
    if parsed is not None:
        return parsed

    unfenced = _FENCE_RE.sub("", stripped).strip()
    parsed = _loads_object(unfenced)
    if parsed is not None:
        return parsed

    match = _BRACE_BLOCK_RE.search(unfenced)
    if match:
        parsed = _loads_object(match.group(0))
        if parsed is not None:
            return parsed

    raise ValueError("Could not locate a valid JSON object in the model response")
