"""Completion Payloads — text and usage extraction from OpenAI responses.

Invariants:
    - Accepts SDK objects or plain dicts (tests and raw HTTP payloads)
    - chat_text / response_text always return a str (possibly empty), never None
    - usage_summary always returns the three camelCase keys (values may be None)

Response text order:
    1. output_text (SDK convenience property)
    2. First text block of the first message item in output
    3. JSON dump of the whole payload
"""

import json


def _get(obj: object, key: str):
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)


def chat_text(completion: object) -> str:
    """Content of the first choice's message, stripped."""
    choices = _get(completion, "choices") or []
    if not choices:
        return ""
    message = _get(choices[0], "message")
    content = _get(message, "content")
    return content.strip() if isinstance(content, str) else ""


def _first_output_text(output: object) -> str:
    for item in output if isinstance(output, list) else []:
        for block in _get(item, "content") or []:
            text = _get(block, "text")
            if isinstance(text, str) and text:
                return text
    return ""


def _dump(payload: object) -> str:
    if hasattr(payload, "model_dump_json"):
        return payload.model_dump_json(indent=2)
    try:
        return json.dumps(payload, indent=2, default=str)
    except (TypeError, ValueError):
        return str(payload)


def response_text(response: object) -> str:
    """Best-effort text of a Responses API result."""
    output_text = _get(response, "output_text")
    if isinstance(output_text, str) and output_text:
        return output_text
    text = _first_output_text(_get(response, "output"))
    if text:
        return text
    return _dump(response)


def usage_summary(payload: object) -> dict:
    """Token usage as {promptTokens, completionTokens, totalTokens}."""
    usage = _get(payload, "usage")
    prompt = _get(usage, "prompt_tokens")
    if prompt is None:
        prompt = _get(usage, "input_tokens")
    completion = _get(usage, "completion_tokens")
    if completion is None:
        completion = _get(usage, "output_tokens")
    return {
        "promptTokens": prompt,
        "completionTokens": completion,
        "totalTokens": _get(usage, "total_tokens"),
    }


def merge_usage(*summaries: dict) -> dict:
    """Sum usage summaries key by key; a key stays None only if all are None."""
    merged: dict = {}
    for key in ("promptTokens", "completionTokens", "totalTokens"):
        values = [s.get(key) for s in summaries if isinstance(s.get(key), int)]
        merged[key] = sum(values) if values else None
    return merged
