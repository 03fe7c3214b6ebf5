"""Statement Analysis — StatementAnalyser never raises, always returns the analysis shape.

Tests:
    - Blank drafts short-circuit without a model call
    - Fenced / prose-wrapped JSON salvaged and normalised
    - Upstream failure → ok=False with error message
    - Unparsable output → empty analysis with ok=True
"""

import pytest

from content_engine.core.errors import OpenAIAPIError
from content_engine.services.handle_analysis import DEFAULT_ANALYSIS_MODEL, StatementAnalyser
from tests.services.mock_openai import MockOpenAIClient, completion

ANALYSIS_JSON = """```json
{
  "summary": {"totalStatements": 2, "byCategory": {"factual": 1, "speculative": 1}},
  "statements": [
    {"id": "s1", "text": "Revenue grew 20% in 2023.", "reliability": 0.9,
     "category": "factual", "implication": "Well supported."},
    {"text": "The platform will dominate Asia.", "reliability": "30%",
     "category": "Speculative", "implication": "Add caveats."}
  ]
}
```"""


@pytest.mark.asyncio
@pytest.mark.parametrize("draft", ["", "   ", None])
async def test_blank_draft_returns_empty_analysis(draft):
    client = MockOpenAIClient()
    result = await StatementAnalyser(client).analyse(draft)
    assert result["ok"] is True
    assert result["statements"] == []
    assert result["summary"]["totalStatements"] == 0
    assert client.chat_calls == []


@pytest.mark.asyncio
async def test_analysis_parsed_and_normalised():
    client = MockOpenAIClient([completion(ANALYSIS_JSON, model="gpt-4o-mini-2024-07-18")])
    result = await StatementAnalyser(client).analyse("Revenue grew 20% in 2023.")

    assert result["ok"] is True
    assert result["summary"] == {
        "totalStatements": 2,
        "byCategory": {"factual": 1, "subjective": 0, "speculative": 1, "uncertain": 0},
    }
    second = result["statements"][1]
    assert second["id"] == "s2"
    assert second["category"] == "speculative"
    assert second["reliability"] == pytest.approx(0.3)
    assert result["model"] == "gpt-4o-mini-2024-07-18"
    assert result["usage"] == {"promptTokens": 100, "completionTokens": 50, "totalTokens": 150}


@pytest.mark.asyncio
async def test_call_parameters():
    client = MockOpenAIClient([completion("{}")])
    await StatementAnalyser(client).analyse("Some draft.", model_id="gpt-4.1", max_statements=5)

    call = client.chat_calls[0]
    assert call["model"] == "gpt-4.1"
    assert call["temperature"] == 0
    assert call["max_completion_tokens"] == 1400
    assert "up to 5 of the most important" in call["messages"][1]["content"]


@pytest.mark.asyncio
async def test_default_model_and_statement_limit():
    client = MockOpenAIClient([completion("{}")])
    await StatementAnalyser(client).analyse("Some draft.")
    assert client.chat_calls[0]["model"] == DEFAULT_ANALYSIS_MODEL
    assert "up to 40 of the most important" in client.chat_calls[0]["messages"][1]["content"]


@pytest.mark.asyncio
async def test_upstream_failure_reported_in_body():
    client = MockOpenAIClient([OpenAIAPIError("boom", "connection_error")])
    result = await StatementAnalyser(client).analyse("Some draft.")
    assert result["ok"] is False
    assert result["error"] == "Failed to analyse statements"
    assert result["statements"] == []


@pytest.mark.asyncio
async def test_unparsable_output_gives_empty_analysis():
    client = MockOpenAIClient([completion("I could not analyse this text.")])
    result = await StatementAnalyser(client).analyse("Some draft.")
    assert result["ok"] is True
    assert result["statements"] == []
    assert result["model"] == "gpt-4o-mini"
