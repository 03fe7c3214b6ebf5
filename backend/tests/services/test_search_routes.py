"""Search & Q&A Routes — /api/web-search, /api/web-test, /api/query over HTTP."""

import pytest

from content_engine.config import get_settings
from tests.services.mock_openai import response


# -- /api/web-search -----------------------------------------------------------


@pytest.mark.asyncio
async def test_web_search_success(client, tavily):
    tavily.enabled = True
    tavily.payload = {"results": [
        {"title": "Keppel closes fund", "url": "https://k.com/a", "content": "Final close"},
    ]}
    resp = await client.post("/api/web-search", json={"query": "Keppel fund", "maxResults": 2})

    assert resp.status_code == 200
    data = resp.json()
    assert data["ok"] is True
    assert data["query"] == "Keppel fund"
    assert data["results"] == [
        {"id": 1, "title": "Keppel closes fund", "url": "https://k.com/a", "snippet": "Final close"},
    ]
    assert tavily.requests[0]["max_results"] == 2
    assert tavily.requests[0]["search_depth"] == "basic"


@pytest.mark.asyncio
async def test_web_search_missing_query(client, tavily):
    tavily.enabled = True
    resp = await client.post("/api/web-search", json={"query": "   "})
    assert resp.status_code == 400
    data = resp.json()
    assert data["ok"] is False
    assert data["error"]["message"] == "Missing or invalid 'query' in request body"
    assert tavily.requests == []


@pytest.mark.asyncio
async def test_web_search_without_key(client):
    resp = await client.post("/api/web-search", json={"query": "Keppel"})
    assert resp.status_code == 500
    data = resp.json()
    assert data["ok"] is False
    assert data["error"]["code"] == "CONFIGURATION_ERROR"
    assert data["error"]["message"] == "Missing TAVILY_API_KEY environment variable"


@pytest.mark.asyncio
async def test_web_search_upstream_error(client, tavily):
    tavily.enabled = True
    tavily.status = 432
    tavily.payload = {"detail": "plan limit"}
    resp = await client.post("/api/web-search", json={"query": "Keppel"})
    assert resp.status_code == 502
    data = resp.json()
    assert data["ok"] is False
    assert data["error"]["code"] == "SEARCH_PROVIDER_ERROR"
    assert data["error"]["context"]["upstream_status"] == 432


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"query": "q", "maxResults": 50},
        {"query": "q", "maxResults": 0},
        {"query": "q", "maxResults": "many"},
        {"query": ["Keppel"]},
    ],
)
async def test_web_search_invalid_body_keeps_ok_flag(client, tavily, body):
    tavily.enabled = True
    resp = await client.post("/api/web-search", json=body)
    assert resp.status_code == 400
    data = resp.json()
    assert data["ok"] is False
    assert data["error"]["code"] == "VALIDATION_ERROR"
    assert tavily.requests == []


# -- /api/web-test -------------------------------------------------------------


@pytest.mark.asyncio
async def test_web_test_get(client, mock_openai):
    mock_openai.responses.append(response(
        output_text='{"results": [{"title": "A", "url": "https://www.a.com/x", "snippet": "s"}]}',
    ))
    resp = await client.get("/api/web-test", params={"query": "Acme exit"})
    assert resp.status_code == 200
    assert resp.json()["results"][0]["domain"] == "a.com"


@pytest.mark.asyncio
async def test_web_test_post(client, mock_openai):
    mock_openai.responses.append(response(output_text='```json\n{"results": []}\n```'))
    resp = await client.post("/api/web-test", json={"query": "Acme exit"})
    assert resp.status_code == 200
    assert resp.json() == {"results": []}


@pytest.mark.asyncio
async def test_web_test_missing_query(client, mock_openai):
    resp = await client.get("/api/web-test")
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Missing query"
    assert mock_openai.response_calls == []


@pytest.mark.asyncio
async def test_web_test_non_json_model_output(client, mock_openai):
    mock_openai.responses.append(response(output_text="Sorry, no results."))
    resp = await client.post("/api/web-test", json={"query": "Acme"})
    assert resp.status_code == 500
    error = resp.json()["error"]
    assert error["code"] == "MODEL_OUTPUT_INVALID"
    assert error["details"] == {"raw": "Sorry, no results."}


# -- /api/query ----------------------------------------------------------------


@pytest.mark.asyncio
async def test_query_answers(client, mock_openai):
    mock_openai.responses.append(response(output_text="The figure comes from Source 1."))
    resp = await client.post("/api/query", json={
        "question": "Which source supports the revenue figure?",
        "draftText": "Revenue grew 20%.",
        "sources": [{"name": "Annual report", "text": "Revenue grew 20% in FY23."}],
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["answer"] == "The figure comes from Source 1."
    assert data["questionType"] == "verification"
    assert data["webResults"] == []
    assert data["model"] == get_settings().openai_model_id
    assert "Source 1 – Annual report" in mock_openai.response_calls[0]["input"][1]["content"]


@pytest.mark.asyncio
async def test_query_public_info_uses_tavily(client, mock_openai, tavily):
    tavily.enabled = True
    tavily.payload = {"results": [{"title": "SGX filing", "url": "https://sgx.com/f", "content": "..."}]}
    mock_openai.responses.append(response(output_text="Yes, disclosed in an SGX filing."))
    resp = await client.post("/api/query", json={
        "question": "Has the Acme Holdings stake been publicly announced?",
        "draftText": "Keppel Capital bought Acme Holdings.",
        "publicSearch": True,
    })
    assert resp.status_code == 200
    assert resp.json()["webResults"][0]["title"] == "SGX filing"
    assert tavily.requests[0]["query"] == "Acme Holdings Keppel Capital"


@pytest.mark.asyncio
async def test_query_missing_fields(client):
    resp = await client.post("/api/query", json={"question": "Why?"})
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Both 'question' and 'draftText' are required"
