"""Application Surface — health probe, CORS, configuration errors, source import.

Invariants:
    - /api/health answers without any upstream configured
    - CORS headers on cross-origin responses; OPTIONS preflight answered with 200
    - Missing OPENAI_API_KEY → 500 CONFIGURATION_ERROR for LLM endpoints
    - Unhandled errors → 500 INTERNAL_ERROR that still carries CORS headers
"""

import pytest
from httpx import ASGITransport, AsyncClient

from content_engine import __version__
from content_engine.api.dependencies import get_openai_client, get_tavily_client, get_url_fetcher
from content_engine.api.error_handlers import cors_headers
from content_engine.config import Settings, get_settings
from content_engine.main import app


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "service": "content-engine-api", "version": __version__}


@pytest.mark.asyncio
async def test_cors_headers_on_cross_origin_request(client):
    resp = await client.get("/api/health", headers={"Origin": "https://drafts.example.com"})
    assert resp.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
async def test_cors_preflight(client):
    resp = await client.options("/api/generate", headers={
        "Origin": "https://drafts.example.com",
        "Access-Control-Request-Method": "POST",
        "Access-Control-Request-Headers": "content-type",
    })
    assert resp.status_code == 200
    assert "POST" in resp.headers["access-control-allow-methods"]
    assert resp.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
async def test_cors_headers_on_error_response(client):
    resp = await client.post(
        "/api/rewrite", json={}, headers={"Origin": "https://drafts.example.com"},
    )
    assert resp.status_code == 400
    assert resp.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
async def test_missing_openai_key_is_configuration_error(client, mock_openai):
    app.dependency_overrides.pop(get_openai_client)
    app.dependency_overrides[get_settings] = lambda: Settings(openai_api_key=None, tavily_api_key=None)

    resp = await client.post("/api/generate", json={"title": "x"})

    assert resp.status_code == 500
    error = resp.json()["error"]
    assert error["code"] == "CONFIGURATION_ERROR"
    assert error["message"] == "Missing OPENAI_API_KEY environment variable"
    assert mock_openai.chat_calls == []


@pytest.fixture
async def lenient_client(client):
    """Client that returns 500 responses instead of re-raising server errors."""
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c


def _broken_dependency():
    raise RuntimeError("secret wiring detail")


@pytest.mark.asyncio
async def test_unhandled_error_is_500_with_cors_headers(lenient_client):
    app.dependency_overrides[get_url_fetcher] = _broken_dependency

    resp = await lenient_client.post(
        "/api/fetch-url",
        json={"url": "https://example.com/a"},
        headers={"Origin": "https://drafts.example.com"},
    )

    assert resp.status_code == 500
    assert resp.json()["error"]["code"] == "INTERNAL_ERROR"
    assert "secret wiring detail" not in resp.text
    assert resp.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
async def test_unhandled_web_search_error_keeps_ok_flag(lenient_client):
    app.dependency_overrides[get_tavily_client] = _broken_dependency

    resp = await lenient_client.post("/api/web-search", json={"query": "Keppel"})

    assert resp.status_code == 500
    assert resp.json()["ok"] is False
    assert resp.json()["error"]["code"] == "INTERNAL_ERROR"
    assert "access-control-allow-origin" not in resp.headers


def test_cors_headers_follow_allowed_origins():
    assert cors_headers(None, ["*"]) == {}
    assert cors_headers("https://a.example", ["*"]) == {"Access-Control-Allow-Origin": "*"}
    assert cors_headers("https://a.example", ["https://a.example"]) == {
        "Access-Control-Allow-Origin": "https://a.example", "Vary": "Origin",
    }
    assert cors_headers("https://b.example", ["https://a.example"]) == {}


def test_blank_keys_count_as_unset():
    settings = Settings(openai_api_key="  ", tavily_api_key="")
    assert settings.openai_api_key is None
    assert settings.tavily_api_key is None


# -- /api/fetch-url ------------------------------------------------------------


@pytest.mark.asyncio
async def test_fetch_url_returns_text(client, pages):
    pages.pages["https://example.com/old"] = (301, "", {"location": "https://example.com/news"})
    pages.pages["https://example.com/news"] = (
        200, "<html><style>p{}</style><body><p>Fund   closed.</p></body></html>",
    )
    resp = await client.post("/api/fetch-url", json={"url": "https://example.com/old"})
    assert resp.status_code == 200
    assert resp.json() == {"url": "https://example.com/old", "text": "Fund closed."}
    assert pages.requested == ["https://example.com/old", "https://example.com/news"]


@pytest.mark.asyncio
async def test_fetch_url_missing(client):
    resp = await client.post("/api/fetch-url", json={})
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Missing url"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("url", "message"),
    [("not a url", "Invalid URL format"), ("ftp://example.com/f", "Only http and https URLs are allowed")],
)
async def test_fetch_url_invalid(client, pages, url, message):
    resp = await client.post("/api/fetch-url", json={"url": url})
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == message
    assert pages.requested == []


@pytest.mark.asyncio
async def test_fetch_url_upstream_error(client):
    resp = await client.post("/api/fetch-url", json={"url": "https://example.com/gone"})
    assert resp.status_code == 502
    assert resp.json()["error"]["details"] == {"status": 404, "statusText": "Not Found"}
