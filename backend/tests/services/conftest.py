"""Service test fixtures — scripted upstreams + FastAPI test client.

Invariants:
    - get_openai_client overridden with a MockOpenAIClient per test
    - get_tavily_client returns None unless the test enables the Tavily stub
    - get_url_fetcher uses an httpx.MockTransport serving the pages stub
    - Overrides cleared after every test

Design Decisions:
    - Tavily and URL fetching keep their real clients; only the transport is
      faked, so request payloads and status mapping are exercised end to end
"""

import json

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from content_engine.api.dependencies import (
    get_openai_client,
    get_tavily_client,
    get_url_fetcher,
)
from content_engine.infrastructure.tavily_client import TavilyClient
from content_engine.infrastructure.url_fetcher import UrlFetcher
from content_engine.main import app
from tests.services.mock_openai import MockOpenAIClient


class TavilyStub:
    """Scripted Tavily backend: records request bodies, replies with payload/status."""

    def __init__(self):
        self.enabled = False
        self.status = 200
        self.payload = {"results": []}
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(json.loads(request.content))
        return httpx.Response(self.status, json=self.payload)

    def client(self) -> TavilyClient:
        return TavilyClient(
            api_key="tvly-test-key",
            api_url="https://tavily.test/search",
            transport=httpx.MockTransport(self.handler),
        )


class PagesStub:
    """Scripted web server for source import: url → (status, html[, headers])."""

    def __init__(self):
        self.pages = {}
        self.requested = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requested.append(url)
        status, body, *extra = self.pages.get(url, (404, "not found"))
        headers = {"content-type": "text/html; charset=utf-8"}
        if extra:
            headers.update(extra[0])
        return httpx.Response(status, text=body, headers=headers)


@pytest.fixture
def mock_openai():
    return MockOpenAIClient()


@pytest.fixture
def tavily():
    return TavilyStub()


@pytest.fixture
def pages():
    return PagesStub()


@pytest.fixture
async def client(mock_openai, tavily, pages):
    """FastAPI test client with every upstream dependency overridden."""
    app.dependency_overrides[get_openai_client] = lambda: mock_openai
    app.dependency_overrides[get_tavily_client] = (
        lambda: tavily.client() if tavily.enabled else None
    )
    app.dependency_overrides[get_url_fetcher] = lambda: UrlFetcher(
        timeout_seconds=5, transport=httpx.MockTransport(pages.handler),
    )

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
