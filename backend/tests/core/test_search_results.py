"""Search Result Shaping — Tavily and Responses API payload normalisation."""

from types import SimpleNamespace

import pytest

from content_engine.core.search_results import (
    extract_url_citations,
    extract_web_search_results,
    format_results_for_prompt,
    normalise_model_results,
    normalise_tavily_results,
    safe_domain,
)


@pytest.mark.parametrize(
    ("url", "domain"),
    [
        ("https://www.example.com/a?b=1", "example.com"),
        ("http://news.example.org", "news.example.org"),
        ("not a url", "unknown"),
        ("http://[::1", "unknown"),
        ("", "unknown"),
        (None, "unknown"),
    ],
)
def test_safe_domain(url, domain):
    assert safe_domain(url) == domain


def test_tavily_results_numbered_with_defaults():
    data = {"results": [
        {"title": "Deal closes", "url": "https://a.com", "content": "Body"},
        {"url": "https://b.com", "snippet": "Snip"},
    ]}
    assert normalise_tavily_results(data) == [
        {"id": 1, "title": "Deal closes", "url": "https://a.com", "snippet": "Body"},
        {"id": 2, "title": "Result 2", "url": "https://b.com", "snippet": "Snip"},
    ]


@pytest.mark.parametrize("data", [None, {}, {"results": "nope"}, []])
def test_tavily_results_tolerate_bad_payloads(data):
    assert normalise_tavily_results(data) == []


def test_model_results_get_domains():
    parsed = {"results": [
        {"title": "T", "url": "https://www.ft.com/x", "snippet": "S"},
        "junk",
        {"title": "No url"},
    ]}
    assert normalise_model_results(parsed) == [
        {"title": "T", "url": "https://www.ft.com/x", "snippet": "S", "domain": "ft.com"},
        {"title": "No url", "url": "", "snippet": "", "domain": "unknown"},
    ]


def test_web_search_result_blocks_extracted_and_capped():
    output = [
        SimpleNamespace(content=[
            SimpleNamespace(type="web_search_result", results=[
                SimpleNamespace(title=f"R{i}", url=f"https://r{i}.com", snippet="s")
                for i in range(5)
            ]),
            SimpleNamespace(type="output_text", text="ignored"),
        ]),
    ]
    results = extract_web_search_results(output, 3)
    assert [r["title"] for r in results] == ["R0", "R1", "R2"]
    assert results[0] == {
        "title": "R0", "url": "https://r0.com", "snippet": "s",
        "domain": "r0.com", "origin": "web",
    }


def test_url_citations_deduplicated():
    output = [{
        "content": [{
            "type": "output_text",
            "annotations": [
                {"type": "url_citation", "url": "https://a.com/x", "title": "A"},
                {"type": "url_citation", "url": "https://a.com/x", "title": "A again"},
                {"type": "file_citation", "url": "https://file"},
                {"type": "url_citation", "url": "https://www.b.com", "title": "B"},
            ],
        }],
    }]
    results = extract_url_citations(output, 4)
    assert [(r["title"], r["domain"]) for r in results] == [("A", "a.com"), ("B", "b.com")]
    assert all(r["snippet"] == "" and r["origin"] == "web" for r in results)


def test_extractors_tolerate_missing_output():
    assert extract_web_search_results(None, 4) == []
    assert extract_url_citations("text", 4) == []


def test_format_results_for_prompt():
    text = format_results_for_prompt([
        {"title": "A", "url": "https://a.com", "snippet": "alpha"},
        {"title": "B", "url": "https://b.com", "snippet": "beta"},
    ])
    assert text == "[1] A (https://a.com)\nalpha\n\n[2] B (https://b.com)\nbeta"
    assert format_results_for_prompt([]) == ""
