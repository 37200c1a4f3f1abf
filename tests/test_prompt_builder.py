"""Tests for prompt rendering."""

import json

from content_analyst.nodes.prompt_builder import (
    build_analysis_prompt,
    build_digest_prompt,
    render,
    serialize_results,
)

RESULTS = [
    {"title": "Café trends", "url": "https://example.com/1", "snippet": "Short snippet."},
    {"title": "Second", "url": "https://example.com/2", "snippet": "Another snippet."},
]


def test_render_substitutes_known_slots_only():
    out = render("{{A}} and {{B}}", {"A": "x"})
    assert out == "x and {{B}}"


def test_render_does_not_rescan_inserted_values():
    out = render("{{A}}|{{B}}", {"A": "{{B}}", "B": "b"})
    assert out == "{{B}}|b"


def test_analysis_prompt_contains_title_and_context():
    prompt = build_analysis_prompt("Blockchain for B2B marketing", RESULTS)

    assert "Title: Blockchain for B2B marketing" in prompt
    assert '<h2 style="font-size: 20px; color: #425B76;">Blockchain for B2B marketing</h2>' in prompt
    assert serialize_results(RESULTS) in prompt
    assert "{{" not in prompt


def test_analysis_prompt_has_safety_and_score_contract():
    prompt = build_analysis_prompt("Idea", [])

    assert "Do not include <script>" in prompt
    assert '"javascript:"' in prompt
    assert "7. Final Assessment & Score" in prompt
    assert '<strong style="font-size: 1.2em; color: #FF7A59;">' in prompt
    assert "Web Search Results: []" in prompt


def test_analysis_prompt_is_deterministic_and_untruncated():
    long_title = "x" * 5000
    first = build_analysis_prompt(long_title, RESULTS)
    assert first == build_analysis_prompt(long_title, RESULTS)
    assert first.count(long_title) == 2


def test_title_with_slot_syntax_is_inserted_verbatim():
    prompt = build_analysis_prompt("About {{SEARCH_CONTEXT}}", RESULTS)
    assert "Title: About {{SEARCH_CONTEXT}}" in prompt


def test_serialize_results_keeps_unicode_and_order():
    data = json.loads(serialize_results(RESULTS))
    assert [r["title"] for r in data] == ["Café trends", "Second"]
    assert "Café" in serialize_results(RESULTS)


def test_digest_prompt_omits_urls():
    prompt = build_digest_prompt(RESULTS)
    assert "Short snippet." in prompt
    assert "https://example.com/1" not in prompt
    assert "single parent <ul> element" in prompt
