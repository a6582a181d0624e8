"""Tests for LLM response cleanup and personal-data detection."""

import json

import pytest

from resume_builder.utils.sanitizer import contains_personal_data, extract_json_text


class TestExtractJsonText:
    def test_plain_json_unchanged(self):
        assert extract_json_text('{"name": "test"}') == '{"name": "test"}'

    def test_fenced_with_language_tag(self):
        text = '```json\n{"summary": "x", "skills": []}\n```'
        assert extract_json_text(text) == '{"summary": "x", "skills": []}'

    def test_fenced_without_tag_multiline(self):
        text = '```\n{\n  "key": "value"\n}\n```'
        result = extract_json_text(text)
        assert json.loads(result) == {"key": "value"}

    def test_fenced_single_line(self):
        assert extract_json_text('```{"a": 1}```') == '{"a": 1}'

    def test_leading_prose_removed(self):
        text = 'Here is the resume:\n{"summary": "ok"}'
        assert extract_json_text(text) == '{"summary": "ok"}'

    def test_prose_then_fenced_block(self):
        text = 'Sure!\n```json\n{"a": [1, 2]}\n```'
        assert json.loads(extract_json_text(text)) == {"a": [1, 2]}

    def test_array_before_object_wins(self):
        assert extract_json_text('note [1, {"a": 2}]') == '[1, {"a": 2}]'

    @pytest.mark.parametrize("text", ["", "   ", "\n\t", None])
    def test_blank_returns_empty(self, text):
        assert extract_json_text(text) == ""

    def test_no_json_returns_trimmed_text(self):
        assert extract_json_text("  no json here  ") == "no json here"


class TestContainsPersonalData:
    @pytest.mark.parametrize(
        "text",
        [
            "Contact me at jane.doe@example.com for details.",
            "Call +1 (555) 123-4567 anytime.",
            "Portfolio at https://janedoe.dev",
            "See www.janedoe.dev for more.",
            "Reach out on http://example.org/profile",
        ],
    )
    def test_detects_contact_details(self, text):
        assert contains_personal_data(text) is True

    @pytest.mark.parametrize(
        "text",
        [
            "Reduced latency by 40% across 12 services.",
            "7+ years of experience in backend engineering.",
            "Improved uptime to 99.9% for core APIs.",
            "Worked with C# and C++ on desktop tooling.",
        ],
    )
    def test_ignores_regular_text(self, text):
        assert contains_personal_data(text) is False

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_blank_is_clean(self, text):
        assert contains_personal_data(text) is False
