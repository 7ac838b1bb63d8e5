"""Unit tests for fairytale/core/extraction.py."""

import json

import pytest

from fairytale.core.errors import InvalidBookStructureError, MalformedModelResponseError
from fairytale.core.extraction import extract_book, strip_json_fence


class TestStripJsonFence:

    def test_returns_fence_interior(self):
        assert strip_json_fence('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_fence_tag_is_case_insensitive(self):
        assert strip_json_fence('```JSON\n{"a": 1}\n```') == '{"a": 1}'

    def test_ignores_surrounding_prose(self):
        raw = 'Here you go:\n```json\n{"a": 1}\n```\nEnjoy!'
        assert strip_json_fence(raw) == '{"a": 1}'

    def test_uses_first_fence(self):
        raw = '```json\n{"a": 1}\n```\n```json\n{"a": 2}\n```'
        assert strip_json_fence(raw) == '{"a": 1}'

    def test_without_fence_returns_trimmed_text(self):
        assert strip_json_fence('  \n{"a": 1}\n ') == '{"a": 1}'

    def test_untagged_fence_is_not_stripped(self):
        assert strip_json_fence('```\n{"a": 1}\n```').startswith("```")


class TestExtractBook:

    def test_parses_fenced_book(self):
        raw = '```json\n{"bookTitle":"T","scenes":[{"text":"x"}]}\n```'
        assert extract_book(raw) == {"bookTitle": "T", "scenes": [{"text": "x"}]}

    def test_parses_bare_json_identically(self):
        fenced = '```json\n{"bookTitle":"T","scenes":[{"text":"x"}]}\n```'
        bare = '{"bookTitle":"T","scenes":[{"text":"x"}]}'
        assert extract_book(bare) == extract_book(fenced)

    def test_preserves_every_key(self, valid_book, fence):
        valid_book["illustrationStyle"] = "watercolor"
        assert extract_book(fence(valid_book)) == valid_book

    def test_does_not_enforce_scene_count(self, valid_book):
        valid_book["scenes"] = [{"text": str(i)} for i in range(30)]
        assert len(extract_book(json.dumps(valid_book))["scenes"]) == 30

    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            "",
            "```json\n{broken\n```",
            "{'bookTitle': 'T'}",
            '```json\n{"bookTitle":"T","scenes":[{"text":"x"}],"rating":NaN}\n```',
            '{"bookTitle":"T","scenes":[{"text":"x"}],"rating":Infinity}',
            '{"bookTitle":"T","scenes":[{"text":"x"}],"rating":-Infinity}',
            '{"bookTitle":"T","scenes":[{"text":"x"}],"rating":1e999}',
        ],
    )
    def test_malformed_json(self, raw):
        with pytest.raises(MalformedModelResponseError) as exc_info:
            extract_book(raw)
        assert exc_info.value.status_code == 502
        assert exc_info.value.to_body() == {
            "error": "Failed to parse AI response",
            "details": "Invalid JSON format",
        }

    @pytest.mark.parametrize(
        "raw",
        [
            '{"scenes":[]}',
            '{"bookTitle":"T","scenes":[]}',
            '{"scenes":[{"text":"x"}]}',
            '{"bookTitle":"","scenes":[{"text":"x"}]}',
            '{"bookTitle":"T"}',
            '{"bookTitle":"T","scenes":{"text":"x"}}',
            '{"bookTitle":7,"scenes":[{"text":"x"}]}',
            '[{"bookTitle":"T","scenes":[{"text":"x"}]}]',
            '"just a string"',
            "null",
        ],
    )
    def test_invalid_shape(self, raw):
        with pytest.raises(InvalidBookStructureError) as exc_info:
            extract_book(raw)
        assert exc_info.value.status_code == 502
        assert exc_info.value.to_body() == {"error": "Invalid book structure"}
