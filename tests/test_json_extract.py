"""Tests for tolerant JSON extraction and verdict parsing."""

import json

import pytest

from mathcheck.models.answer import Verdict
from mathcheck.parsing.json_extract import (
    extract_and_format_json,
    extract_json_candidate,
    parse_verdict,
)


class TestExtractJsonCandidate:
    """Candidate location inside model output."""

    def test_fenced_block(self):
        assert extract_json_candidate('text\n```json\n{"a": 1}\n```\nmore') == '{"a": 1}'

    def test_no_fence_uses_whole_text(self):
        assert extract_json_candidate('  {"a": 1}  ') == '{"a": 1}'

    def test_unterminated_fence_keeps_marker(self):
        assert extract_json_candidate('intro ```json\n{"a": 1}\n') == '```json\n{"a": 1}'

    def test_plain_fence_is_not_a_marker(self):
        text = '```\n{"a": 1}\n```'
        assert extract_json_candidate(text) == text.strip()


class TestExtractAndFormatJson:
    """Normalization and fallback behavior."""

    def test_fenced_round_trip(self):
        result = extract_and_format_json('```json\n{"a":1}\n```')
        assert json.loads(result) == {"a": 1}
        assert result == '{\n  "a": 1\n}'

    def test_verdict_with_commentary(self):
        raw = (
            "Here you go:\n```json\n"
            '{"is_correct": true, "issues": [], "final_answer": "4"}\n```'
        )
        result = extract_and_format_json(raw)
        assert json.loads(result) == {"is_correct": True, "issues": [], "final_answer": "4"}
        assert result.startswith("{\n  ")
        assert "Here you go" not in result

    def test_bare_json_is_normalized(self):
        result = extract_and_format_json('{"b": [1, 2], "a": "x"}')
        assert result == '{\n  "a": "x",\n  "b": [\n    1,\n    2\n  ]\n}'

    def test_non_ascii_preserved(self):
        result = extract_and_format_json('{"final_answer": "84 €"}')
        assert "84 €" in result

    def test_unterminated_fence_falls_back(self):
        raw = '```json\n{"is_correct": false, "issues": ["x"], "final_answer": "84"}'
        assert extract_and_format_json(raw) == raw

    def test_only_first_fenced_block_considered(self):
        raw = '```json\n{"a": 1}\n```\nand\n```json\n{"b": 2}\n```'
        assert json.loads(extract_and_format_json(raw)) == {"a": 1}

    def test_invalid_first_block_falls_back_even_if_second_valid(self):
        raw = '```json\nnot json\n```\n```json\n{"b": 2}\n```'
        assert extract_and_format_json(raw) == raw

    @pytest.mark.parametrize(
        "raw",
        [
            "I think it's 4, no JSON here",
            "",
            "   \n\t ",
            "```json\n```",
            "```json\n   \n```",
            '```json\n{"a": 1,}\n```',
            '{"a": NaN}',
            '{"truncated": tr',
            '{"a": 1e400}',
            '```json\n{"big": [1, -1e999]}\n```',
            "```json\n" + "[" * 100000 + "\n```",
            "[" * 100000 + "]" * 100000,
        ],
    )
    def test_fallback_returns_original_verbatim(self, raw):
        assert extract_and_format_json(raw) == raw

    def test_deterministic(self):
        raw = 'Sure!\n```json\n{"z": 1, "a": {"k": [true, null]}}\n```'
        assert extract_and_format_json(raw) == extract_and_format_json(raw)


class TestParseVerdict:
    """Typed view of verdict text."""

    def test_parses_normalized_verdict(self):
        text = extract_and_format_json(
            '```json\n{"is_correct": false, "issues": ["sign error"], "final_answer": "84"}\n```'
        )
        assert parse_verdict(text) == Verdict(
            is_correct=False, issues=["sign error"], final_answer="84"
        )

    @pytest.mark.parametrize(
        "text",
        ["AGREE, the answer is 84", '{"is_correct": true}', "[1, 2]"],
    )
    def test_non_verdict_returns_none(self, text):
        assert parse_verdict(text) is None
