"""Tests for the bounded-depth structural JSON validator."""

from pathlib import Path

import pytest

from preflight.analysis.json_analyzer import analyze_json, analyze_json_chunks
from preflight.config import Settings


def _check(text: str, max_depth: int = 64):
    return analyze_json_chunks([text], max_depth)


class TestValidDocuments:
    def test_object_keys_sorted(self) -> None:
        result = _check('{"b": 1, "a": [1, 2], "c": {"d": null}}')
        assert result.is_valid is True
        assert result.top_level_keys == ["a", "b", "c"]
        assert result.max_depth == 2
        assert result.is_array is False
        assert result.error is None

    def test_nested_keys_not_collected(self) -> None:
        result = _check('{"outer": {"inner": {"deeper": 1}}}')
        assert result.top_level_keys == ["outer"]
        assert result.max_depth == 3

    def test_duplicate_keys_reported_once(self) -> None:
        assert _check('{"a": 1, "a": 2}').top_level_keys == ["a"]

    def test_array_root(self) -> None:
        result = _check('[{"x": 1}, {"y": 2}]')
        assert result.is_valid is True
        assert result.is_array is True
        assert result.top_level_keys == []
        assert result.max_depth == 2

    @pytest.mark.parametrize("text", ["42", '"hello"', "true", "null", "-0.5e+3"])
    def test_scalar_root(self, text: str) -> None:
        result = _check(text)
        assert result.is_valid is True
        assert result.max_depth == 0

    def test_escapes_in_keys_decoded(self) -> None:
        result = _check('{"a\\"b": 1, "c\\u0041": 2, "tab\\t": 3}')
        assert result.top_level_keys == ['a"b', "cA", "tab\t"]

    def test_empty_containers(self) -> None:
        assert _check("{}").is_valid is True
        assert _check("[]").max_depth == 1

    def test_surrounding_whitespace(self) -> None:
        assert _check('\n  {"a": 1}\n\n').is_valid is True


class TestDepthLimit:
    def test_depth_at_limit_is_valid(self) -> None:
        result = _check("[[[]]]", max_depth=3)
        assert result.is_valid is True
        assert result.max_depth == 3

    def test_depth_beyond_limit_is_invalid(self) -> None:
        result = _check("[[[]]]", max_depth=2)
        assert result.is_valid is False
        assert result.error is not None
        assert "maximum nesting depth 2" in result.error
        assert result.max_depth == 2

    def test_deep_document_does_not_recurse_past_limit(self) -> None:
        text = "[" * 5000 + "]" * 5000
        result = _check(text, max_depth=64)
        assert result.is_valid is False
        assert result.max_depth == 64


class TestInvalidDocuments:
    @pytest.mark.parametrize(
        ("text", "message"),
        [
            ("", "empty document"),
            ("   \n", "empty document"),
            ("{} {}", "unexpected trailing data"),
            ("01", "unexpected trailing data"),
            ('{"a": tru}', "invalid literal"),
            ("[1,]", "unexpected character"),
            ('{"a" 1}', "expected ':'"),
            ('{"a": 1 "b": 2}', "expected ',' or '}'"),
            ("[1 2]", "expected ',' or ']'"),
            ("{1: 2}", "expected object key"),
            ('"open', "unterminated string"),
            ('"bad \\x escape"', "invalid escape sequence"),
            ('"\\u12g4"', "invalid unicode escape"),
            ('"tab\there"', "control character in string"),
            ("-", "invalid number"),
            ("1.", "invalid number fraction"),
            ("1e", "invalid number exponent"),
            ("[1, ", "unexpected end of input"),
            ("[1, 2", "expected ',' or ']'"),
            ("{'a': 1}", "expected object key"),
        ],
    )
    def test_error_messages(self, text: str, message: str) -> None:
        result = _check(text)
        assert result.is_valid is False
        assert result.error is not None
        assert message in result.error

    def test_error_carries_offset(self) -> None:
        assert _check("[1, x]").error == "unexpected character 'x' at offset 4"

    def test_keys_seen_before_error_are_kept(self) -> None:
        result = _check('{"a": 1, "b": }')
        assert result.is_valid is False
        assert result.top_level_keys == ["a", "b"]


class TestChunkedInput:
    TEXT = '{"name": "caf\\u00e9", "values": [1, 2.5, -3e2], "ok": true}'

    def test_char_by_char_matches_single_chunk(self) -> None:
        assert analyze_json_chunks(list(self.TEXT), 64) == _check(self.TEXT)

    def test_file_with_small_chunks(
        self, tmp_path: Path, small_chunk_settings: Settings
    ) -> None:
        path = tmp_path / "meta.json"
        path.write_text(self.TEXT, encoding="utf-8")
        result = analyze_json(path, small_chunk_settings)
        assert result.is_valid is True
        assert result.top_level_keys == ["name", "ok", "values"]

    def test_invalid_utf8_raises(self, tmp_path: Path, settings: Settings) -> None:
        path = tmp_path / "bad.json"
        path.write_bytes(b'{"a": "\xff"}')
        with pytest.raises(UnicodeDecodeError):
            analyze_json(path, settings)
