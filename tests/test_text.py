"""Tests for hylog.text"""

import pytest

from hylog.text import normalize_text_entry, parse_text


class TestNormalizeTextEntry:
    @pytest.mark.parametrize(
        "line",
        [
            "2024-01-01T00:00:00Z [INFO] hello world",
            "2024-01-01T00:00:00.123Z [ERROR] hello world",
            "Mon, 01 Jan 2024 00:00:00 GMT [WRN] hello world",
            "1704067200000 [success] hello world",
            "2024-01-01T00:00:00Z INFO hello world",
            "2024-01-01T00:00:00Z [INF]hello world",
            "   2024-01-01T00:00:00Z [FATAL]   hello world   ",
        ],
    )
    def test_strips_prefix(self, line):
        assert normalize_text_entry(line) == "hello world"

    def test_error_keeps_no_leftovers(self):
        assert normalize_text_entry("2024-01-01T00:00:00Z [ERROR] boom") == "boom"

    def test_requires_level(self):
        line = "2024-01-01T00:00:00Z plain text"
        assert normalize_text_entry(line) == line

    def test_requires_leading_timestamp(self):
        line = "[INFO] 2024-01-01T00:00:00Z message"
        assert normalize_text_entry(line) == line

    def test_single_substitution(self):
        line = "2024-01-01T00:00:00Z [INFO] started at 2024-01-01T00:00:00Z [DEBUG]"
        assert normalize_text_entry(line) == "started at 2024-01-01T00:00:00Z [DEBUG]"

    def test_trims_plain_text(self):
        assert normalize_text_entry("  just text \n") == "just text"

    def test_empty(self):
        assert normalize_text_entry("") == ""

    @pytest.mark.parametrize(
        "line",
        [
            "2024-01-01T00:00:00Z [INFO] hello",
            "  padded  ",
            "[a=1]",
            "1704067200000 [LOG] body [k=v]",
            "no prefix [INFO] here",
        ],
    )
    def test_idempotent(self, line):
        once = normalize_text_entry(line)
        assert normalize_text_entry(once) == once

    def test_parse_text_alias(self):
        assert parse_text("2024-01-01T00:00:00Z [TRC] x") == "x"
