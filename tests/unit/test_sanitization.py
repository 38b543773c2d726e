"""Tests for SQL comment escaping."""

import time

import pytest

from query_logs.shared.utils.sanitization import escape_sql_comment


class TestEscapeSqlComment:
    def test_plain_content_unchanged(self) -> None:
        assert escape_sql_comment("application:myapp,job:Import") == "application:myapp,job:Import"

    def test_strips_opener(self) -> None:
        assert escape_sql_comment("a/*b") == "ab"

    def test_strips_closer(self) -> None:
        assert escape_sql_comment("a*/b") == "ab"

    def test_strips_whitespace_next_to_delimiters(self) -> None:
        """Whitespace after an opener and before a closer goes with it."""
        assert escape_sql_comment("x */ y") == "x y"
        assert escape_sql_comment("x/*  y") == "xy"

    def test_strips_optimizer_hint_marker(self) -> None:
        assert escape_sql_comment("/*+ INDEX(users) hint") == "INDEX(users) hint"

    @pytest.mark.parametrize(
        "content",
        ["/*/**/*/", "//**", "**//", "*/*/", "///***", "/**/"],
    )
    def test_nested_sequences_removed_entirely(self, content: str) -> None:
        assert escape_sql_comment(content) == ""

    def test_delimiter_formed_by_removal_is_stripped(self) -> None:
        """Removing the inner closer of "**//" joins "*" and "/" into a new closer."""
        result = escape_sql_comment("a**//b")
        assert result == "ab"

    @pytest.mark.parametrize(
        "content",
        [
            "'; DROP TABLE users; --*/ SELECT /*",
            "*//*/**/*/*/",
            "/*/*/*/*/",
            "* /* /",
            "/ */ *",
        ],
    )
    def test_result_never_contains_delimiters(self, content: str) -> None:
        escaped = escape_sql_comment(content)
        assert "/*" not in escaped
        assert "*/" not in escaped

    def test_non_string_is_stringified(self) -> None:
        assert escape_sql_comment(42) == "42"


class TestEscapeSqlCommentCost:
    def test_long_nested_opener_run_is_linear(self) -> None:
        """A run like //...**... collapses in one pass, not one opener per pass."""
        content = "/" * 10_000 + "*" * 10_000
        started = time.perf_counter()
        result = escape_sql_comment(content)
        elapsed = time.perf_counter() - started
        assert result == ""
        assert elapsed < 0.5

    def test_long_nested_closer_run_is_linear(self) -> None:
        content = "path:" + "*" * 10_000 + "/" * 10_000
        started = time.perf_counter()
        result = escape_sql_comment(content)
        elapsed = time.perf_counter() - started
        assert result == "path:"
        assert elapsed < 0.5
