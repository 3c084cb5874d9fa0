"""Tests for comma-list candidate filtering."""

from __future__ import annotations

import pytest

from picolsp.lsp.filters import filter_used_values, split_value_list

REFERENCE = ["crlf", "crcrlf", "igncr", "lfcr", "lfcrlf"]


class TestSplitValueList:
    @pytest.mark.parametrize("token", [None, ""])
    def test_empty_input(self, token: str | None) -> None:
        assert split_value_list(token) == []

    def test_commas_and_whitespace(self) -> None:
        assert split_value_list("crlf, igncr,,lfcr") == ["crlf", "igncr", "lfcr"]

    def test_token_is_dequoted(self) -> None:
        assert split_value_list("'crlf igncr'") == ["crlf", "igncr"]

    def test_trailing_comma(self) -> None:
        assert split_value_list("crlf,") == ["crlf"]


class TestFilterUsedValues:
    @pytest.mark.parametrize("token", ["crlf,igncr", "\"crlf,igncr\""])
    def test_example_list(self, token: str) -> None:
        reference = ["crlf", "crcrlf", "igncr", "lfcr"]
        assert filter_used_values(token, reference) == ["crcrlf", "lfcr"]

    @pytest.mark.parametrize("token", [None, ""])
    def test_nothing_used(self, token: str | None) -> None:
        assert filter_used_values(token, REFERENCE) == REFERENCE

    def test_keeps_reference_order(self) -> None:
        assert filter_used_values("lfcr,crlf", REFERENCE) == ["crcrlf", "igncr", "lfcrlf"]

    def test_quoted_token(self) -> None:
        assert filter_used_values("\"crlf, crcrlf\"", REFERENCE) == ["igncr", "lfcr", "lfcrlf"]

    def test_unknown_values_are_ignored(self) -> None:
        assert filter_used_values("bogus", REFERENCE) == REFERENCE

    def test_partial_entry_only_excludes_exact_match(self) -> None:
        assert filter_used_values("crlf,lf", REFERENCE) == ["crcrlf", "igncr", "lfcr", "lfcrlf"]

    def test_result_is_subset(self) -> None:
        result = filter_used_values("igncr", REFERENCE)
        assert set(result) <= set(REFERENCE)
        assert "igncr" not in result

    def test_idempotent(self) -> None:
        token = "crlf,lfcr"
        once = filter_used_values(token, REFERENCE)
        assert filter_used_values(token, once) == once

    def test_all_used(self) -> None:
        assert filter_used_values(",".join(REFERENCE), REFERENCE) == []
