"""Tests for did-you-mean suggestions."""

from __future__ import annotations

from picolsp.lsp.diagnostics.matching import format_suggestion_message, get_suggestions
from picolsp.picocom.options import MAPPING_NAMES, option_labels


class TestGetSuggestions:
    def test_prefix_match_comes_first(self) -> None:
        assert get_suggestions("--ba", option_labels())[0] == "--baud"

    def test_close_match(self) -> None:
        assert "--parity" in get_suggestions("--parety", option_labels())

    def test_word_itself_is_not_suggested(self) -> None:
        assert "crlf" not in get_suggestions("crlf", MAPPING_NAMES)

    def test_limit(self) -> None:
        assert get_suggestions("c", ["ca", "cb", "cc", "cd"], limit=2) == ["ca", "cb"]

    def test_empty_inputs(self) -> None:
        assert get_suggestions("", MAPPING_NAMES) == []
        assert get_suggestions("crlf", []) == []

    def test_nothing_close(self) -> None:
        assert get_suggestions("zzzzzz", MAPPING_NAMES) == []


class TestFormatSuggestionMessage:
    def test_without_suggestions(self) -> None:
        assert format_suggestion_message("Unknown mapping 'x'", []) == (
            "Unknown mapping 'x'."
        )

    def test_with_suggestions(self) -> None:
        assert format_suggestion_message("Bad", ["a", "b"]) == (
            "Bad. Did you mean 'a', 'b'?"
        )
