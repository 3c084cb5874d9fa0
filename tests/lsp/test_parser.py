"""Tests for document-level shell parsing."""

from __future__ import annotations

import pytest

from picolsp.lsp.parser import (
    command_at_position,
    find_picocom_commands,
    is_program_word,
    merge_line_continuations,
    merged_to_original_offset,
    original_to_merged_offset,
    program_word_index,
    segment_at_position,
    split_commands,
    token_at_position,
)
from picolsp.lsp.types import TokenSpan


class TestMergeLineContinuations:
    def test_no_continuations(self) -> None:
        merged, offset_map = merge_line_continuations("picocom -b")
        assert merged == "picocom -b"
        assert offset_map == list(range(11))

    def test_removes_backslash_newline(self) -> None:
        merged, offset_map = merge_line_continuations("a\\\nb")
        assert merged == "ab"
        assert offset_map == [0, 3, 4]

    def test_plain_backslash_is_kept(self) -> None:
        merged, _ = merge_line_continuations("a\\ b")
        assert merged == "a\\ b"

    def test_offset_conversions(self) -> None:
        _, offset_map = merge_line_continuations("a\\\nb")
        assert original_to_merged_offset(0, offset_map) == 0
        assert original_to_merged_offset(2, offset_map) == 1
        assert original_to_merged_offset(3, offset_map) == 1
        assert original_to_merged_offset(99, offset_map) == 2
        assert merged_to_original_offset(1, offset_map) == 3
        assert merged_to_original_offset(2, offset_map) == 4

    @pytest.mark.parametrize("offset", [-1, 3])
    def test_merged_offset_out_of_range(self, offset: int) -> None:
        _, offset_map = merge_line_continuations("a\\\nb")
        with pytest.raises(ValueError):
            merged_to_original_offset(offset, offset_map)


class TestSplitCommands:
    def test_operators(self) -> None:
        assert split_commands("a; b && c | d") == [(0, 1), (2, 5), (7, 10), (11, 13)]

    def test_newlines(self) -> None:
        assert split_commands("a\nb") == [(0, 1), (2, 3)]

    def test_quoted_separator(self) -> None:
        assert split_commands("echo 'a;b'; c") == [(0, 10), (11, 13)]

    def test_separator_inside_expansion(self) -> None:
        text = 'x "$(a; b)" && y'
        assert split_commands(text) == [(0, 12), (14, 16)]

    def test_background(self) -> None:
        assert split_commands("a & b") == [(0, 2), (3, 5)]

    @pytest.mark.parametrize("text", ["picocom 2>&1", "picocom &>log", "picocom >&2"])
    def test_redirection_ampersand(self, text: str) -> None:
        assert split_commands(text) == [(0, len(text))]

    def test_escaped_separator(self) -> None:
        assert split_commands(r"a\;b") == [(0, 4)]

    def test_empty_segments_omitted(self) -> None:
        assert split_commands(";;a;") == [(2, 3)]

    def test_segment_at_position(self) -> None:
        assert segment_at_position("a; b", 3) == (2, 4)
        assert segment_at_position("a;", 2) is None


class TestProgramWord:
    @pytest.mark.parametrize(
        "word", ["picocom", "/usr/bin/picocom", "'picocom'", "./picocom"]
    )
    def test_program_spellings(self, word: str) -> None:
        assert is_program_word(word)

    @pytest.mark.parametrize("word", ["picocomx", "minicom", "", "/dev/picocom.log"])
    def test_other_words(self, word: str) -> None:
        assert not is_program_word(word)

    def test_prefixes_are_skipped(self) -> None:
        assert program_word_index(["sudo", "exec", "picocom", "-b"]) == 2

    def test_no_program(self) -> None:
        assert program_word_index([]) is None
        assert program_word_index(["sudo"]) is None
        assert program_word_index(["echo", "picocom"]) is None


class TestFindPicocomCommands:
    def test_single_command(self) -> None:
        text = "picocom -b 9600 /dev/ttyUSB0"
        commands = find_picocom_commands(text)
        assert len(commands) == 1
        assert [t.text for t in commands[0].tokens] == [
            "picocom",
            "-b",
            "9600",
            "/dev/ttyUSB0",
        ]
        assert commands[0].start == 0
        assert commands[0].end == len(text)

    def test_tokens_start_at_program(self) -> None:
        commands = find_picocom_commands("sudo picocom -q")
        assert commands[0].tokens[0] == TokenSpan("picocom", 5, 12)
        assert commands[0].start == 5

    def test_absolute_offsets(self) -> None:
        commands = find_picocom_commands("ls; picocom -l /dev/ttyS0")
        assert [t.text for t in commands[0].tokens] == ["picocom", "-l", "/dev/ttyS0"]
        assert commands[0].tokens[1] == TokenSpan("-l", 12, 14)

    def test_trailing_empty_word_is_dropped(self) -> None:
        commands = find_picocom_commands("picocom ")
        assert [t.text for t in commands[0].tokens] == ["picocom"]

    def test_other_commands_ignored(self) -> None:
        assert find_picocom_commands("echo picocom; minicom -D /dev/ttyS0") == []

    def test_several_commands(self) -> None:
        commands = find_picocom_commands("picocom -q\npicocom -b 115200 /dev/ttyS0")
        assert len(commands) == 2
        assert commands[1].start == 11


class TestPositions:
    def test_command_and_token_at_position(self) -> None:
        text = "ls; picocom -b 9600"
        commands = find_picocom_commands(text)
        assert command_at_position(commands, 1) is None

        command = command_at_position(commands, 13)
        assert command is not None
        assert token_at_position(command, 13) == 1
        assert token_at_position(command, 15) == 2
        assert token_at_position(command, len(text)) == 2

    def test_gap_between_tokens(self) -> None:
        command = find_picocom_commands("picocom  -b")[0]
        assert token_at_position(command, 8) is None
