"""Document-level shell parsing for picocom completion.

Handles line continuations, splitting a script into individual commands and
locating picocom invocations. Word splitting itself lives in
``picolsp.lsp.lexer``.
"""

from __future__ import annotations

from pathlib import PurePosixPath

from picolsp.lsp.lexer import (
    CLOSERS,
    ESCAPE,
    NESTED_QUOTES,
    QUOTE_STATES,
    expansion_state_at,
    split_line_spans,
)
from picolsp.lsp.quoting import dequote
from picolsp.lsp.types import LexerState, ParsedCommand, TokenSpan

PROGRAM_NAME = "picocom"

# Words allowed in front of the program name
_COMMAND_PREFIXES = frozenset({"sudo", "exec"})


def merge_line_continuations(text: str) -> tuple[str, list[int]]:
    """
    Drop backslash-newline pairs so a continued command reads as one line.

    Returns:
        ``(merged_text, offset_map)`` where ``offset_map[i]`` is the original
        offset of merged character ``i``. The map has one extra trailing
        entry for the end-of-text boundary.
    """
    merged: list[str] = []
    offset_map: list[int] = []
    i = 0
    n = len(text)

    while i < n:
        if text[i] == ESCAPE and text.startswith("\n", i + 1):
            i += 2
            continue
        offset_map.append(i)
        merged.append(text[i])
        i += 1

    offset_map.append(n)
    return "".join(merged), offset_map


def original_to_merged_offset(original_offset: int, offset_map: list[int]) -> int:
    """Convert an offset in the original text to the merged text."""
    for merged_idx, orig_idx in enumerate(offset_map):
        if orig_idx >= original_offset:
            return merged_idx
    return len(offset_map) - 1


def merged_to_original_offset(merged_offset: int, offset_map: list[int]) -> int:
    """
    Convert an offset in the merged text back to the original text.

    Raises:
        ValueError: If the offset lies outside the map.
    """
    if merged_offset < 0:
        raise ValueError("merged_offset must be non-negative")
    if merged_offset >= len(offset_map):
        raise ValueError("merged_offset exceeds offset_map size")
    return offset_map[merged_offset]


def _command_separator_width(text: str, i: int) -> int:
    """Width of the command separator starting at ``text[i]``, or 0."""
    char = text[i]
    if char in ";\n":
        return 1
    if char == "|":
        return 2 if text.startswith("|", i + 1) else 1
    if char == "&":
        if text.startswith("&", i + 1):
            return 2
        # "2>&1" and "&>file" are redirections
        if (i > 0 and text[i - 1] in "<>") or text.startswith(">", i + 1):
            return 0
        return 1
    return 0


def split_commands(text: str) -> list[tuple[int, int]]:
    """
    Split text into command segments at ``;``, ``&&``, ``||``, ``|``, ``&``
    and newlines that are not inside quotes or expansions.

    Returns list of ``(start, end)`` offsets, empty segments omitted.
    """
    segments: list[tuple[int, int]] = []
    stack: list[LexerState] = []
    seg_start = 0
    i = 0
    n = len(text)

    while i < n:
        char = text[i]
        state = stack[-1] if stack else None

        if state == LexerState.SINGLE_QUOTE:
            if char == "'":
                stack.pop()
            i += 1
            continue

        if char == ESCAPE:
            i += 2
            continue

        expansion = expansion_state_at(text, i)

        if state is not None:
            if char == CLOSERS[state]:
                stack.pop()
                i += 1
            elif char in NESTED_QUOTES[state]:
                stack.append(QUOTE_STATES[char])
                i += 1
            elif state != LexerState.BACKTICK and expansion is not None:
                stack.append(expansion)
                i += 2
            else:
                i += 1
            continue

        if char in QUOTE_STATES:
            stack.append(QUOTE_STATES[char])
            i += 1
            continue

        if expansion is not None:
            stack.append(expansion)
            i += 2
            continue

        width = _command_separator_width(text, i)
        if width:
            if i > seg_start:
                segments.append((seg_start, i))
            seg_start = i + width
            i += width
        else:
            i += 1

    if n > seg_start:
        segments.append((seg_start, n))

    return segments


def is_program_word(word: str) -> bool:
    """True if a raw word names picocom, with or without a directory."""
    return PurePosixPath(dequote(word)).name == PROGRAM_NAME


def program_word_index(words: list[str]) -> int | None:
    """Index of the picocom word in a command's words, or None."""
    index = 0
    while index < len(words) and dequote(words[index]) in _COMMAND_PREFIXES:
        index += 1
    if index < len(words) and is_program_word(words[index]):
        return index
    return None


def find_picocom_commands(text: str) -> list[ParsedCommand]:
    """
    Find all picocom invocations in the (already merged) text.

    Each command's tokens start at the program word; token offsets are
    relative to ``text``.
    """
    commands: list[ParsedCommand] = []

    for seg_start, seg_end in split_commands(text):
        spans = [
            TokenSpan(span.text, span.start + seg_start, span.end + seg_start)
            for span in split_line_spans(text[seg_start:seg_end])
        ]
        if spans and not spans[-1].text:
            spans.pop()

        index = program_word_index([span.text for span in spans])
        if index is None:
            continue

        commands.append(
            ParsedCommand(
                tokens=spans[index:],
                start=spans[index].start,
                end=seg_end,
            )
        )

    return commands


def command_at_position(
    commands: list[ParsedCommand], offset: int
) -> ParsedCommand | None:
    """Return the command whose extent contains ``offset``, if any."""
    for cmd in commands:
        if cmd.start <= offset <= cmd.end:
            return cmd
    return None


def segment_at_position(text: str, offset: int) -> tuple[int, int] | None:
    """Return the command segment of ``text`` that contains ``offset``."""
    for start, end in split_commands(text):
        if start <= offset <= end:
            return start, end
    return None


def token_at_position(command: ParsedCommand, offset: int) -> int | None:
    """Index of the token in ``command`` touching ``offset``, or None."""
    for index, token in enumerate(command.tokens):
        if token.start <= offset <= token.end:
            return index
    return None
