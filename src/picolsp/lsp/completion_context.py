"""Completion context determination for picocom command lines.

Turns the words in front of the cursor into a CompletionContext that says
whether an option, an option value or the device argument is expected.
"""

from __future__ import annotations

from picolsp.lsp.lexer import DEFAULT_SEPARATORS, split_line
from picolsp.lsp.parser import (
    merge_line_continuations,
    original_to_merged_offset,
    program_word_index,
    segment_at_position,
)
from picolsp.lsp.quoting import dequote
from picolsp.lsp.types import CompletionContext, CompletionMode
from picolsp.picocom.options import (
    OptionSpec,
    ValueKind,
    cluster_value_option,
    find_option,
)

_NO_CONTEXT = CompletionContext(
    mode=CompletionMode.NONE,
    words=[],
    option=None,
    prefix="",
    value_prefix="",
)


def get_completion_context(text: str, offset: int) -> CompletionContext:
    """
    Get completion context at the given position of a document.

    Args:
        text: The full document text.
        offset: Cursor position (0-based offset in original text).

    Returns:
        CompletionContext for the command under the cursor.
    """
    merged_text, offset_map = merge_line_continuations(text)
    merged_offset = original_to_merged_offset(offset, offset_map)

    segment = segment_at_position(merged_text, merged_offset)
    if segment is None:
        return _NO_CONTEXT

    seg_start, seg_end = segment
    words = split_line(merged_text[seg_start:seg_end], merged_offset - seg_start)
    return context_from_words(words)


def context_from_words(words: list[str]) -> CompletionContext:
    """
    Decide what is being completed from the words before the cursor.

    Args:
        words: Output of ``split_line``; the last word is the current one.

    Returns:
        CompletionContext. Mode is NONE unless the words form a picocom
        command and the cursor is past the program name.
    """
    program_index = program_word_index(words)
    if program_index is None or len(words) - 1 <= program_index:
        return _NO_CONTEXT._replace(words=words)

    args = words[program_index + 1 :]
    current = args[-1]
    previous = args[-2] if len(args) > 1 else ""
    before_previous = args[-3] if len(args) > 2 else ""

    # "--baud=" with the cursor right after the separator
    if _is_separator_run(current) and current.endswith("="):
        option = _long_value_option(previous)
        if option is not None:
            return _value_context(words, option, "")

    # "--baud=96"
    if previous == "=":
        option = _long_value_option(before_previous)
        if option is not None:
            return _value_context(words, option, current)

    previous_text = dequote(previous)
    option = find_option(previous_text) or cluster_value_option(previous_text)
    if option is not None and option.takes_value:
        return _value_context(words, option, current)

    if current.startswith("-"):
        return CompletionContext(
            mode=CompletionMode.OPTION,
            words=words,
            option=None,
            prefix=current,
            value_prefix=dequote(current),
        )

    return CompletionContext(
        mode=CompletionMode.DEVICE,
        words=words,
        option=None,
        prefix=current,
        value_prefix=dequote(current),
    )


def _is_separator_run(word: str) -> bool:
    return bool(word) and all(char in DEFAULT_SEPARATORS for char in word)
    for j in range(1, len(text)):
        option = find_option("-" + text[j])
        if option is not None and option.takes_value:
            # Letters after it are its attached value
            return option if j == len(text) - 1 else None
    return None


def _long_value_option(word: str) -> OptionSpec | None:
    option = find_option(word)
    if option is None or not option.takes_value or word != option.long:
        return None
    return option


def _value_context(
    words: list[str], option: OptionSpec, current: str
) -> CompletionContext:
    """Build a VALUE context; mapping lists only replace the last entry."""
    list_head = ""
    prefix = current
    if option.kind == ValueKind.MAPPING and "," in current:
        cut = current.rindex(",") + 1
        list_head, prefix = current[:cut], current[cut:]

    return CompletionContext(
        mode=CompletionMode.VALUE,
        words=words,
        option=option,
        prefix=prefix,
        value_prefix=dequote(prefix),
        list_head=list_head,
    )
