"""Shell command-line lexer for cursor-driven completion.

Splits the text in front of the cursor into words the way a POSIX shell
would see them, keeping every quote, escape and expansion marker in the
word text. Quoted strings, backticks and ``$(...)`` / ``${...}`` expansions
nest to any depth; the contexts that are open are kept on an explicit stack.

Input is never rejected. An unterminated quote or expansion swallows the
rest of the scanned text into the current word, and a closing marker with
no open context is an ordinary character.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

from picolsp.lsp.types import LexerState, TokenSpan

DEFAULT_DELIMITERS = frozenset(" \t\n")
DEFAULT_SEPARATORS = frozenset("=><")

ESCAPE = "\\"

QUOTE_STATES = {
    "'": LexerState.SINGLE_QUOTE,
    '"': LexerState.DOUBLE_QUOTE,
    "`": LexerState.BACKTICK,
}

# Character following "$" that opens an expansion
_EXPANSION_STATES = {
    "(": LexerState.PAREN_EXPANSION,
    "{": LexerState.BRACE_EXPANSION,
}

CLOSERS = {
    LexerState.SINGLE_QUOTE: "'",
    LexerState.DOUBLE_QUOTE: '"',
    LexerState.BACKTICK: "`",
    LexerState.PAREN_EXPANSION: ")",
    LexerState.BRACE_EXPANSION: "}",
}

# Quote openers recognised inside each nested context
NESTED_QUOTES = {
    LexerState.DOUBLE_QUOTE: frozenset("`"),
    LexerState.BACKTICK: frozenset(),
    LexerState.PAREN_EXPANSION: frozenset(QUOTE_STATES),
    LexerState.BRACE_EXPANSION: frozenset(QUOTE_STATES),
}

_TOP_LEVEL = (LexerState.DELIMITER, LexerState.WORD)


class CharClasses(NamedTuple):
    """Configurable delimiter and separator character sets."""

    delimiters: frozenset[str] = DEFAULT_DELIMITERS
    separators: frozenset[str] = DEFAULT_SEPARATORS

    def is_delimiter(self, char: str) -> bool:
        return char in self.delimiters

    def is_separator(self, char: str) -> bool:
        return char in self.separators


def make_char_classes(
    delimiters: Iterable[str] | None = None,
    separators: Iterable[str] | None = None,
) -> CharClasses:
    """Build CharClasses, falling back to the defaults for omitted sets."""
    return CharClasses(
        delimiters=DEFAULT_DELIMITERS if delimiters is None else frozenset(delimiters),
        separators=DEFAULT_SEPARATORS if separators is None else frozenset(separators),
    )


def is_quote_opener(char: str) -> bool:
    return char in QUOTE_STATES


def expansion_state_at(text: str, i: int) -> LexerState | None:
    """Return the expansion state opened by ``$(`` or ``${`` at ``text[i]``."""
    if text[i] != "$" or i + 1 >= len(text):
        return None
    return _EXPANSION_STATES.get(text[i + 1])


def split_line_spans(
    line: str,
    cursor: int | None = None,
    *,
    delimiters: Iterable[str] | None = None,
    separators: Iterable[str] | None = None,
) -> list[TokenSpan]:
    """
    Split ``line[:cursor]`` into raw words with their offsets.

    Args:
        line: The full command line.
        cursor: Character offset of the cursor. None means end of line;
            values outside the line are clamped.
        delimiters: Characters that separate words and are discarded.
        separators: Characters that separate words and are kept; a run of
            them forms one word of its own.

    Returns:
        Non-empty list of TokenSpan. The last span is the word at the
        cursor, with empty text when the cursor follows a delimiter.
    """
    classes = make_char_classes(delimiters, separators)
    if cursor is None:
        cursor = len(line)
    text = line[: max(0, min(cursor, len(line)))]
    n = len(text)

    spans: list[TokenSpan] = []
    word: list[str] = []
    word_start = 0
    state = LexerState.DELIMITER
    stack: list[LexerState] = []
    i = 0

    while i < n:
        char = text[i]

        if state in _TOP_LEVEL:
            if classes.is_delimiter(char):
                if word:
                    spans.append(TokenSpan("".join(word), word_start, i))
                    word = []
                state = LexerState.DELIMITER
                i += 1
                continue

            if classes.is_separator(char):
                if word:
                    spans.append(TokenSpan("".join(word), word_start, i))
                    word = []
                run_end = i
                while run_end < n and classes.is_separator(text[run_end]):
                    run_end += 1
                if run_end < n:
                    spans.append(TokenSpan(text[i:run_end], i, run_end))
                    state = LexerState.DELIMITER
                else:
                    # Still being typed: the run is the current word
                    word = list(text[i:run_end])
                    word_start = i
                    state = LexerState.WORD
                i = run_end
                continue

            if not word:
                word_start = i
            state = LexerState.WORD
            expansion = expansion_state_at(text, i)

            if char == ESCAPE:
                word.append(text[i : i + 2])
                i += 2
            elif is_quote_opener(char):
                stack.append(state)
                state = QUOTE_STATES[char]
                word.append(char)
                i += 1
            elif expansion is not None:
                stack.append(state)
                state = expansion
                word.append(text[i : i + 2])
                i += 2
            else:
                word.append(char)
                i += 1
            continue

        if state == LexerState.SINGLE_QUOTE:
            word.append(char)
            if char == "'":
                state = stack.pop()
            i += 1
            continue

        # Double quote, backtick or expansion
        expansion = None
        if state != LexerState.BACKTICK:
            expansion = expansion_state_at(text, i)

        if char == ESCAPE:
            word.append(text[i : i + 2])
            i += 2
        elif char == CLOSERS[state]:
            word.append(char)
            state = stack.pop()
            i += 1
        elif char in NESTED_QUOTES[state]:
            stack.append(state)
            state = QUOTE_STATES[char]
            word.append(char)
            i += 1
        elif expansion is not None:
            stack.append(state)
            state = expansion
            word.append(text[i : i + 2])
            i += 2
        else:
            word.append(char)
            i += 1

    spans.append(TokenSpan("".join(word), word_start if word else n, n))
    return spans


def split_line(
    line: str,
    cursor: int | None = None,
    *,
    delimiters: Iterable[str] | None = None,
    separators: Iterable[str] | None = None,
) -> list[str]:
    """
    Split ``line[:cursor]`` into raw words.

    The last word is the one under the cursor (possibly incomplete or empty)
    and the one before it is the previous completed word. Quote, escape and
    expansion markers are preserved; use ``dequote`` for literal values.

    >>> split_line("picocom --imap crlf, -")
    ['picocom', '--imap', 'crlf,', '-']
    >>> split_line("picocom --baud=")
    ['picocom', '--baud', '=']
    """
    return [
        span.text
        for span in split_line_spans(
            line, cursor, delimiters=delimiters, separators=separators
        )
    ]
