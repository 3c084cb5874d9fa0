"""Type definitions shared by the lexer, completion and server layers."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from picolsp.picocom.options import OptionSpec


class _StrEnum(str, Enum):
    """String-valued enum that behaves like str at runtime."""

    def __str__(self) -> str:
        return str(self.value)


class LexerState(_StrEnum):
    """State of the command-line lexer at one character position."""

    DELIMITER = "delimiter"
    WORD = "word"
    SINGLE_QUOTE = "single-quote"
    DOUBLE_QUOTE = "double-quote"
    BACKTICK = "backtick"
    PAREN_EXPANSION = "paren-expansion"
    BRACE_EXPANSION = "brace-expansion"


class CompletionMode(_StrEnum):
    """What kind of word is expected at the cursor."""

    OPTION = "option"
    VALUE = "value"
    DEVICE = "device"
    NONE = "none"


class CompletionKind(_StrEnum):
    """Kind categorizes completion items."""

    OPTION = "option"
    VALUE = "value"
    MAPPING = "mapping"
    DEVICE = "device"


class TokenSpan(NamedTuple):
    """A raw (still quoted) word with its position in the scanned text."""

    text: str
    start: int  # Start offset in the scanned text
    end: int  # End offset in the scanned text (exclusive)


class ParsedCommand(NamedTuple):
    """A picocom invocation found in a document."""

    tokens: list[TokenSpan]  # Words from the program name onwards
    start: int  # Start offset in the merged text
    end: int  # End offset in the merged text (exclusive)


class CompletionContext(NamedTuple):
    """Context for completion at a specific position."""

    mode: CompletionMode
    words: list[str]  # Raw words up to the cursor; last one is the current word
    option: OptionSpec | None  # Option whose value is being completed
    prefix: str  # Raw text before the cursor that a candidate replaces
    value_prefix: str  # Dequoted prefix used to match candidates
    list_head: str = ""  # Raw text kept in front of prefix (comma lists)

    @property
    def current(self) -> str:
        return self.words[-1] if self.words else ""

    @property
    def previous(self) -> str:
        return self.words[-2] if len(self.words) > 1 else ""
