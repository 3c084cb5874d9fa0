"""Command-line analysis and LSP features for picocom invocations."""

from picolsp.lsp.completion_context import context_from_words, get_completion_context
from picolsp.lsp.completions import CompletionItem, CompletionResult, get_completions
from picolsp.lsp.filters import filter_used_values
from picolsp.lsp.lexer import split_line, split_line_spans
from picolsp.lsp.quoting import dequote
from picolsp.lsp.types import (
    CompletionContext,
    CompletionMode,
    LexerState,
    ParsedCommand,
    TokenSpan,
)

__all__ = [
    "CompletionContext",
    "CompletionItem",
    "CompletionMode",
    "CompletionResult",
    "LexerState",
    "ParsedCommand",
    "TokenSpan",
    "context_from_words",
    "dequote",
    "filter_used_values",
    "get_completion_context",
    "get_completions",
    "split_line",
    "split_line_spans",
]
