"""Diagnostics for picocom command lines."""

from picolsp.lsp.diagnostics.debounce import DebounceManager
from picolsp.lsp.diagnostics.diagnostic_issue import DiagnosticIssue
from picolsp.lsp.diagnostics.validator import validate_command

__all__ = [
    "DebounceManager",
    "DiagnosticIssue",
    "validate_command",
]
