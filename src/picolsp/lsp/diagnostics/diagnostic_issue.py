"""Diagnostic issue type for picocom command validation."""

from __future__ import annotations

from typing import NamedTuple


class DiagnosticIssue(NamedTuple):
    """A problem found in a picocom command."""

    message: str
    start: int  # Start offset in the merged text
    end: int  # End offset in the merged text (exclusive)
    code: str  # One of the constants in diagnostics.codes
