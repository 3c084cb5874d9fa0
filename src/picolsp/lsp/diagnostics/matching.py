"""Did-you-mean suggestions for unknown options and values."""

from __future__ import annotations

import difflib
from collections.abc import Sequence

# Below this similarity difflib suggestions are mostly noise
_CLOSE_MATCH_CUTOFF = 0.6


def get_suggestions(
    token_text: str, candidates: Sequence[str], *, limit: int = 3
) -> list[str]:
    """
    Suggest candidates for an unrecognised word.

    Candidates the word is a prefix of come first (in candidate order),
    followed by difflib close matches. The word itself is never suggested.
    """
    if not token_text or not candidates:
        return []

    suggestions: list[str] = [
        candidate
        for candidate in candidates
        if candidate.startswith(token_text) and candidate != token_text
    ]

    for match in difflib.get_close_matches(
        token_text, candidates, n=limit, cutoff=_CLOSE_MATCH_CUTOFF
    ):
        if match != token_text and match not in suggestions:
            suggestions.append(match)

    return suggestions[:limit]


def format_suggestion_message(base: str, suggestions: list[str]) -> str:
    """Append a "Did you mean ...?" clause when there are suggestions."""
    if not suggestions:
        return f"{base}."
    return f"{base}. Did you mean {', '.join(repr(s) for s in suggestions)}?"
