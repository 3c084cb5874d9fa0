"""Candidate filtering for comma-separated multi-value arguments."""

from __future__ import annotations

import re
from collections.abc import Sequence

from picolsp.lsp.quoting import dequote

_LIST_SEPARATOR = re.compile(r"[,\s]+")


def split_value_list(token: str | None) -> list[str]:
    """Dequote a list word and split it on commas or whitespace, dropping empties."""
    if not token:
        return []
    return [value for value in _LIST_SEPARATOR.split(dequote(token)) if value]


def filter_used_values(token: str | None, reference: Sequence[str]) -> list[str]:
    """
    Remove values already listed in ``token`` from ``reference``.

    Args:
        token: Raw word holding the values chosen so far, e.g. ``"crlf,igncr"``.
            None or empty means nothing has been chosen.
        reference: Known values, assumed free of duplicates.

    Returns:
        The reference values not present in the token, in reference order.
    """
    used = set(split_value_list(token))
    return [value for value in reference if value not in used]
