"""Bash completion host for picocom.

Install with::

    eval "$(picolsp --bash-install)"

which defines a ``complete -F`` function for picocom. On every <Tab> the
function runs ``picolsp --bash-complete`` with the line in ``COMP_LINE`` and
the cursor as a byte offset in ``COMP_POINT``, and reads one candidate per
line from stdout. bash replaces the whole word under the cursor with a
candidate (splitting only at ``COMP_WORDBREAKS``, which includes ``=`` but
not ``,``), so comma-list candidates carry the entries typed before them.

Candidates are printed in their final order and the function registers
``-o nosort``. An exit status of ``NO_SPACE_STATUS`` asks the function to
turn on ``compopt -o nospace`` because the user is continuing a list.
The plain ``complete -C 'picolsp --bash-complete' picocom`` form also works,
but bash then sorts the candidates and always appends a space.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import NamedTuple

from picolsp.logging import get_logger
from picolsp.lsp.completion_context import context_from_words
from picolsp.lsp.completions import get_completions
from picolsp.lsp.lexer import split_line
from picolsp.picocom.devices import DeviceProvider

_logger = get_logger("bash")

NO_SPACE_STATUS = 100

BASH_COMPLETION_SCRIPT = f"""\
_picolsp_picocom() {{
    local IFS=$'\\n' out status
    out=$(COMP_LINE="$COMP_LINE" COMP_POINT="$COMP_POINT" \\
        picolsp --bash-complete "$1" "$2" "$3" 2>/dev/null)
    status=$?
    COMPREPLY=($out)
    if [[ $status -eq {NO_SPACE_STATUS} ]]; then
        compopt -o nospace
    fi
}}
complete -o nosort -o default -F _picolsp_picocom picocom
"""


class BashReply(NamedTuple):
    """Candidates for bash plus whether bash must not append a space."""

    candidates: list[str]
    no_space: bool = False


def byte_to_char_offset(line: str, point: int) -> int:
    """Convert bash's byte-based COMP_POINT into a character offset of ``line``."""
    encoded = line.encode("utf-8")
    point = max(0, min(point, len(encoded)))
    return len(encoded[:point].decode("utf-8", errors="ignore"))


def complete_command_line(
    line: str,
    point: int | None = None,
    *,
    get_devices: DeviceProvider | None = None,
) -> BashReply:
    """
    Compute bash completion candidates for a picocom command line.

    Args:
        line: The whole command line (``COMP_LINE``).
        point: Character offset of the cursor; None means end of line.
        get_devices: Provider of serial device paths.

    Returns:
        Candidate words in presentation order; items the completer does not
        pin to an order are sorted.
    """
    words = split_line(line, point)
    ctx = context_from_words(words)
    result = get_completions(ctx, get_devices=get_devices)
    _logger.debug(
        "bash completion: mode=%s, %d candidates", ctx.mode, len(result.items)
    )
    candidates = [item.insert_text or item.label for item in result.items]
    if not result.keep_order:
        candidates.sort()
    return BashReply(candidates, no_space=result.no_space)


def complete_from_environment(
    environ: Mapping[str, str],
    *,
    get_devices: DeviceProvider | None = None,
) -> BashReply:
    """Read ``COMP_LINE``/``COMP_POINT`` and complete; no line means no candidates."""
    line = environ.get("COMP_LINE")
    if line is None:
        _logger.warning("COMP_LINE is not set; was this started by bash completion?")
        return BashReply([])

    raw_point = environ.get("COMP_POINT", "")
    point = (
        byte_to_char_offset(line, int(raw_point)) if raw_point.isdigit() else None
    )
    return complete_command_line(line, point, get_devices=get_devices)
