"""Hover help for picocom command lines.

Shows option usage for option words and value descriptions for option
arguments, based on the picocom option tables.
"""

from __future__ import annotations

from picolsp.lsp.filters import split_value_list
from picolsp.lsp.parser import (
    command_at_position,
    find_picocom_commands,
    merge_line_continuations,
    original_to_merged_offset,
    token_at_position,
)
from picolsp.lsp.quoting import dequote
from picolsp.lsp.types import TokenSpan
from picolsp.picocom.options import (
    OptionSpec,
    ValueKind,
    cluster_value_option,
    describe_value,
    find_option,
    format_option_usage,
)


def get_hover_help(text: str, offset: int) -> str | None:
    """
    Get hover help text at the given cursor position.

    Args:
        text: The full document text.
        offset: Cursor position (0-based offset in original text).

    Returns:
        Plain text help, or None if the cursor is not on a known picocom
        option or option value.
    """
    merged_text, offset_map = merge_line_continuations(text)
    merged_offset = original_to_merged_offset(offset, offset_map)

    command = command_at_position(find_picocom_commands(merged_text), merged_offset)
    if command is None:
        return None

    index = token_at_position(command, merged_offset)
    if index is None or index == 0:
        return None

    tokens = command.tokens
    option = find_option(dequote(tokens[index].text))
    if option is not None:
        return format_option_help(option)

    owner = _owning_option(tokens, index)
    if owner is None:
        return None
    return _format_value_help(owner, tokens[index])


def format_option_help(option: OptionSpec) -> str:
    """Render usage, description and accepted values of an option."""
    lines = [format_option_usage(option), "", option.help]
    if option.kind == ValueKind.CHOICE and option.choices:
        lines.extend(["", "Values: " + ", ".join(option.choices)])
    elif option.kind == ValueKind.MAPPING:
        lines.append("")
        lines.extend(
            f"  {name:<8} {describe_value(option, name)}" for name in option.choices
        )
    return "\n".join(lines)


def _owning_option(tokens: list[TokenSpan], index: int) -> OptionSpec | None:
    """Find the value-taking option whose argument is ``tokens[index]``."""
    previous = dequote(tokens[index - 1].text)
    if previous == "=" and index >= 2:
        option = find_option(dequote(tokens[index - 2].text))
    else:
        option = find_option(previous) or cluster_value_option(previous)
    if option is None or not option.takes_value:
        return None
    return option


def _format_value_help(option: OptionSpec, token: TokenSpan) -> str | None:
    value = dequote(token.text)
    if option.kind == ValueKind.MAPPING:
        described = [
            f"{name}: {describe_value(option, name)}"
            for name in split_value_list(token.text)
            if describe_value(option, name)
        ]
        return "\n".join(described) or None

    description = describe_value(option, value)
    if not description and value in option.choices:
        description = option.help
    if not description:
        return None
    return f"{option.long} {value}: {description}"
