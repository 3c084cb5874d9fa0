"""Completion logic for picocom command lines.

Routes completion requests based on CompletionContext mode and generates
completion items from the picocom option tables and the device provider.
"""

from __future__ import annotations

from typing import Callable, NamedTuple

from picolsp.lsp.filters import filter_used_values
from picolsp.lsp.parser import program_word_index
from picolsp.lsp.types import CompletionContext, CompletionKind, CompletionMode
from picolsp.picocom.options import (
    OPTIONS,
    OptionSpec,
    ValueKind,
    describe_value,
    find_option,
    format_option_usage,
)


class CompletionItem(NamedTuple):
    """A completion suggestion."""

    label: str  # Display text
    detail: str  # Additional info (e.g., description)
    kind: CompletionKind
    insert_text: str | None = None  # Whole-word replacement, if different from label


class CompletionResult(NamedTuple):
    """Completion items plus presentation hints for the host."""

    items: list[CompletionItem]
    no_space: bool = False  # Host must not append a space after inserting
    keep_order: bool = False  # Host must not re-sort the items


EMPTY_RESULT = CompletionResult(items=[])


def get_completions(
    ctx: CompletionContext,
    *,
    get_devices: Callable[[], list[str]] | None = None,
) -> CompletionResult:
    """
    Get completion items based on the completion context.

    Routes to appropriate handler based on mode:
    - "option": Complete option spellings not used yet
    - "value": Complete the value of the option before the cursor
    - "device": Complete serial device paths
    - "none": Return no items

    Args:
        ctx: The completion context.
        get_devices: Provider of serial device paths.

    Returns:
        CompletionResult with items matching the prefix.
    """
    if ctx.mode == CompletionMode.OPTION:
        return _complete_options(ctx.value_prefix, _get_used_options(ctx))
    if ctx.mode == CompletionMode.VALUE and ctx.option is not None:
        return _complete_value(ctx, ctx.option)
    if ctx.mode == CompletionMode.DEVICE and get_devices is not None:
        return _complete_devices(ctx.value_prefix, get_devices())
    return EMPTY_RESULT


def _get_used_options(ctx: CompletionContext) -> set[str]:
    """Long names of options already given before the current word."""
    used: set[str] = set()
    program_index = program_word_index(ctx.words)
    if program_index is None:
        return used

    for word in ctx.words[program_index + 1 : -1]:
        option = find_option(word)
        if option is not None:
            used.add(option.long)
    return used


def _complete_options(prefix: str, used: set[str]) -> CompletionResult:
    """
    Complete option spellings.

    A bare "-" or empty prefix offers long forms, then short forms, in the
    order picocom documents them. Options already present are skipped.
    """
    long_items: list[CompletionItem] = []
    short_items: list[CompletionItem] = []

    for option in OPTIONS:
        if option.long in used:
            continue
        detail = _option_detail(option)
        if option.long.startswith(prefix):
            long_items.append(
                CompletionItem(
                    label=option.long, detail=detail, kind=CompletionKind.OPTION
                )
            )
        if option.short is not None and option.short.startswith(prefix):
            short_items.append(
                CompletionItem(
                    label=option.short, detail=detail, kind=CompletionKind.OPTION
                )
            )

    return CompletionResult(items=long_items + short_items, keep_order=True)


def _option_detail(option: OptionSpec) -> str:
    return f"{format_option_usage(option)}: {option.help}"


def _complete_value(ctx: CompletionContext, option: OptionSpec) -> CompletionResult:
    """Complete the value of a CHOICE or MAPPING option."""
    if option.kind == ValueKind.CHOICE:
        items = [
            CompletionItem(
                label=choice,
                detail=describe_value(option, choice) or option.metavar,
                kind=CompletionKind.VALUE,
            )
            for choice in option.choices
            if choice.startswith(ctx.value_prefix)
        ]
        return CompletionResult(items=items, keep_order=True)

    if option.kind == ValueKind.MAPPING:
        # Values already in the list are not offered again
        remaining = filter_used_values(ctx.list_head + ctx.prefix, option.choices)
        items = [
            CompletionItem(
                label=name,
                detail=describe_value(option, name),
                kind=CompletionKind.MAPPING,
                insert_text=ctx.list_head + name if ctx.list_head else None,
            )
            for name in remaining
            if name.startswith(ctx.value_prefix)
        ]
        return CompletionResult(items=items, no_space=True, keep_order=True)

    # FREE values (file names, commands, numbers) are left to the host
    return EMPTY_RESULT


def _complete_devices(prefix: str, devices: list[str]) -> CompletionResult:
    items = [
        CompletionItem(label=device, detail="Serial device", kind=CompletionKind.DEVICE)
        for device in devices
        if device.startswith(prefix)
    ]
    return CompletionResult(items=items)
