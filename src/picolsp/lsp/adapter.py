"""Adapter module for converting between internal types and LSP protocol types."""

from __future__ import annotations

from lsprotocol import types
from pygls.workspace import TextDocument

from picolsp.lsp.completions import CompletionItem as InternalCompletionItem
from picolsp.lsp.completions import CompletionResult
from picolsp.lsp.types import CompletionKind

__all__ = [
    "TRIGGER_SUGGEST_COMMAND",
    "completion_kind_to_lsp",
    "offset_to_position",
    "position_to_offset",
    "to_lsp_completion_item",
    "to_lsp_completion_list",
]

# Re-opens the suggestion widget after a value that continues a list
TRIGGER_SUGGEST_COMMAND = types.Command(
    title="Trigger Suggest",
    command="editor.action.triggerSuggest",
)

_COMPLETION_KIND_TO_LSP: dict[CompletionKind, types.CompletionItemKind] = {
    CompletionKind.OPTION: types.CompletionItemKind.Property,
    CompletionKind.VALUE: types.CompletionItemKind.Value,
    CompletionKind.MAPPING: types.CompletionItemKind.EnumMember,
    CompletionKind.DEVICE: types.CompletionItemKind.File,
}


def position_to_offset(document: TextDocument, position: types.Position) -> int:
    """
    Convert LSP Position (line, character) to document offset.

    Positions past the end of a line or of the document are clamped.
    """
    lines = document.lines
    offset = 0

    for i in range(min(position.line, len(lines))):
        offset += len(lines[i])

    if position.line < len(lines):
        line = lines[position.line].rstrip("\r\n")
        offset += min(position.character, len(line))

    return offset


def offset_to_position(document: TextDocument, offset: int) -> types.Position:
    """
    Convert a document offset to an LSP Position.

    Raises:
        ValueError: If offset is negative or beyond the end of the document.
    """
    if offset < 0 or offset > len(document.source):
        raise ValueError(f"offset {offset} outside document")

    remaining = offset
    lines = document.lines
    for line_number, line in enumerate(lines):
        if remaining < len(line) or (
            remaining == len(line) and not line.endswith("\n")
        ):
            return types.Position(line=line_number, character=remaining)
        remaining -= len(line)

    return types.Position(line=len(lines), character=0)


def completion_kind_to_lsp(kind: CompletionKind) -> types.CompletionItemKind:
    """Map internal CompletionKind to LSP CompletionItemKind."""
    return _COMPLETION_KIND_TO_LSP.get(kind, types.CompletionItemKind.Text)


def to_lsp_completion_item(
    item: InternalCompletionItem,
    position: types.Position | None = None,
    prefix: str = "",
    *,
    sort_index: int | None = None,
    retrigger: bool = False,
) -> types.CompletionItem:
    """
    Convert internal CompletionItem to LSP CompletionItem.

    Args:
        item: Internal completion item.
        position: LSP position where completion is requested (optional).
        prefix: Raw text before the cursor replaced by the item (optional).
        sort_index: Fixes the item's place in the list when given.
        retrigger: Ask the client to reopen completion after inserting.

    Returns:
        LSP-compatible CompletionItem.
    """
    completion_item = types.CompletionItem(
        label=item.label,
        detail=item.detail,
        kind=completion_kind_to_lsp(item.kind),
        insert_text=item.insert_text,
    )

    if sort_index is not None:
        completion_item.sort_text = f"{sort_index:04d}"

    if retrigger:
        completion_item.command = TRIGGER_SUGGEST_COMMAND

    # The range covers only the list entry being typed, so the label is the new text
    if position is not None:
        start_character = max(0, position.character - len(prefix))
        completion_item.text_edit = types.TextEdit(
            range=types.Range(
                start=types.Position(line=position.line, character=start_character),
                end=types.Position(line=position.line, character=position.character),
            ),
            new_text=item.label,
        )

    return completion_item


def to_lsp_completion_list(
    result: CompletionResult,
    position: types.Position | None = None,
    prefix: str = "",
) -> types.CompletionList:
    """Convert a CompletionResult, applying its ordering and spacing hints."""
    items = [
        to_lsp_completion_item(
            item,
            position=position,
            prefix=prefix,
            sort_index=index if result.keep_order else None,
            retrigger=result.no_space,
        )
        for index, item in enumerate(result.items)
    ]
    return types.CompletionList(is_incomplete=False, items=items)
