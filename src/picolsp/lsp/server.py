"""picocom language server built on pygls.

Provides completion, hover and diagnostics for picocom invocations in shell
scripts.
"""

from __future__ import annotations

import logging

from lsprotocol import types
from pygls.lsp.server import LanguageServer
from pygls.workspace import TextDocument

from picolsp.logging import get_logger
from picolsp.lsp.adapter import (
    offset_to_position,
    position_to_offset,
    to_lsp_completion_list,
)
from picolsp.lsp.completion_context import get_completion_context
from picolsp.lsp.completions import get_completions
from picolsp.lsp.diagnostics import DebounceManager, validate_command
from picolsp.lsp.diagnostics.codes import severity_for
from picolsp.lsp.error_handling import wrap_async_handler, wrap_handler
from picolsp.lsp.hover import get_hover_help
from picolsp.lsp.parser import (
    find_picocom_commands,
    merge_line_continuations,
    merged_to_original_offset,
)
from picolsp.picocom.devices import DeviceProvider

SERVER_NAME = "picolsp"
SERVER_VERSION = "v0.1.0"

COMPLETION_TRIGGER_CHARACTERS = [" ", "-", "=", ","]


def build_diagnostics(document: TextDocument) -> list[types.Diagnostic]:
    """Validate every picocom command in a document, with ranges in its original text."""
    merged_text, offset_map = merge_line_continuations(document.source)
    diagnostics: list[types.Diagnostic] = []

    for command in find_picocom_commands(merged_text):
        for issue in validate_command(command):
            start = offset_to_position(
                document, merged_to_original_offset(issue.start, offset_map)
            )
            end = offset_to_position(
                document, merged_to_original_offset(issue.end, offset_map)
            )
            diagnostics.append(
                types.Diagnostic(
                    range=types.Range(start=start, end=end),
                    message=issue.message,
                    severity=severity_for(issue.code),
                    source=SERVER_NAME,
                    code=issue.code,
                )
            )

    return diagnostics


def create_server(
    *,
    get_devices: DeviceProvider | None = None,
    logger: logging.Logger | None = None,
    debounce_ms: int = 400,
) -> LanguageServer:
    """
    Create and configure the LSP server.

    Args:
        get_devices: Provider of serial device paths for the device argument.
        logger: Optional logger. Defaults to ``picolsp.lsp``.
        debounce_ms: Delay before diagnostics run after an edit.

    Returns:
        Configured LanguageServer instance.
    """
    if logger is None:
        logger = get_logger("lsp")

    server = LanguageServer(SERVER_NAME, SERVER_VERSION)
    debounce_manager = DebounceManager(logger=logger)

    def _empty_completion_list() -> types.CompletionList:
        return types.CompletionList(is_incomplete=False, items=[])

    @server.feature(
        types.TEXT_DOCUMENT_COMPLETION,
        types.CompletionOptions(
            trigger_characters=COMPLETION_TRIGGER_CHARACTERS,
            resolve_provider=False,
        ),
    )
    @wrap_handler(
        logger=logger,
        feature_name="textDocument/completion",
        default_factory=_empty_completion_list,
    )
    def completion(params: types.CompletionParams) -> types.CompletionList:
        """Handle textDocument/completion requests."""
        logger.debug("Completion request at %s", params.position)

        document = server.workspace.get_text_document(params.text_document.uri)
        offset = position_to_offset(document, params.position)

        ctx = get_completion_context(document.source, offset)
        logger.debug(
            "Completion context: mode=%s, option=%s, prefix=%r",
            ctx.mode,
            ctx.option.long if ctx.option else None,
            ctx.prefix,
        )

        result = get_completions(ctx, get_devices=get_devices)
        logger.debug("Returning %d completion items", len(result.items))
        return to_lsp_completion_list(
            result, position=params.position, prefix=ctx.prefix
        )

    def _default_hover() -> types.Hover | None:
        return None

    @server.feature(types.TEXT_DOCUMENT_HOVER)
    @wrap_handler(
        logger=logger,
        feature_name="textDocument/hover",
        default_factory=_default_hover,
    )
    def hover(params: types.HoverParams) -> types.Hover | None:  # type: ignore[misc]
        """Handle textDocument/hover requests."""
        document = server.workspace.get_text_document(params.text_document.uri)
        offset = position_to_offset(document, params.position)

        help_text = get_hover_help(document.source, offset)
        if help_text is None:
            return None

        return types.Hover(
            contents=types.MarkupContent(
                kind=types.MarkupKind.Markdown,
                value=f"```\n{help_text}\n```",
            ),
        )

    async def publish_document_diagnostics(
        uri: str, document_version: int | None
    ) -> None:
        """Validate a document and publish the result, unless it went stale."""
        document = server.workspace.get_text_document(uri)
        if document is None:
            return

        if document_version is not None and document.version != document_version:
            logger.debug(
                "Skipping diagnostics for %s: version mismatch (expected %s, got %s)",
                uri,
                document_version,
                document.version,
            )
            return

        diagnostics = build_diagnostics(document)
        server.text_document_publish_diagnostics(
            types.PublishDiagnosticsParams(
                uri=uri,
                diagnostics=diagnostics,
                version=document_version,
            )
        )
        logger.debug(
            "Published %d diagnostics for %s (version %s)",
            len(diagnostics),
            uri,
            document_version,
        )

    async def schedule_diagnostics(uri: str) -> None:
        document = server.workspace.get_text_document(uri)
        if document is None:
            return
        version = document.version
        await debounce_manager.schedule(
            uri,
            lambda: publish_document_diagnostics(uri, version),
            delay_ms=debounce_ms,
        )

    @server.feature(types.TEXT_DOCUMENT_DID_OPEN)
    @wrap_async_handler(
        logger=logger,
        feature_name="textDocument/didOpen",
        default_factory=lambda: None,
    )
    async def did_open(params: types.DidOpenTextDocumentParams) -> None:
        """Handle textDocument/didOpen by scheduling diagnostics."""
        logger.debug("Document opened: %s", params.text_document.uri)
        await schedule_diagnostics(params.text_document.uri)

    @server.feature(types.TEXT_DOCUMENT_DID_CHANGE)
    @wrap_async_handler(
        logger=logger,
        feature_name="textDocument/didChange",
        default_factory=lambda: None,
    )
    async def did_change(params: types.DidChangeTextDocumentParams) -> None:
        """Handle textDocument/didChange by debouncing diagnostics."""
        logger.debug("Document changed: %s", params.text_document.uri)
        await schedule_diagnostics(params.text_document.uri)

    @server.feature(types.TEXT_DOCUMENT_DID_CLOSE)
    @wrap_async_handler(
        logger=logger,
        feature_name="textDocument/didClose",
        default_factory=lambda: None,
    )
    async def did_close(params: types.DidCloseTextDocumentParams) -> None:
        """Handle textDocument/didClose by clearing diagnostics."""
        uri = params.text_document.uri
        logger.debug("Document closed: %s", uri)

        await debounce_manager.cancel(uri)
        server.text_document_publish_diagnostics(
            types.PublishDiagnosticsParams(uri=uri, diagnostics=[], version=None)
        )

    return server
