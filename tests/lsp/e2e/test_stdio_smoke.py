"""E2E smoke tests for the language server over stdio."""

from __future__ import annotations

import pytest

from tests.lsp.e2e.lsp_client import LspTestClient

URI = "file:///connect.sh"


@pytest.mark.e2e
class TestStdioE2E:
    """End-to-end tests for LSP server communication."""

    async def test_initialize_shutdown(self, lsp_client: LspTestClient) -> None:
        """Server advertises completion, hover and sync capabilities."""
        response = await lsp_client.initialize()

        capabilities = response["result"]["capabilities"]
        assert capabilities["completionProvider"]["triggerCharacters"] == [
            " ",
            "-",
            "=",
            ",",
        ]
        assert capabilities["hoverProvider"]

        await lsp_client.shutdown_exit()

    async def test_device_completion(self, lsp_client: LspTestClient) -> None:
        """Device argument is completed from the server's device provider."""
        await lsp_client.initialize()
        await lsp_client.did_open(uri=URI, text="picocom -b 115200 /dev/ttyU")

        response = await lsp_client.completion(uri=URI, line=0, character=27)

        labels = [item["label"] for item in response["result"]["items"]]
        assert labels == ["/dev/ttyUSB0", "/dev/ttyUSB1"]

        await lsp_client.shutdown_exit()

    async def test_mapping_completion_hints(self, lsp_client: LspTestClient) -> None:
        """Mapping entries keep their order and retrigger suggestions."""
        await lsp_client.initialize()
        await lsp_client.did_open(uri=URI, text="picocom --imap crlf,")

        response = await lsp_client.completion(uri=URI, line=0, character=20)

        items = response["result"]["items"]
        assert items[0]["label"] == "crcrlf"
        assert items[0]["sortText"] == "0000"
        assert items[0]["command"]["command"] == "editor.action.triggerSuggest"
        assert "crlf" not in [item["label"] for item in items]

        await lsp_client.shutdown_exit()

    async def test_completion_empty_document(self, lsp_client: LspTestClient) -> None:
        """Completion in an empty document is an empty list, not an error."""
        await lsp_client.initialize()
        await lsp_client.did_open(uri="file:///empty.sh", text="")

        response = await lsp_client.completion(
            uri="file:///empty.sh", line=0, character=0
        )

        assert response["result"]["items"] == []

        await lsp_client.shutdown_exit()

    async def test_hover(self, lsp_client: LspTestClient) -> None:
        await lsp_client.initialize()
        await lsp_client.did_open(uri=URI, text="picocom --flow h /dev/ttyUSB0")

        response = await lsp_client.hover(uri=URI, line=0, character=10)

        assert "--flow | -f" in response["result"]["contents"]["value"]

        await lsp_client.shutdown_exit()

    async def test_diagnostics_published(self, lsp_client: LspTestClient) -> None:
        """Opening a document publishes diagnostics after the debounce delay."""
        await lsp_client.initialize()
        await lsp_client.did_open(uri=URI, text="picocom --bad /dev/ttyUSB0")

        notification = await lsp_client.wait_for_notification(
            "textDocument/publishDiagnostics"
        )

        params = notification["params"]
        assert params["uri"] == URI
        codes = [diagnostic["code"] for diagnostic in params["diagnostics"]]
        assert codes == ["picolsp/unknown-option"]

        await lsp_client.shutdown_exit()
