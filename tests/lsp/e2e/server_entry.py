"""Test-only server entry point with a fixed device list.

Used by E2E tests so results do not depend on the serial ports of the
machine running them.
"""

from __future__ import annotations

from picolsp.lsp.server import create_server

STUB_DEVICES = ["/dev/ttyACM0", "/dev/ttyUSB0", "/dev/ttyUSB1"]


def _stub_device_provider() -> list[str]:
    return list(STUB_DEVICES)


def main() -> None:
    """Start the test LSP server on stdio."""
    server = create_server(get_devices=_stub_device_provider, debounce_ms=50)
    server.start_io()


if __name__ == "__main__":
    main()
