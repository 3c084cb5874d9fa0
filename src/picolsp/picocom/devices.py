from __future__ import annotations

import glob
import threading
import time
from collections.abc import Sequence
from typing import Callable, TypeAlias

from picolsp.logging import get_logger

DeviceBuilder: TypeAlias = Callable[[], list[str]]
DeviceProvider: TypeAlias = Callable[[], list[str]]

__all__ = [
    "DEFAULT_DEVICE_PATTERNS",
    "DeviceBuilder",
    "DeviceProvider",
    "default_device_provider",
    "list_serial_devices",
    "make_cached_device_provider",
]

DEFAULT_DEVICE_PATTERNS: tuple[str, ...] = (
    "/dev/ttyUSB*",
    "/dev/ttyACM*",
    "/dev/ttyS*",
    "/dev/ttyAMA*",
    "/dev/serial/by-id/*",
    "/dev/cu.*",
    "/dev/tty.*",
)


def list_serial_devices(
    patterns: Sequence[str] = DEFAULT_DEVICE_PATTERNS,
) -> list[str]:
    """Glob the serial device nodes present on this machine, sorted and unique."""
    found: set[str] = set()
    for pattern in patterns:
        found.update(glob.glob(pattern))
    return sorted(found)


def make_cached_device_provider(
    builder: DeviceBuilder,
    *,
    ttl_s: float = 2.0,
    clock: Callable[[], float] = time.monotonic,
) -> DeviceProvider:
    """Create a provider that reuses the builder's result for ``ttl_s`` seconds.

    Serial adapters are hot-plugged, so entries expire instead of living for
    the whole server session. Thread-safe: concurrent callers share one
    rebuild.
    """

    cache: list[str] | None = None
    built_at = 0.0
    _lock = threading.Lock()
    _logger = get_logger("picocom.devices")

    def provider() -> list[str]:
        nonlocal cache, built_at
        with _lock:
            now = clock()
            if cache is None or now - built_at >= ttl_s:
                _logger.debug("Device cache miss - scanning serial devices")
                cache = builder()
                built_at = now
            else:
                _logger.debug("Device cache hit - %d devices", len(cache))
            return list(cache)

    return provider


def default_device_provider() -> DeviceProvider:
    """Create the default production device provider."""
    return make_cached_device_provider(list_serial_devices)
