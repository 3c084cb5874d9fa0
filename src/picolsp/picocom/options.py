"""Static picocom option and value tables."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple


class ValueKind(str, Enum):
    """How an option's argument is completed and validated."""

    FLAG = "flag"  # Takes no argument
    CHOICE = "choice"  # One value from a fixed set
    MAPPING = "mapping"  # Comma-separated list of mapping names
    FREE = "free"  # Arbitrary text


class OptionSpec(NamedTuple):
    """One picocom command-line option."""

    long: str
    short: str | None
    kind: ValueKind
    help: str
    metavar: str = ""
    choices: tuple[str, ...] = ()

    @property
    def takes_value(self) -> bool:
        return self.kind != ValueKind.FLAG

    @property
    def spellings(self) -> tuple[str, ...]:
        if self.short is None:
            return (self.long,)
        return (self.long, self.short)


BAUD_RATES: tuple[str, ...] = (
    "50",
    "75",
    "110",
    "134",
    "150",
    "200",
    "300",
    "600",
    "1200",
    "1800",
    "2400",
    "4800",
    "9600",
    "19200",
    "38400",
    "57600",
    "115200",
    "230400",
    "460800",
    "500000",
    "576000",
    "921600",
    "1000000",
    "1152000",
    "1500000",
    "2000000",
    "2500000",
    "3000000",
    "3500000",
    "4000000",
)

FLOW_MODES: tuple[str, ...] = ("x", "h", "n")
PARITY_MODES: tuple[str, ...] = ("o", "e", "n")
DATA_BITS: tuple[str, ...] = ("5", "6", "7", "8")
STOP_BITS: tuple[str, ...] = ("1", "2")

MAPPINGS: dict[str, str] = {
    "crlf": "map CR to LF",
    "crcrlf": "map CR to CR + LF",
    "igncr": "ignore CR",
    "lfcr": "map LF to CR",
    "lfcrlf": "map LF to CR + LF",
    "ignlf": "ignore LF",
    "delbs": "map DEL to BS",
    "bsdel": "map BS to DEL",
    "spchex": "map special chars (excl. CR, LF & TAB) to hex",
    "tabhex": "map TAB to hex",
    "crhex": "map CR to hex",
    "lfhex": "map LF to hex",
    "8bithex": "map 8-bit chars to hex",
    "nrmhex": "map normal ascii chars to hex",
}

MAPPING_NAMES: tuple[str, ...] = tuple(MAPPINGS)

VALUE_DESCRIPTIONS: dict[str, dict[str, str]] = {
    "--flow": {"x": "xon/xoff (software)", "h": "RTS/CTS (hardware)", "n": "none"},
    "--parity": {"o": "odd", "e": "even", "n": "none"},
}

OPTIONS: tuple[OptionSpec, ...] = (
    OptionSpec(
        "--baud",
        "-b",
        ValueKind.CHOICE,
        "Set the baud rate of the serial port (default: 9600)",
        "<baudrate>",
        BAUD_RATES,
    ),
    OptionSpec(
        "--flow",
        "-f",
        ValueKind.CHOICE,
        "Set flow control: x (xon/xoff), h (hardware) or n (none, default)",
        "x | h | n",
        FLOW_MODES,
    ),
    OptionSpec(
        "--parity",
        "-y",
        ValueKind.CHOICE,
        "Set parity: o (odd), e (even) or n (none, default)",
        "o | e | n",
        PARITY_MODES,
    ),
    OptionSpec(
        "--databits",
        "-d",
        ValueKind.CHOICE,
        "Set the number of data bits (default: 8)",
        "5 | 6 | 7 | 8",
        DATA_BITS,
    ),
    OptionSpec(
        "--stopbits",
        "-p",
        ValueKind.CHOICE,
        "Set the number of stop bits (default: 1)",
        "1 | 2",
        STOP_BITS,
    ),
    OptionSpec(
        "--escape",
        "-e",
        ValueKind.FREE,
        "Set the command-mode escape character (default: a, i.e. C-a)",
        "<char>",
    ),
    OptionSpec("--echo", "-c", ValueKind.FLAG, "Enable local echo"),
    OptionSpec(
        "--noinit", "-i", ValueKind.FLAG, "Do not initialize the serial port"
    ),
    OptionSpec(
        "--noreset", "-r", ValueKind.FLAG, "Do not reset the serial port on exit"
    ),
    OptionSpec("--hangup", "-u", ValueKind.FLAG, "Hang up the line on exit"),
    OptionSpec("--nolock", "-l", ValueKind.FLAG, "Do not lock the serial port"),
    OptionSpec(
        "--send-cmd",
        "-s",
        ValueKind.FREE,
        "External command used to send files (default: sz -vv)",
        "<command>",
    ),
    OptionSpec(
        "--receive-cmd",
        "-v",
        ValueKind.FREE,
        "External command used to receive files (default: rz -vv -E)",
        "<command>",
    ),
    OptionSpec(
        "--imap",
        None,
        ValueKind.MAPPING,
        "Input character mappings (serial port to terminal)",
        "<map>",
        MAPPING_NAMES,
    ),
    OptionSpec(
        "--omap",
        None,
        ValueKind.MAPPING,
        "Output character mappings (terminal to serial port)",
        "<map>",
        MAPPING_NAMES,
    ),
    OptionSpec(
        "--emap",
        None,
        ValueKind.MAPPING,
        "Local-echo character mappings",
        "<map>",
        MAPPING_NAMES,
    ),
    OptionSpec(
        "--logfile",
        "-g",
        ValueKind.FREE,
        "Log all terminal output to a file",
        "<filename>",
    ),
    OptionSpec(
        "--initstring",
        "-t",
        ValueKind.FREE,
        "String to send to the serial port after initialization",
        "<string>",
    ),
    OptionSpec(
        "--exit-after",
        "-x",
        ValueKind.FREE,
        "Exit after the given number of idle milliseconds",
        "<msec>",
    ),
    OptionSpec(
        "--exit", "-X", ValueKind.FLAG, "Exit right after initializing the port"
    ),
    OptionSpec("--lower-rts", None, ValueKind.FLAG, "Lower RTS after opening"),
    OptionSpec("--lower-dtr", None, ValueKind.FLAG, "Lower DTR after opening"),
    OptionSpec("--raise-rts", None, ValueKind.FLAG, "Raise RTS after opening"),
    OptionSpec("--raise-dtr", None, ValueKind.FLAG, "Raise DTR after opening"),
    OptionSpec("--quiet", "-q", ValueKind.FLAG, "Do not print informational messages"),
    OptionSpec("--help", "-h", ValueKind.FLAG, "Show usage and exit"),
)

_OPTIONS_BY_SPELLING: dict[str, OptionSpec] = {
    spelling: option for option in OPTIONS for spelling in option.spellings
}


def find_option(token: str) -> OptionSpec | None:
    """Look up an option by its exact long or short spelling."""
    return _OPTIONS_BY_SPELLING.get(token)


def cluster_value_option(token: str) -> OptionSpec | None:
    """
    Value-taking option that ends a short-option cluster such as ``-lb``.

    Returns None when the token is not a cluster, when no letter takes a
    value, or when the value is attached (``-lb9600``).
    """
    if len(token) < 3 or not token.startswith("-") or token.startswith("--"):
        return None
    for j in range(1, len(token)):
        option = find_option("-" + token[j])
        if option is not None and option.takes_value:
            return option if j == len(token) - 1 else None
    return None


def option_labels() -> list[str]:
    """All option spellings: long forms in table order, then short forms."""
    labels = [option.long for option in OPTIONS]
    labels.extend(option.short for option in OPTIONS if option.short is not None)
    return labels


def describe_value(option: OptionSpec, value: str) -> str:
    """Short description of one option value, for completion details and hover."""
    if option.kind == ValueKind.MAPPING:
        return MAPPINGS.get(value, "")
    return VALUE_DESCRIPTIONS.get(option.long, {}).get(value, "")


def format_option_usage(option: OptionSpec) -> str:
    """Render ``--long | -s <metavar>`` for help text."""
    usage = " | ".join(option.spellings)
    if option.metavar:
        usage = f"{usage} {option.metavar}"
    return usage
