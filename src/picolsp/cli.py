"""Command-line interface for picolsp."""

from __future__ import annotations

import argparse
import dataclasses
import os
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Literal

from picolsp.bash import (
    BASH_COMPLETION_SCRIPT,
    NO_SPACE_STATUS,
    complete_from_environment,
)
from picolsp.logging import configure_logging, get_logger
from picolsp.lsp.server import create_server
from picolsp.picocom.devices import default_device_provider


@dataclasses.dataclass(frozen=True)
class CliArgs:
    """Parsed command-line arguments."""

    transport: Literal["stdio", "tcp"]
    host: str
    port: int
    log_level: str
    log_file: Path | None
    debug: bool
    bash_complete: bool
    bash_install: bool = False
    words: tuple[str, ...] = ()


def parse_args(argv: Sequence[str] | None = None) -> CliArgs:
    """
    Parse command-line arguments.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Parsed arguments as CliArgs dataclass.
    """
    parser = argparse.ArgumentParser(
        prog="picolsp",
        description="Completion engine and language server for picocom command lines",
    )

    parser.add_argument(
        "--transport",
        choices=["stdio", "tcp"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )

    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host for TCP transport (default: 127.0.0.1)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=4389,
        help="Port for TCP transport (default: 4389)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Log level (default: INFO, or DEBUG if --debug is set)",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Log file path (default: stderr)",
    )

    parser.add_argument(
        "-v",
        "--debug",
        action="store_true",
        help="Enable debug mode (sets log level to DEBUG unless --log-level is specified)",
    )

    parser.add_argument(
        "--bash-complete",
        action="store_true",
        help="Act as a bash completion helper: read COMP_LINE/COMP_POINT "
        f"and print one candidate per line (exit status {NO_SPACE_STATUS} "
        "means no trailing space)",
    )

    parser.add_argument(
        "--bash-install",
        action="store_true",
        help="Print the bash completion function for picocom "
        "(use: eval \"$(picolsp --bash-install)\")",
    )

    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)

    # bash appends the command name, the current word and the previous word,
    # which may themselves look like options
    words: list[str] = []
    if "--bash-complete" in argv:
        cut = argv.index("--bash-complete") + 1
        argv, words = argv[:cut], argv[cut:]

    args = parser.parse_args(argv)

    # Explicit --log-level wins; bash mode stays quiet unless asked
    if args.log_level is not None:
        log_level = args.log_level
    elif args.debug:
        log_level = "DEBUG"
    elif args.bash_complete or args.bash_install:
        log_level = "WARNING"
    else:
        log_level = "INFO"

    return CliArgs(
        transport=args.transport,
        host=args.host,
        port=args.port,
        log_level=log_level,
        log_file=args.log_file,
        debug=args.debug,
        bash_complete=args.bash_complete,
        bash_install=args.bash_install,
        words=tuple(words),
    )


def run_bash_complete(environ: Mapping[str, str] | None = None) -> int:
    """Print completion candidates for the line bash put in the environment."""
    if environ is None:
        environ = os.environ
    reply = complete_from_environment(environ, get_devices=default_device_provider())
    for candidate in reply.candidates:
        sys.stdout.write(candidate + "\n")
    sys.stdout.flush()
    if reply.no_space and reply.candidates:
        return NO_SPACE_STATUS
    return 0


def run_bash_install() -> int:
    """Print the shell function that wires picocom completion into bash."""
    sys.stdout.write(BASH_COMPLETION_SCRIPT)
    sys.stdout.flush()
    return 0


def run(argv: Sequence[str] | None = None) -> int:
    """
    Run the LSP server, or serve bash completion.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Exit code (0 for success, 1 for error, NO_SPACE_STATUS from bash
        completion when no space should follow the candidate).
    """
    args = parse_args(argv)

    configure_logging(level=args.log_level, log_file=args.log_file)
    logger = get_logger("main")
    logger.debug("Configuration: %s", args)

    try:
        if args.bash_complete:
            return run_bash_complete()
        if args.bash_install:
            return run_bash_install()

        logger.info("Starting picolsp server")
        server = create_server(get_devices=default_device_provider())

        if args.transport == "stdio":
            logger.info("Starting in stdio mode")
            server.start_io()
        else:
            logger.info("Starting in TCP mode on %s:%d", args.host, args.port)
            server.start_tcp(args.host, args.port)

        return 0

    except KeyboardInterrupt:
        logger.info("Stopped by user")
        return 0

    except Exception:
        logger.critical("Fatal error", exc_info=True)
        return 1
