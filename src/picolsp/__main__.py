"""Entry point for ``python -m picolsp``."""

import sys

from picolsp.cli import run


def main() -> None:
    """Run the CLI and exit with its status."""
    sys.exit(run())


if __name__ == "__main__":
    main()
