"""Command-line entry point for the dining philosophers simulation."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from .args import ArgumentError, parse_args
from .table import Table

__all__ = ["main"]


def main(argv: Sequence[str] | None = None) -> int:
    """Run the simulation from command-line arguments; return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        settings = parse_args(args)
    except ArgumentError as error:
        if error.message:
            print(error.message)
        print("Wrong Arguments Syntax")
        return 1
    Table(settings, sys.stdout).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())