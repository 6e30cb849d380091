#!/usr/bin/env python3
"""
CLI entrypoint for the stack simulator.

Usage:
    stacksim                  # run every scenario
    stacksim sync async       # run the named scenarios
    stacksim --list           # list scenario names

Returns:
    0: every error was handled
    1: at least one scenario crashed with an uncaught error
    2: usage error
    3: simulator error (stack underflow, overflow, ...)
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .errors import SimulatorError
from .simulator import SCENARIOS


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stacksim",
        description="Show how errors propagate through synchronous and deferred call stacks",
    )
    parser.add_argument(
        "scenarios",
        nargs="*",
        metavar="SCENARIO",
        help=f"Scenarios to run (default: all). One of: {', '.join(SCENARIOS)}",
    )
    parser.add_argument("--list", action="store_true", help="List scenarios and exit")
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum frames per call stack (default: unlimited)",
    )
    parser.add_argument("--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)

    if args.list:
        for name, scenario in SCENARIOS.items():
            summary = (scenario.__doc__ or "").strip().splitlines()[0]
            print(f"{name:<18} {summary}")
        return 0

    unknown = [name for name in args.scenarios if name not in SCENARIOS]
    if unknown:
        parser.error(f"unknown scenario(s): {', '.join(unknown)}")
    if args.max_depth is not None and args.max_depth < 1:
        parser.error("--max-depth must be a positive integer")

    names = args.scenarios or list(SCENARIOS)
    crashed = False
    for index, name in enumerate(names):
        try:
            result = SCENARIOS[name](max_depth=args.max_depth)
        except SimulatorError as e:
            print(f"{name}: {e}", file=sys.stderr)
            return 3
        if index:
            print()
        print(result.report())
        crashed = crashed or result.crashed

    return 1 if crashed else 0


if __name__ == "__main__":
    sys.exit(main())
