#!/usr/bin/env python3
"""
Count forced composition objects in PGS (.sup) subtitle streams.

For every input (standard input when none is given, or for ``-``) one line is
printed:

    <forced objects> <total composition objects>

A stream that cannot be opened or decoded stops the whole run with a message on
stderr and a sysexits-style status: 66 when an input cannot be opened, 74 on an
I/O error, 65 on malformed or truncated data. Inputs after the failing one are
not read.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from supforced import STDIN_NAME, ForcedCount, SupError, count_forced, open_input
from supforced.logging import setup_logging

log = logging.getLogger("sup_count_forced")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Count forced vs. total composition objects in .sup files.")
    parser.add_argument(
        "inputs",
        nargs="*",
        metavar="FILE",
        help="PGS streams to scan ('-' or nothing reads standard input)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject PCS segments whose sprite records run past the declared segment size",
    )
    parser.add_argument(
        "--total",
        action="store_true",
        help="Print one extra line with the sums over every input",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every segment to stderr")
    parser.add_argument("--log-file", type=Path, help="Also write the log to this file")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose, args.log_file)
    inputs = args.inputs or [STDIN_NAME]
    grand_total = ForcedCount()
    try:
        for name in inputs:
            with open_input(name) as reader:
                result = count_forced(reader, strict=args.strict)
            print(result, flush=True)
            grand_total += result
    except SupError as exc:
        log.error("%s", exc)
        return exc.exit_code
    if args.total:
        print(grand_total)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
