"""
Command line entry point.

    hashcons [INPUT] [-o OUTPUT] [-j WORKERS] [--keep-going] [-v]

Reads stdin and writes stdout unless files are given; ``-`` also names
the standard streams.
"""

import argparse
import logging
import sys
from contextlib import contextmanager
from typing import IO, Iterator, List, Optional

from hashcons.frontend.parser import ParseError
from hashcons.runtime.pipeline import LineProcessor

logger = logging.getLogger(__name__)

STDIO = "-"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hashcons",
        description="Replace repeated subexpressions with references to their first occurrence.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default=STDIO,
        help="Input file: a line count followed by one expression per line (default: stdin)",
    )
    parser.add_argument(
        "-o", "--output",
        default=STDIO,
        help="Output file (default: stdout)",
    )
    parser.add_argument(
        "-j", "--workers",
        type=int,
        default=1,
        help="Worker processes for large inputs; 0 picks one per spare CPU",
    )
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Log and skip lines that fail to parse instead of stopping",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging on stderr",
    )
    return parser


@contextmanager
def open_stream(path: str, mode: str) -> Iterator[IO[str]]:
    """Open ``path``, or hand out the matching standard stream for ``-``."""
    if path == STDIO:
        yield sys.stdin if "r" in mode else sys.stdout
        return
    with open(path, mode, encoding="utf-8") as stream:
        yield stream


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    processor = LineProcessor(
        workers=args.workers,
        keep_going=args.keep_going,
        enable_logging=args.verbose,
    )

    try:
        with open_stream(args.input, "r") as stream_in, \
                open_stream(args.output, "w") as stream_out:
            stats = processor.run(stream_in, stream_out)
    except OSError as e:
        parser.error(str(e))
    except ParseError as e:
        logger.error(f"{e}")
        return 1

    return 1 if stats.lines_failed else 0


if __name__ == "__main__":
    sys.exit(main())
