import argparse
import logging
import sys

from ..fuzzy.core.types import FuzzyError
from .commands.parser import build_parser


def _log_level(verbose: int, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def _configure_logging(verbose: int, quiet: bool) -> None:
    logging.basicConfig(level=_log_level(verbose, quiet), format="%(levelname)s: %(message)s")


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose, args.quiet)
    try:
        return args.func(args) or 0
    except (FuzzyError, OSError, argparse.ArgumentTypeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

if __name__ == "__main__":
    sys.exit(main())
