"""Run the sample programs through both pipelines."""

import argparse
import logging
import sys

from .context import Context
from .samples import PROGRAMS


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="stacklet",
        description="Evaluate the sample programs by tree walking and by byte code.",
    )
    parser.add_argument("names", nargs="*", help="sample programs to run (default: all)")
    parser.add_argument("-q", "--quiet", action="store_true", help="print results only")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    unknown = [name for name in args.names if name not in PROGRAMS]
    if unknown:
        parser.error(f"unknown program(s): {', '.join(unknown)}")

    ctx = Context()
    for name in args.names or PROGRAMS:
        expr = PROGRAMS[name]
        if args.quiet:
            print(f"{name}: {ctx.eval(expr)}")
        else:
            print(ctx.report(expr))
    return 0


if __name__ == "__main__":
    sys.exit(main())
