"""
gfakit command line.

    gfakit stats graph.gfa                  record counts per kind
    gfakit check graph.gfa                  strict parse, exit 1 on the first error
    gfakit convert graph.gfa graph.gfa2     GFA 1 -> GFA 2

Parser options (all subcommands):
    --gfa2              read the input as GFA 2
    --dense-ids         integer ids instead of raw names
    --no-tags           discard optional fields
    --tolerance LEVEL   pedantic | safe | ignore
    --progress          show a progress bar while reading
"""

from __future__ import annotations

import argparse
import logging
import sys

from gfakit.errors import GFAError, ParserTolerance
from gfakit.ids import DenseId, OpaqueId
from gfakit.reader import GFA1Parser, GFA2Parser
from gfakit.tag import NoOptionalFields, OptionalFields

logger = logging.getLogger(__name__)


def _build_parser(args: argparse.Namespace, tolerance: ParserTolerance | None = None):
    parser_cls = GFA2Parser if args.gfa2 else GFA1Parser
    return parser_cls(
        ids=DenseId if args.dense_ids else OpaqueId,
        tags=OptionalFields if args.tags else NoOptionalFields,
        tolerance=tolerance or ParserTolerance(args.tolerance),
    )


def cmd_stats(args: argparse.Namespace) -> int:
    document = _build_parser(args).parse_file(args.file, progress=args.progress)
    print(f"{args.file}: {type(document).__name__}")
    for name, count in document.counts().items():
        print(f"  {name:<14}{count}")
    print(f"  {'total':<14}{len(document)}")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    # --tolerance is ignored here: check is always strict
    parser = _build_parser(args, ParserTolerance.PEDANTIC)
    try:
        parser.parse_file(args.file, progress=args.progress)
    except GFAError as e:
        print(f"FAILED: {e}")
        return 1
    print("PASSED")
    return 0


def cmd_convert(args: argparse.Namespace) -> int:
    from gfakit.converters import convert_gfa1_to_gfa2

    if args.gfa2:
        print("convert reads GFA 1 input; drop --gfa2", file=sys.stderr)
        return 1
    gfa = _build_parser(args).parse_file(args.src, progress=args.progress)
    converted = convert_gfa1_to_gfa2(gfa)
    written = converted.write(args.dst)
    print(f"Wrote {len(converted)} records ({written} bytes) to {args.dst}")
    return 0


def main(argv: list[str] | None = None) -> int:
    options = argparse.ArgumentParser(add_help=False)
    options.add_argument("--gfa2", action="store_true", help="Read the input as GFA 2")
    options.add_argument("--dense-ids", action="store_true", help="Encode ids as integers")
    options.add_argument(
        "--tags",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Keep optional fields (default: keep)",
    )
    options.add_argument(
        "--tolerance",
        choices=[t.value for t in ParserTolerance],
        default=ParserTolerance.SAFE.value,
        help="How to react to bad lines (default: safe)",
    )
    options.add_argument("--progress", action="store_true", help="Show a progress bar")
    options.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")

    parser = argparse.ArgumentParser(
        prog="gfakit",
        description="Parse, check and convert GFA 1 / GFA 2 assembly graphs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    stats = subparsers.add_parser("stats", parents=[options], help="Count records per kind")
    stats.add_argument("file")
    stats.set_defaults(func=cmd_stats)

    check = subparsers.add_parser("check", parents=[options], help="Parse strictly, exit 1 on error")
    check.add_argument("file")
    check.set_defaults(func=cmd_check)

    convert = subparsers.add_parser("convert", parents=[options], help="Convert GFA 1 to GFA 2")
    convert.add_argument("src")
    convert.add_argument("dst")
    convert.set_defaults(func=cmd_convert)

    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        return args.func(args)
    except GFAError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
