"""Command line entry point: ``python -m turbounescape [FILE]``."""

import argparse
import sys

from .context import Context
from .unescape import Unescaper, UnescaperOpts


def build_parser():
    parser = argparse.ArgumentParser(
        prog="turbounescape",
        description="Expand HTML character references in a file or stdin",
    )
    parser.add_argument(
        "file",
        nargs="?",
        default=None,
        help="File to decode (default: read stdin)",
    )
    parser.add_argument(
        "--attribute", "-a",
        action="store_true",
        help="Use the rules for attribute values",
    )
    parser.add_argument(
        "--errors", "-e",
        action="store_true",
        help="Print parse errors to stderr",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Trace every reference as it is resolved",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.file is None:
        data = sys.stdin.buffer.read()
    else:
        try:
            with open(args.file, "rb") as f:
                data = f.read()
        except OSError as e:
            print(f"turbounescape: cannot read {args.file}: {e.strerror}", file=sys.stderr)
            return 1

    context = Context.ATTRIBUTE if args.attribute else Context.GENERAL
    unescaper = Unescaper(UnescaperOpts(collect_errors=args.errors, debug=args.debug))
    output = unescaper.decode(data, context).encode("utf-8")
    # Debug lines go through the text layer, flush them before the raw bytes
    sys.stdout.flush()
    sys.stdout.buffer.write(output)
    sys.stdout.buffer.flush()

    for error in unescaper.errors:
        print(error, file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
