"""Command line interface.

Usage:
    dollarsmith notes.md                  # print normalized text
    dollarsmith --write docs/*.md         # rewrite files in place
    dollarsmith --check --strict docs/*.md
    dollarsmith --json notes.md           # print the edit plan instead of text
    dollarsmith --json --write notes.md   # rewrite and print the plan
    dollarsmith --spans spans.json notes.md

Exit codes:
    0  success (with --check: nothing to convert)
    1  --check found files that would change
    2  usage, I/O or input format error
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from dollarsmith import __version__
from dollarsmith.edits import apply_edits
from dollarsmith.errors import DollarSmithError
from dollarsmith.nodes import NormalizationResult
from dollarsmith.normalizer import Normalizer
from dollarsmith.serialization import spans_from_json, to_dict
from dollarsmith.utils.logger import get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dollarsmith",
        description="Convert \\( \\) and \\[ \\] math delimiters in Markdown to $ and $$.",
    )
    parser.add_argument("paths", nargs="+", metavar="PATH", help="Markdown files to process")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="leave math with unbalanced braces or brackets unconverted",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--write", action="store_true", help="rewrite files in place")
    mode.add_argument(
        "--check",
        action="store_true",
        help="only report; exit 1 if any file would change",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="print analysis results as JSON instead of the converted text",
    )
    parser.add_argument(
        "--spans",
        type=Path,
        metavar="FILE",
        help="JSON array of protected spans to use instead of the built-in parser "
        "(requires exactly one PATH)",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="more logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _report(path: Path, result: NormalizationResult, strict: bool) -> None:
    stats = result.stats
    print(
        f"{path}: {stats.total_found} found, {stats.converted} converted, {stats.skipped} skipped",
        file=sys.stderr,
    )
    if strict:
        for issue in result.issues:
            where = f" at content offset {issue.position}" if issue.position is not None else ""
            print(f"  {issue.kind}: {issue.message}{where}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.spans is not None and len(args.paths) != 1:
        parser.error("--spans requires exactly one PATH")

    normalizer = Normalizer(strict_mode=args.strict)
    would_change = False

    try:
        spans = None
        if args.spans is not None:
            spans = spans_from_json(args.spans.read_text(encoding="utf-8"))

        for raw_path in args.paths:
            path = Path(raw_path)
            text = path.read_text(encoding="utf-8")
            result = normalizer.analyze(text, spans)
            logger.debug("Analyzed %s", path)

            if args.json:
                print(json.dumps({"path": str(path), "result": to_dict(result)}, sort_keys=True))
            else:
                _report(path, result, args.strict)

            would_change = would_change or result.changed
            if args.check:
                continue

            if args.write:
                if result.changed:
                    path.write_text(apply_edits(text, result.edits), encoding="utf-8")
                    logger.info("Rewrote %s", path)
            elif not args.json:
                sys.stdout.write(apply_edits(text, result.edits))
    except (OSError, DollarSmithError) as e:
        print(f"dollarsmith: error: {e}", file=sys.stderr)
        return 2

    if args.check and would_change:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
