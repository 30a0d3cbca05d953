"""Command-line interface for gitwiser."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from loguru import logger

from gitwiser import __version__
from gitwiser.commands.authors import authors_command


def _percent(value: str) -> int:
    try:
        pct = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None
    if not 0 <= pct <= 100:
        raise argparse.ArgumentTypeError(f"must be between 0 and 100, got {pct}")
    return pct


def configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "WARNING",
        format="<dim>{time:HH:mm:ss}</dim> <level>{level: <7}</level> {message}",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitwiser",
        description="Git repository health check: duplicate authors and .mailmap generation",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"gitwiser {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    authors_parser = subparsers.add_parser(
        "authors",
        help="Detect duplicate authors, generate .mailmap",
    )
    authors_parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        default=Path("."),
        help="Repository path (default: current directory)",
    )
    authors_parser.add_argument(
        "-o",
        "--output",
        choices=["text", "json", "mailmap"],
        default="text",
        help="Output format",
    )
    authors_parser.add_argument(
        "--threshold",
        type=_percent,
        help="Similarity threshold 0-100 (default: 70, or .gitwiser.yaml)",
    )
    authors_parser.add_argument(
        "--apply",
        action="store_true",
        help="Write the generated .mailmap into the repository",
    )
    authors_parser.add_argument(
        "--prefer-human",
        action="store_true",
        default=None,
        help="On equal commit counts, avoid no-reply addresses as canonical",
    )
    authors_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Debug logging to stderr",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    configure_logging(args.verbose)

    if args.command == "authors":
        return authors_command(
            args.path,
            output=args.output,
            threshold=args.threshold,
            apply=args.apply,
            prefer_human=args.prefer_human,
        )

    parser.error(f"Unknown command: {args.command}")


if __name__ == "__main__":
    sys.exit(main())
