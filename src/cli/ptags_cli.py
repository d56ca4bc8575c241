# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Command line front end for generating Perl tags files."""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler
from rich.style import Style
from rich.table import Table
from rich.text import Text

from ptags.locator import IncludePathLocator
from ptags.sources import collect_source_files
from ptags.tag import KIND_LETTERS, Tag, unescape_pattern
from ptags.tagger import Tagger, TaggerOptions, TagsInputError

logger = logging.getLogger(__name__)

TABLE_COLUMN_RATIOS: dict[str, int] = {
    "name": 2,
    "kind": 1,
    "line": 1,
    "scope": 2,
    "file_scoped": 1,
    "source": 5,
}


class ValidationError(RuntimeError):
    """Represent user input validation failure."""


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Logging severity threshold.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser.

    Returns:
        Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(prog="ptags")
    parser.add_argument(
        "paths", nargs="+", help="Perl files or directories to tag."
    )
    parser.add_argument(
        "-o", "--output", default="tags", help="Tags file written in tags format."
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=2,
        help="Deepest use/require level to follow; 1 tags only the given files.",
    )
    parser.add_argument(
        "--no-variables",
        action="store_true",
        help="Skip my/our/local variable tags.",
    )
    parser.add_argument(
        "--extended",
        action="store_true",
        help="Emit exuberant ctags kind, line, file and class fields.",
    )
    parser.add_argument(
        "-I",
        "--include",
        action="append",
        default=[],
        help="Module search directory; may be repeated.",
    )
    parser.add_argument(
        "--no-perl5lib",
        action="store_true",
        help="Do not search PERL5LIB directories.",
    )
    parser.add_argument(
        "--refresh",
        action="store_true",
        help="Rescan given files even when already seen.",
    )
    parser.add_argument(
        "--format",
        choices=("tags", "table", "json"),
        default="tags",
        help="Output format.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logs.")
    return parser


def run(argv: list[str], stdout: TextIO, stderr: TextIO) -> int:
    """Run ptags command.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        logger.warning(f"Argument parsing failed (argv={argv})")
        return 2
    if args.verbose:
        logging.getLogger("ptags").setLevel(logging.DEBUG)

    try:
        paths = _validate_paths([Path(path) for path in args.paths])
        options = TaggerOptions(
            max_depth=args.max_depth,
            track_variables=not args.no_variables,
            extended_output=args.extended,
        )
    except (ValidationError, ValueError) as exc:
        logger.warning(f"Validation failed (error={exc})")
        stderr.write(f"{exc}\n")
        return 2

    try:
        files = collect_source_files(paths)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning(f"Failed to collect source files (error={exc})")
        stderr.write(f"Failed to collect source files: {exc}\n")
        return 2
    if not files:
        stderr.write("No Perl source files found\n")
        return 2

    locator = IncludePathLocator.from_environment(
        include_paths=args.include, use_perl5lib=not args.no_perl5lib
    )
    tagger = Tagger(options=options, locator=locator)
    try:
        scanned = tagger.process(files, refresh=args.refresh)
    except TagsInputError as exc:
        logger.warning(f"Tagging failed (error={exc})")
        stderr.write(f"Tagging failed: {exc}\n")
        return 2
    logger.info(
        f"Tagging completed (files={len(files)} scanned={scanned} tags={tagger.tag_count})"
    )

    tags = tagger.registry.all_tags()
    if args.format == "json":
        _write_json(tags=tags, stdout=stdout)
        return 0
    if args.format == "table":
        _write_table(tags=tags, stdout=stdout)
        return 0

    try:
        written = tagger.write(Path(args.output))
    except OSError as exc:
        logger.warning(
            f"Failed to write tags file (output_path={args.output} error={exc})"
        )
        stderr.write(f"Failed to write tags file: {args.output}\n")
        return 2
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    console.print(
        f"files_scanned={scanned} tags={tagger.tag_count} "
        f"written={str(written).lower()} output={args.output}",
        markup=False,
        highlight=False,
        soft_wrap=True,
    )
    return 0


def _validate_paths(paths: list[Path]) -> list[Path]:
    """Check that every requested path exists.

    Args:
        paths: Paths from user args.

    Returns:
        The same paths.

    Raises:
        ValidationError: If a path does not exist.
    """
    for path in paths:
        if not path.exists():
            raise ValidationError(f"Path does not exist: {path}")
    return paths


def _write_json(tags: list[Tag], stdout: TextIO) -> None:
    payload = {"tags": [asdict(tag) for tag in tags]}
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    console.print(
        json.dumps(payload, indent=2, sort_keys=True),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


def _write_table(tags: list[Tag], stdout: TextIO) -> None:
    """Write tags grouped by file as Rich tables.

    Args:
        tags: Tags in serialization order.
        stdout: Standard output stream.
    """
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    tags_by_file: dict[str, list[Tag]] = {}
    for tag in tags:
        tags_by_file.setdefault(tag.file, []).append(tag)

    for file in sorted(tags_by_file):
        console.rule(Text(file), style=Style(color="cyan"), characters="-")
        table = Table(show_header=True, show_lines=False, expand=True)
        for column, ratio in TABLE_COLUMN_RATIOS.items():
            table.add_column(
                column,
                ratio=ratio,
                overflow="fold",
                justify="right" if column == "line" else "left",
            )
        for tag in sorted(tags_by_file[file], key=lambda item: item.line_number):
            table.add_row(
                tag.name,
                KIND_LETTERS.get(tag.kind, tag.kind),
                str(tag.line_number),
                Text(tag.scope),
                "yes" if tag.is_file_scoped else "no",
                Text(unescape_pattern(tag.source_line)),
            )
        console.print(table)


def main() -> None:
    """Run the CLI application and exit."""
    configure_logging()
    exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
