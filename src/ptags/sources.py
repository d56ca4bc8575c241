# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Expand user supplied paths into Perl source files."""

import logging
from pathlib import Path
from typing import Iterable

import pathspec

logger = logging.getLogger(__name__)

PERL_EXTENSIONS: tuple[str, ...] = (".pm", ".pl", ".t")


class IgnoreRules:
    """Apply each directory's .gitignore to the paths below it.

    Patterns are matched relative to the directory holding the .gitignore,
    so anchored patterns like ``/Local.pm`` keep their meaning. A path is
    ignored when any ancestor's rules ignore it.
    """

    def __init__(self) -> None:
        self._specs: list[tuple[Path, pathspec.GitIgnoreSpec]] = []

    def load(self, directory: Path) -> None:
        """Read ``directory/.gitignore`` if present.

        Raises:
            OSError: If the .gitignore file cannot be read.
            UnicodeDecodeError: If the .gitignore file is not valid UTF-8.
        """
        ignore_path = directory / ".gitignore"
        if not ignore_path.is_file():
            return
        lines = ignore_path.read_text(encoding="utf-8").splitlines()
        self._specs.append((directory, pathspec.GitIgnoreSpec.from_lines(lines)))

    def ignores(self, path: Path, is_dir: bool) -> bool:
        for base, spec in self._specs:
            if base not in path.parents:
                continue
            relative = path.relative_to(base).as_posix()
            if spec.match_file(relative):
                return True
            if is_dir and spec.match_file(f"{relative}/"):
                return True
        return False


def collect_source_files(
    paths: Iterable[Path], extensions: tuple[str, ...] = PERL_EXTENSIONS
) -> list[Path]:
    """Expand directories into Perl source files, keeping explicit files.

    Directories are walked breadth first in name order; ``.git`` and
    .gitignore'd paths are skipped.

    Args:
        paths: Files or directories given by the user.
        extensions: File suffixes collected from directories.

    Returns:
        Source files in discovery order, without duplicates.

    Raises:
        OSError: If a directory or .gitignore file cannot be read.
    """
    collected: list[Path] = []
    known: set[Path] = set()
    for path in paths:
        if path.is_dir():
            candidates = _walk_directory(root=path, extensions=extensions)
        else:
            candidates = [path]
        for candidate in candidates:
            key = candidate.resolve()
            if key in known:
                continue
            known.add(key)
            collected.append(candidate)
    return collected


def _walk_directory(root: Path, extensions: tuple[str, ...]) -> list[Path]:
    rules = IgnoreRules()
    found: list[Path] = []
    skipped = 0
    queue: list[Path] = [root]
    while queue:
        current = queue.pop(0)
        rules.load(current)
        for child in sorted(current.iterdir(), key=lambda item: item.name):
            is_dir = child.is_dir()
            if is_dir and child.name == ".git":
                continue
            if rules.ignores(child, is_dir=is_dir):
                skipped += 1
                continue
            if is_dir:
                queue.append(child)
            elif child.suffix in extensions:
                found.append(child)
    logger.debug(
        f"Collected source files (root={root} files={len(found)} skipped_by_gitignore={skipped})"
    )
    return found
