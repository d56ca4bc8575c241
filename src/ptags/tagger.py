# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Incremental, recursive ctags generation for Perl sources."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from ptags.context import ScanContext, apply_scope, normalize_statement
from ptags.discovery import DiscoveryQueue, QueueEntry
from ptags.locator import IncludePathLocator, ModuleLocator
from ptags.recognizers import Recognizer, default_recognizers
from ptags.registry import TagRegistry
from ptags.tag import Inclusion, RecognizerResult, Tag

logger = logging.getLogger(__name__)


class TagsInputError(RuntimeError):
    """Represent a fatal input problem for one ``process`` call."""


@dataclass(frozen=True)
class TaggerOptions:
    """Configure a tagger.

    Attributes:
        max_depth: Deepest inclusion level scanned; 1 means only the
            requested files.
        track_variables: Whether ``my``/``our``/``local`` variables are tagged.
        extended_output: Whether tag lines carry the exuberant ctags fields.
    """

    max_depth: int = 2
    track_variables: bool = True
    extended_output: bool = False

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be >= 1 (max_depth={self.max_depth})")


class Tagger:
    """Scan Perl files into a tag registry, following ``use``/``require``.

    Calls to :meth:`process` are incremental: files seen before are skipped
    unless a refresh is requested, so one tagger can serve a whole editor
    session and only rewrite the tags file when something changed.
    """

    def __init__(
        self,
        options: TaggerOptions | None = None,
        locator: ModuleLocator | None = None,
        recognizers: Sequence[Recognizer] | None = None,
    ) -> None:
        """Initialize tagger.

        Args:
            options: Tagger configuration; defaults to ``TaggerOptions()``.
            locator: Module resolver used to follow inclusions. The default
                has no search paths and never resolves.
            recognizers: Ordered recognizer pipeline; defaults to
                :func:`default_recognizers`.
        """
        self._options = options or TaggerOptions()
        self._locator = locator if locator is not None else IncludePathLocator()
        if recognizers is None:
            recognizers = default_recognizers(
                track_variables=self._options.track_variables
            )
        self._recognizers = list(recognizers)
        self._queue = DiscoveryQueue(max_depth=self._options.max_depth)
        self.registry = TagRegistry()

    @property
    def files_seen(self) -> set[str]:
        return set(self.registry.seen)

    @property
    def tag_count(self) -> int:
        return self.registry.tag_count

    def tags_for(self, name: str) -> list[Tag]:
        return self.registry.tags_for(name)

    def process(
        self, files: str | Path | Sequence[str | Path], refresh: bool = False
    ) -> int:
        """Scan files and every module they include, up to ``max_depth``.

        Args:
            files: One path or a sequence of paths requested directly.
            refresh: Rescan requested files even if already seen. Included
                modules are never refreshed.

        Returns:
            Number of files scanned by this call.

        Raises:
            TagsInputError: If no files are given or a file cannot be read.
                The remaining queued files are dropped.
        """
        if isinstance(files, (str, Path)):
            files = [files]
        if not files:
            raise TagsInputError("No files passed to process")

        for file in files:
            self._queue.enqueue(str(file), depth=1, refresh=refresh)

        scanned = 0
        try:
            entry = self._queue.dequeue()
            while entry is not None:
                if self._process_entry(entry):
                    scanned += 1
                entry = self._queue.dequeue()
        except TagsInputError:
            self._queue.clear()
            raise
        return scanned

    def render(self) -> str:
        """Return the ctags text for all registered tags."""
        return self.registry.render()

    def write(self, path: str | Path) -> bool:
        """Write the ctags file if tags changed or the file is missing.

        Args:
            path: Target tags file.

        Returns:
            True when the file was written.

        Raises:
            OSError: If the file cannot be written.
        """
        target = Path(path)
        if not self.registry.dirty and target.exists():
            logger.debug(f"Tags unchanged; skipping write (path={target})")
            return False
        target.write_text(self.render(), encoding="utf-8", errors="surrogateescape")
        self.registry.dirty = False
        logger.debug(f"Wrote tags file (path={target} tags={self.tag_count})")
        return True

    def _process_entry(self, entry: QueueEntry) -> bool:
        file = str(Path(entry.file).resolve())
        if not self.registry.should_scan(file, refresh=entry.refresh):
            logger.debug(f"Skipping already seen file (file={file})")
            return False

        context = ScanContext(file=file, depth=entry.depth)
        try:
            handle = open(file, encoding="utf-8", errors="surrogateescape")
        except OSError as exc:
            raise TagsInputError(f"Couldn't open file {file}: {exc}") from exc
        with handle:
            self.registry.begin_file(file)
            logger.debug(f"Scanning file (file={file} depth={entry.depth})")
            try:
                for line_number, raw_line in enumerate(handle, start=1):
                    self._scan_line(raw_line.rstrip("\r\n"), line_number, context)
            except OSError as exc:
                self.registry.abandon_file(file)
                raise TagsInputError(f"Couldn't read file {file}: {exc}") from exc
        return True

    def _scan_line(self, raw_line: str, line_number: int, context: ScanContext) -> None:
        statement = normalize_statement(raw_line)
        for recognizer in self._recognizers:
            results = recognizer.recognize(statement, raw_line, line_number, context)
            self._register(results, context)

    def _register(self, results: list[RecognizerResult], context: ScanContext) -> None:
        for result in results:
            if isinstance(result, Inclusion):
                self._follow(result, context)
                continue
            tag = apply_scope(result, context, extended=self._options.extended_output)
            self.registry.add(tag)

    def _follow(self, inclusion: Inclusion, context: ScanContext) -> None:
        try:
            path = self._locator.locate(inclusion.module_name)
        except Exception as exc:
            logger.debug(
                f"Module lookup failed (module={inclusion.module_name} error={exc})"
            )
            path = None
        if path is None:
            return
        self._queue.enqueue(str(path), depth=context.depth + 1, refresh=False)
