# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Tag storage, file visitation ledger and ctags serialization."""

import logging

from ptags.tag import Tag

logger = logging.getLogger(__name__)


class TagRegistry:
    """Store tags by name and file, and track which files were visited.

    Files get an ``order`` value the first time they are visited. The value
    survives refreshes, so tags from the files opened first keep sorting
    first among tags sharing a name.
    """

    def __init__(self) -> None:
        self.tags: dict[str, dict[str, list[Tag]]] = {}
        self.order: dict[str, int] = {}
        self.seen: set[str] = set()
        self.dirty = False
        self._next_order = 0

    def should_scan(self, file: str, refresh: bool) -> bool:
        """Check whether a file needs scanning.

        Args:
            file: Absolute file path.
            refresh: Whether a rescan of a seen file was requested.

        Returns:
            False when the file was already seen and no refresh was requested.
        """
        return refresh or file not in self.seen

    def begin_file(self, file: str) -> None:
        """Start tracking a file scan, purging tags from any earlier scan.

        Args:
            file: Absolute file path.
        """
        if file in self.seen:
            self.purge_file(file)
        else:
            self.seen.add(file)
        if file not in self.order:
            self.order[file] = self._next_order
            self._next_order += 1
        self.dirty = True

    def purge_file(self, file: str) -> None:
        """Delete all tags of one file while keeping its ``order``.

        Args:
            file: Absolute file path.
        """
        removed = 0
        for name in list(self.tags):
            files = self.tags[name]
            removed += len(files.pop(file, []))
            if not files:
                del self.tags[name]
        if removed:
            self.dirty = True
        logger.debug(f"Purged file tags (file={file} removed={removed})")

    def abandon_file(self, file: str) -> None:
        """Forget a scan that failed part way, so the next request rescans it.

        Args:
            file: Absolute file path.
        """
        self.purge_file(file)
        self.seen.discard(file)

    def add(self, tag: Tag) -> None:
        """Register one tag under its name and file."""
        self.tags.setdefault(tag.name, {}).setdefault(tag.file, []).append(tag)
        self.dirty = True

    def tags_for(self, name: str) -> list[Tag]:
        """Return tags for one name, ordered by file visitation."""
        files = self.tags.get(name, {})
        ordered: list[Tag] = []
        for file in sorted(files, key=lambda item: self.order[item]):
            ordered.extend(files[file])
        return ordered

    def all_tags(self) -> list[Tag]:
        """Return every tag in serialization order."""
        ordered: list[Tag] = []
        for name in sorted(self.tags):
            ordered.extend(self.tags_for(name))
        return ordered

    @property
    def tag_count(self) -> int:
        return sum(len(tags) for files in self.tags.values() for tags in files.values())

    def render(self) -> str:
        """Render all tags as ctags text.

        Returns:
            One line per tag, names sorted lexicographically; empty when no
            tags are registered.
        """
        lines = [tag.render() for tag in self.all_tags()]
        if not lines:
            return ""
        return "\n".join(lines) + "\n"
