# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Depth-bounded worklist of files waiting to be scanned."""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueueEntry:
    """Represent one pending file scan.

    Attributes:
        file: Path to scan, as submitted.
        depth: Distance from a directly requested file (1-based).
        refresh: Whether an already seen file is rescanned.
    """

    file: str
    depth: int
    refresh: bool = False


class DiscoveryQueue:
    """Last-in-first-out queue that drops entries deeper than ``max_depth``."""

    def __init__(self, max_depth: int) -> None:
        self._max_depth = max_depth
        self._entries: list[QueueEntry] = []

    def enqueue(self, file: str, depth: int, refresh: bool = False) -> bool:
        """Add a file unless it lies beyond the depth limit.

        Args:
            file: Path to scan.
            depth: Distance from a directly requested file.
            refresh: Whether an already seen file is rescanned.

        Returns:
            True when the entry was queued.
        """
        if depth > self._max_depth:
            logger.debug(
                f"Dropping file beyond depth limit (file={file} depth={depth} max_depth={self._max_depth})"
            )
            return False
        self._entries.append(QueueEntry(file=file, depth=depth, refresh=refresh))
        return True

    def dequeue(self) -> QueueEntry | None:
        """Return the most recently queued entry, or ``None`` when empty."""
        if not self._entries:
            return None
        return self._entries.pop()

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
