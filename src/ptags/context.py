# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Per-file scan state and statement normalization."""

import re
from dataclasses import dataclass, replace

from ptags.tag import Tag

_COMMENT_RE = re.compile(r"(?<!\\)#.*")


@dataclass
class ScanContext:
    """Mutable state threaded through recognizers while one file is scanned.

    Attributes:
        file: Absolute path of the file being scanned.
        depth: Distance from a directly requested file (1-based).
        scope: Current enclosing package; reset for every file.
        has_seen_subroutine: Whether a ``sub`` was registered earlier in the file.
        declaration_continues: Whether the last variable declaration lacked a
            terminating ``;``.
    """

    file: str
    depth: int
    scope: str = ""
    has_seen_subroutine: bool = False
    declaration_continues: bool = False


def normalize_statement(raw_line: str) -> str:
    """Strip a trailing comment and surrounding whitespace from a line.

    Comment detection is naive: a ``#`` inside a string also starts a comment.
    """
    return _COMMENT_RE.sub("", raw_line, count=1).strip()


def apply_scope(tag: Tag, context: ScanContext, extended: bool) -> Tag:
    """Resolve scope-dependent fields of a tag at registration time.

    Package and subroutine registrations also update ``context``. The
    file-scope rules are heuristics carried over from pltags: a subroutine
    outside any package is file-local, and a variable is file-local once a
    package or subroutine has been seen.

    Args:
        tag: Tag as emitted by a recognizer.
        context: Scan state of the file being processed.
        extended: Engine-wide extended output setting.

    Returns:
        Tag with ``scope``, ``is_file_scoped`` and ``extended`` filled in.
    """
    is_file_scoped = tag.is_file_scoped
    if tag.kind == "package":
        context.scope = tag.name
        is_file_scoped = False
    elif tag.kind == "subroutine":
        context.has_seen_subroutine = True
        is_file_scoped = not context.scope
    elif tag.kind == "variable":
        is_file_scoped = bool(context.scope or context.has_seen_subroutine)
    return replace(
        tag,
        scope=tag.scope or context.scope,
        is_file_scoped=is_file_scoped,
        extended=tag.extended or extended,
    )
