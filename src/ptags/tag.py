# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Tag records and recognizer result types."""

from dataclasses import dataclass
from typing import Literal

TagKind = Literal["package", "subroutine", "variable"]

KIND_LETTERS: dict[str, str] = {
    "package": "p",
    "subroutine": "s",
    "variable": "v",
}


class TagInvariantError(RuntimeError):
    """Represent a tag built or rendered without its required fields."""


def escape_pattern(raw_line: str) -> str:
    """Escape one source line for a ``/^...$/`` search pattern.

    Args:
        raw_line: Source line, possibly with its line terminator.

    Returns:
        Single-line text with backslashes and slashes escaped.
    """
    line = raw_line.rstrip("\r\n")
    return line.replace("\\", "\\\\").replace("/", "\\/")


def unescape_pattern(source_line: str) -> str:
    """Reverse :func:`escape_pattern`."""
    chars: list[str] = []
    index = 0
    while index < len(source_line):
        char = source_line[index]
        if char == "\\" and index + 1 < len(source_line):
            chars.append(source_line[index + 1])
            index += 2
            continue
        chars.append(char)
        index += 1
    return "".join(chars)


@dataclass(frozen=True)
class Tag:
    """Represent one discovered symbol.

    Attributes:
        name: Symbol identifier.
        kind: Symbol category.
        file: Absolute path of the declaring file.
        source_line: Escaped declaration line used in the search pattern.
        line_number: Declaration line in source (1-based).
        scope: Enclosing package name; empty when none.
        is_file_scoped: Whether the symbol is only visible inside its file.
        extended: Whether ``render`` appends the extension fields.
    """

    name: str
    kind: TagKind
    file: str
    source_line: str
    line_number: int
    scope: str = ""
    is_file_scoped: bool = False
    extended: bool = False

    def __post_init__(self) -> None:
        _check_required(self)

    @classmethod
    def from_line(
        cls,
        name: str,
        kind: TagKind,
        file: str,
        raw_line: str,
        line_number: int,
    ) -> "Tag":
        """Build a tag from an unescaped source line.

        Args:
            name: Symbol identifier.
            kind: Symbol category.
            file: Absolute path of the declaring file.
            raw_line: Source line as read from the file.
            line_number: Declaration line in source (1-based).

        Returns:
            New tag with an escaped ``source_line``.

        Raises:
            TagInvariantError: If a required field is empty.
        """
        return cls(
            name=name,
            kind=kind,
            file=file,
            source_line=escape_pattern(raw_line),
            line_number=line_number,
        )

    def render(self) -> str:
        """Render the tag as one ctags line.

        Returns:
            Tab separated tag line without a trailing newline.
        """
        _check_required(self)
        tagline = f"{self.name}\t{self.file}\t/^{self.source_line}$/"
        if self.extended:
            letter = KIND_LETTERS.get(self.kind, self.kind[:1])
            tagline += f';"\t{letter}\tline:{self.line_number}'
            if self.is_file_scoped:
                tagline += "\tfile:"
            if self.scope:
                tagline += f"\tclass:{self.scope}"
        return tagline


@dataclass(frozen=True)
class Inclusion:
    """Represent a ``use``/``require`` target to follow; never stored as a tag."""

    module_name: str


RecognizerResult = Tag | Inclusion


def _check_required(tag: Tag) -> None:
    if not tag.name or not tag.file or not tag.source_line:
        raise TagInvariantError(
            f"Tag requires name, file and source line (name={tag.name!r} file={tag.file!r})"
        )
    if tag.line_number < 1:
        raise TagInvariantError(
            f"Tag line number must be >= 1 (name={tag.name} line_number={tag.line_number})"
        )
