# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Line recognizers for Perl declarations and inclusion statements."""

import re
from typing import Protocol

from ptags.context import ScanContext
from ptags.tag import Inclusion, RecognizerResult, Tag

_PACKAGE_RE = re.compile(r"^package\s+((?:\w|:)+)")
_SUB_RE = re.compile(r"\bsub\s+(\w+)")
_DECLARATION_RE = re.compile(r"^(?:my|our|local)\b")
_SIGIL_NAME_RE = re.compile(r"[$@%]((?:\w|:)+)")
_INCLUSION_RE = re.compile(r"^(?:use|require)(?:(_ok)\(?\s*|\s+)(.+)")
_QUOTE_PREFIX_RE = re.compile(r"^q[wq]?[!-/:-@\[-`{-~]")
_MODULE_NAME_RE = re.compile(r"(?:\w|:)+")


class Recognizer(Protocol):
    """Line analysis contract shared by all recognizers."""

    def recognize(
        self, statement: str, raw_line: str, line_number: int, context: ScanContext
    ) -> list[RecognizerResult]:
        """Recognize symbols on one line.

        Args:
            statement: Line with comment and surrounding whitespace removed.
            raw_line: Line as read from the file.
            line_number: Line position in the file (1-based).
            context: Scan state of the current file.

        Returns:
            Zero or more tags or inclusion requests.
        """


class PackageRecognizer:
    """Tag ``package Name;`` declarations."""

    def recognize(
        self, statement: str, raw_line: str, line_number: int, context: ScanContext
    ) -> list[RecognizerResult]:
        match = _PACKAGE_RE.match(statement)
        if match is None:
            return []
        return [
            Tag.from_line(
                name=match.group(1),
                kind="package",
                file=context.file,
                raw_line=raw_line,
                line_number=line_number,
            )
        ]


class SubroutineRecognizer:
    """Tag ``sub name`` declarations anywhere in a statement."""

    def recognize(
        self, statement: str, raw_line: str, line_number: int, context: ScanContext
    ) -> list[RecognizerResult]:
        match = _SUB_RE.search(statement)
        if match is None:
            return []
        return [
            Tag.from_line(
                name=match.group(1),
                kind="subroutine",
                file=context.file,
                raw_line=raw_line,
                line_number=line_number,
            )
        ]


class VariableRecognizer:
    """Tag ``my``, ``our`` and ``local`` variable declarations.

    Everything after the first ``=`` is discarded so initializer expressions
    are never mistaken for declarations. Only the declaring line is read; in
    ``my ($x,\\n $y);`` the ``$y`` on the second line is not tagged.
    """

    def __init__(self, follow_continuations: bool = False) -> None:
        """Initialize recognizer.

        Args:
            follow_continuations: Also read the line after a declaration that
                did not end with ``;``.
        """
        self._follow_continuations = follow_continuations

    def recognize(
        self, statement: str, raw_line: str, line_number: int, context: ScanContext
    ) -> list[RecognizerResult]:
        continues = self._follow_continuations and context.declaration_continues
        if not (continues or _DECLARATION_RE.match(statement)):
            context.declaration_continues = False
            return []
        context.declaration_continues = not statement.endswith(";")
        declaration = statement.split("=", 1)[0]
        return [
            Tag.from_line(
                name=name,
                kind="variable",
                file=context.file,
                raw_line=raw_line,
                line_number=line_number,
            )
            for name in _SIGIL_NAME_RE.findall(declaration)
        ]


class InclusionRecognizer:
    """Request recursion into modules named by ``use`` and ``require``.

    ``use_ok``/``require_ok`` from Test::More only name their first argument.
    """

    def recognize(
        self, statement: str, raw_line: str, line_number: int, context: ScanContext
    ) -> list[RecognizerResult]:
        match = _INCLUSION_RE.match(statement)
        if match is None:
            return []
        targets = match.group(2).split()
        if match.group(1):
            targets = targets[:1]
        results: list[RecognizerResult] = []
        for target in targets:
            target = _QUOTE_PREFIX_RE.sub("", target, count=1)
            name_match = _MODULE_NAME_RE.search(target)
            if name_match is not None:
                results.append(Inclusion(module_name=name_match.group(0)))
        return results


def default_recognizers(track_variables: bool = True) -> list[Recognizer]:
    """Build the standard recognizer pipeline in evaluation order.

    Args:
        track_variables: Whether to include the variable recognizer.

    Returns:
        Ordered recognizer list.
    """
    recognizers: list[Recognizer] = []
    if track_variables:
        recognizers.append(VariableRecognizer())
    recognizers.extend(
        [PackageRecognizer(), SubroutineRecognizer(), InclusionRecognizer()]
    )
    return recognizers
