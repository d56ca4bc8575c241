# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Module name to file path resolution."""

import logging
import os
import re
from pathlib import Path
from typing import Iterable, Protocol

logger = logging.getLogger(__name__)

_MODULE_NAME_RE = re.compile(r"^[A-Za-z_]\w*(?:(?:::|')\w+)*$")


class ModuleLocator(Protocol):
    """Resolve a Perl module name to a source file."""

    def locate(self, module_name: str) -> Path | None:
        """Return an absolute path for ``module_name``.

        Args:
            module_name: Package name such as ``Foo::Bar``.

        Returns:
            Absolute file path, or ``None`` when the module is not found.
            Implementations never raise.
        """


def module_relative_path(module_name: str) -> Path | None:
    """Convert ``Foo::Bar`` (or ``Foo'Bar``) to ``Foo/Bar.pm``.

    Returns:
        Relative path, or ``None`` for names that are not module names.
    """
    if not _MODULE_NAME_RE.match(module_name):
        return None
    parts = re.split(r"::|'", module_name)
    return Path(*parts[:-1], f"{parts[-1]}.pm")


class IncludePathLocator:
    """Search module files below an ordered list of include directories."""

    def __init__(self, search_paths: Iterable[Path | str] = ()) -> None:
        """Initialize locator.

        Args:
            search_paths: Include directories, searched in order.
        """
        self._search_paths = [Path(path) for path in search_paths]

    @classmethod
    def from_environment(
        cls, include_paths: Iterable[Path | str] = (), use_perl5lib: bool = True
    ) -> "IncludePathLocator":
        """Build a locator from explicit paths followed by ``PERL5LIB``.

        Args:
            include_paths: Directories searched first.
            use_perl5lib: Whether to append ``PERL5LIB`` entries.

        Returns:
            Configured locator.
        """
        search_paths = [Path(path) for path in include_paths]
        if use_perl5lib:
            search_paths.extend(
                Path(entry)
                for entry in os.environ.get("PERL5LIB", "").split(os.pathsep)
                if entry
            )
        return cls(search_paths=search_paths)

    @property
    def search_paths(self) -> list[Path]:
        return list(self._search_paths)

    def locate(self, module_name: str) -> Path | None:
        relative_path = module_relative_path(module_name)
        if relative_path is None:
            return None
        for directory in self._search_paths:
            candidate = directory / relative_path
            try:
                if candidate.is_file():
                    return candidate.resolve()
            except OSError as exc:
                logger.debug(
                    f"Skipping unreadable include candidate (path={candidate} error={exc})"
                )
        return None
