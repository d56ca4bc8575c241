# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for module path resolution."""

import os
from pathlib import Path

from ptags.locator import IncludePathLocator, module_relative_path


def _write_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_ph5_loc_001_module_relative_path() -> None:
    assert module_relative_path("Foo") == Path("Foo.pm")
    assert module_relative_path("Foo::Bar::Baz") == Path("Foo/Bar/Baz.pm")
    assert module_relative_path("Old'Style") == Path("Old/Style.pm")
    assert module_relative_path("5") is None
    assert module_relative_path("Foo::") is None
    assert module_relative_path("") is None


def test_ph5_loc_002_first_search_path_wins(tmp_path: Path) -> None:
    first = tmp_path / "first"
    second = tmp_path / "second"
    _write_file(first / "Foo" / "Bar.pm", "package Foo::Bar;\n")
    _write_file(second / "Foo" / "Bar.pm", "package Foo::Bar;\n")
    locator = IncludePathLocator(search_paths=[tmp_path / "missing", first, second])

    assert locator.locate("Foo::Bar") == (first / "Foo" / "Bar.pm").resolve()
    assert locator.locate("Foo::Missing") is None
    assert locator.locate("not a module") is None


def test_ph5_loc_003_from_environment_appends_perl5lib(
    tmp_path: Path, monkeypatch
) -> None:
    explicit = tmp_path / "explicit"
    from_env = tmp_path / "env"
    _write_file(from_env / "Env" / "Only.pm", "package Env::Only;\n")
    monkeypatch.setenv("PERL5LIB", os.pathsep.join([str(from_env), ""]))

    locator = IncludePathLocator.from_environment(include_paths=[explicit])
    without_env = IncludePathLocator.from_environment(
        include_paths=[explicit], use_perl5lib=False
    )

    assert locator.search_paths == [explicit, from_env]
    assert locator.locate("Env::Only") == (from_env / "Env" / "Only.pm").resolve()
    assert without_env.locate("Env::Only") is None


def test_ph5_loc_004_default_locator_resolves_nothing() -> None:
    assert IncludePathLocator().locate("strict") is None
