# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for source file collection."""

from pathlib import Path

from ptags.sources import collect_source_files


def _write_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_ph5_src_001_directory_expands_to_perl_files(tmp_path: Path) -> None:
    root = tmp_path / "proj"
    _write_file(root / "lib" / "Foo.pm", "package Foo;\n")
    _write_file(root / "bin" / "run.pl", "use Foo;\n")
    _write_file(root / "t" / "basic.t", "use Test::More;\n")
    _write_file(root / "README.md", "docs\n")
    _write_file(root / ".git" / "hooks" / "hook.pl", "1;\n")

    files = collect_source_files([root])

    assert [path.relative_to(root).as_posix() for path in files] == [
        "bin/run.pl",
        "lib/Foo.pm",
        "t/basic.t",
    ]


def test_ph5_src_002_gitignore_rules_are_honoured(tmp_path: Path) -> None:
    root = tmp_path / "proj"
    _write_file(root / ".gitignore", "blib/\n")
    _write_file(root / "lib" / ".gitignore", "Generated.pm\n")
    _write_file(root / "blib" / "lib" / "Foo.pm", "package Foo;\n")
    _write_file(root / "lib" / "Foo.pm", "package Foo;\n")
    _write_file(root / "lib" / "Generated.pm", "package Generated;\n")

    files = collect_source_files([root])

    assert [path.relative_to(root).as_posix() for path in files] == ["lib/Foo.pm"]


def test_ph5_src_003_explicit_files_pass_through_once(tmp_path: Path) -> None:
    script = tmp_path / "script"
    _write_file(script, "#!/usr/bin/perl\n")
    module = tmp_path / "Mod.pm"
    _write_file(module, "package Mod;\n")

    files = collect_source_files([script, module, tmp_path])

    assert files == [script, module]


def test_ph5_src_004_nested_gitignore_patterns_are_relative_to_their_directory(
    tmp_path: Path,
) -> None:
    root = tmp_path / "proj"
    _write_file(root / "lib" / ".gitignore", "/Local.pm\n")
    _write_file(root / "lib" / "Local.pm", "package Local;\n")
    _write_file(root / "lib" / "Sub" / "Local.pm", "package Sub::Local;\n")
    _write_file(root / "Local.pm", "package Local;\n")

    files = collect_source_files([root])

    assert [path.relative_to(root).as_posix() for path in files] == [
        "Local.pm",
        "lib/Sub/Local.pm",
    ]
