# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the clang-format adapter."""

from __future__ import annotations

import time
from pathlib import Path

import pytest

from stylecheck.adapters import ClangFormat, LinterAdapter
from stylecheck.adapters import clang_format as clang_format_module
from stylecheck.config import OutputConfig
from stylecheck.errors import DependencyMissingError
from stylecheck.models import HunkKind, LintEnvelope
from stylecheck.process import SubprocessExecutionError

from .conftest import FakeFormatter

_QUIET = OutputConfig(emoji=False, color=False)


def _adapter(runner: FakeFormatter, **options: object) -> ClangFormat:
    return ClangFormat(runner=runner, output=_QUIET, **options)


def test_clang_format_satisfies_adapter_protocol(fake_formatter: FakeFormatter) -> None:
    adapter = _adapter(fake_formatter)

    assert isinstance(adapter, LinterAdapter)
    assert adapter.name == "clang_format"


def test_lint_reports_only_files_with_differences(c_project: Path, fake_formatter: FakeFormatter) -> None:
    adapter = _adapter(fake_formatter)

    envelope = adapter.lint(c_project, ["c"])

    assert envelope.status == 1
    assert [entry.file for entry in envelope.payload] == ["src/bad.c"]
    assert envelope.payload[0].changes[0].kind is HunkKind.REMOVED
    assert sorted(call[-1] for call in fake_formatter.calls) == ["src/bad.c", "src/good.c"]

    result = adapter.parse_output(c_project, envelope)

    assert not result.is_success
    assert result.warning == ()
    assert [(v.path, v.first_line, v.last_line) for v in result.error] == [("src/bad.c", 1, 1)]
    assert result.error[0].message == "- ▸\t#include <stdio.h>\n***\n+ #include <stdio.h>"


def test_lint_clean_tree_succeeds(tmp_path: Path, fake_formatter: FakeFormatter) -> None:
    (tmp_path / "main.c").write_text("int main(void) { return 0; }\n", encoding="utf-8")
    adapter = _adapter(fake_formatter)

    envelope = adapter.lint(tmp_path, ["c", "h"])
    result = adapter.parse_output(tmp_path, envelope)

    assert envelope == LintEnvelope(status=0)
    assert result.is_success
    assert result.error == ()
    assert result.warning == ()


def test_lint_runs_formatter_in_root_with_arguments(c_project: Path, fake_formatter: FakeFormatter) -> None:
    adapter = _adapter(fake_formatter, args=("--style=LLVM",), prefix="xcrun --sdk macosx", timeout=5.0)

    adapter.lint(c_project, ["c"])

    assert ["xcrun", "--sdk", "macosx", "clang-format", "--style=LLVM", "src/bad.c"] in fake_formatter.calls
    for options in fake_formatter.options:
        assert options is not None
        assert options.cwd == c_project
        assert options.check is False
        assert options.timeout == 5.0


def test_lint_requires_extensions(c_project: Path, fake_formatter: FakeFormatter) -> None:
    with pytest.raises(ValueError):
        _adapter(fake_formatter).lint(c_project, [])


def test_failed_file_does_not_hide_other_violations(c_project: Path) -> None:
    (c_project / "src" / "broken.c").write_text("int x\n", encoding="utf-8")
    runner = FakeFormatter(failures={"src/broken.c": 1})

    envelope = _adapter(runner).lint(c_project, ["c"])

    assert envelope.status == 1
    assert [entry.file for entry in envelope.payload] == ["src/bad.c"]
    assert "src/broken.c" in envelope.stderr
    assert "cannot format src/broken.c" in envelope.stderr


def test_execution_error_alone_marks_run_failed(tmp_path: Path) -> None:
    (tmp_path / "ok.c").write_text("int x;\n", encoding="utf-8")
    runner = FakeFormatter(failures={"ok.c": 139})
    adapter = _adapter(runner)

    envelope = adapter.lint(tmp_path, ["c"])
    result = adapter.parse_output(tmp_path, envelope)

    assert envelope.status == 1
    assert envelope.payload == ()
    assert not result.is_success
    assert result.error == ()


def test_missing_executable_is_recorded_per_file(tmp_path: Path) -> None:
    (tmp_path / "a.c").write_text("\tint a;\n", encoding="utf-8")

    def runner(args, *, options=None, overrides=None):
        raise FileNotFoundError("Executable 'clang-format' was not found on PATH")

    envelope = ClangFormat(runner=runner, output=_QUIET).lint(tmp_path, ["c"])

    assert envelope.status == 1
    assert envelope.payload == ()
    assert "was not found on PATH" in envelope.stderr


def test_parallel_check_keeps_discovery_order(tmp_path: Path) -> None:
    for name in ("a.c", "b.c", "c.c", "d.c"):
        (tmp_path / name).write_text(f"\tint {name[0]};\n", encoding="utf-8")

    def slow_for_early_files(source: str) -> str:
        if "int a;" in source:
            time.sleep(0.2)
        elif "int b;" in source:
            time.sleep(0.1)
        return source.replace("\t", "")

    adapter = _adapter(FakeFormatter(transform=slow_for_early_files), jobs=4)

    envelope = adapter.lint(tmp_path, ["c"])

    assert [entry.file for entry in envelope.payload] == ["a.c", "b.c", "c.c", "d.c"]


def test_fix_mode_runs_single_in_place_invocation(c_project: Path, fake_formatter: FakeFormatter) -> None:
    adapter = _adapter(fake_formatter, args=("--style=LLVM",))

    envelope = adapter.lint(c_project, ["c"], fix=True)

    assert fake_formatter.calls == [["clang-format", "-i", "--style=LLVM", "src/bad.c", "src/good.c"]]
    assert envelope.status == 0
    assert envelope.payload == ()
    assert adapter.parse_output(c_project, envelope).is_success


def test_fix_mode_propagates_status_and_stderr(c_project: Path) -> None:
    runner = FakeFormatter(failures={"src/good.c": 2})

    envelope = _adapter(runner).lint(c_project, ["c"], fix=True)
    result = _adapter(runner).parse_output(c_project, envelope)

    assert envelope.status == 2
    assert envelope.stderr == "cannot format src/good.c"
    assert not result.is_success
    assert result.error == ()


def test_fix_mode_without_files_skips_formatter(tmp_path: Path, fake_formatter: FakeFormatter) -> None:
    envelope = _adapter(fake_formatter).lint(tmp_path, ["c"], fix=True)

    assert envelope.status == 0
    assert fake_formatter.calls == []


def test_envelope_json_round_trip_preserves_hunks(c_project: Path, fake_formatter: FakeFormatter) -> None:
    (c_project / "src" / "crlf.c").write_bytes(b"\tint y;\r\nint z;\r\n")
    adapter = _adapter(fake_formatter)
    envelope = adapter.lint(c_project, ["c"])

    restored = LintEnvelope.from_json(envelope.to_json())

    assert restored == envelope
    assert restored.payload[1].changes[0].text == "\tint y;\r\n"
    assert adapter.parse_output(c_project, restored) == adapter.parse_output(c_project, envelope)


def test_verify_setup_requires_clang_format(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(clang_format_module, "find_executable", lambda name: None)

    with pytest.raises(DependencyMissingError) as excinfo:
        ClangFormat().verify_setup(tmp_path)

    assert excinfo.value.executable == "clang-format"
    assert excinfo.value.linter == "clang_format"


def test_verify_setup_checks_prefix_launcher(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    seen: list[str] = []

    def fake_which(name: str) -> str:
        seen.append(name)
        return f"/usr/bin/{name}"

    monkeypatch.setattr(clang_format_module, "find_executable", fake_which)

    ClangFormat(prefix="xcrun --sdk macosx").verify_setup(tmp_path)

    assert seen == ["xcrun", "clang-format"]


def test_verify_setup_requires_clang_format_behind_prefix(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(
        clang_format_module,
        "find_executable",
        lambda name: None if name == "clang-format" else f"/usr/bin/{name}",
    )

    with pytest.raises(DependencyMissingError) as excinfo:
        ClangFormat(prefix="nice -n 5").verify_setup(tmp_path)

    assert excinfo.value.executable == "clang-format"


def test_verify_setup_reports_missing_prefix_launcher(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(
        clang_format_module,
        "find_executable",
        lambda name: None if name == "xcrun" else f"/usr/bin/{name}",
    )

    with pytest.raises(DependencyMissingError) as excinfo:
        ClangFormat(prefix="xcrun").verify_setup(tmp_path)

    assert excinfo.value.executable == "xcrun"


def test_runner_execution_error_is_isolated_to_its_file(tmp_path: Path) -> None:
    (tmp_path / "a.c").write_text("int a;\n", encoding="utf-8")
    (tmp_path / "b.c").write_text("\tint b;\n", encoding="utf-8")
    formatter = FakeFormatter()

    def runner(args, *, options=None, overrides=None):
        if args[-1] == "a.c":
            raise SubprocessExecutionError(args, 1, None, "boom")
        return formatter(args, options=options, overrides=overrides)

    for jobs in (1, 2):
        envelope = ClangFormat(runner=runner, output=_QUIET, jobs=jobs).lint(tmp_path, ["c"])

        assert envelope.status == 1
        assert [entry.file for entry in envelope.payload] == ["b.c"]
        assert "a.c: unable to run" in envelope.stderr
        assert "boom" in envelope.stderr


def test_fix_mode_runner_execution_error_becomes_failed_status(c_project: Path) -> None:
    def runner(args, *, options=None, overrides=None):
        raise SubprocessExecutionError(args, 3, None, "boom")

    envelope = ClangFormat(runner=runner, output=_QUIET).lint(c_project, ["c"], fix=True)

    assert envelope.status == 1
    assert "boom" in envelope.stderr
