# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from subprocess import CompletedProcess

import pytest

from stylecheck.process import CommandOptions


def strip_tabs(source: str) -> str:
    """Stand-in formatter removing every tab character."""

    return source.replace("\t", "")


@dataclass
class FakeFormatter:
    """Command runner imitating clang-format by transforming the named file."""

    transform: Callable[[str], str] = strip_tabs
    failures: dict[str, int] = field(default_factory=dict)
    calls: list[list[str]] = field(default_factory=list)
    options: list[CommandOptions | None] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def __call__(
        self,
        args: Sequence[str],
        *,
        options: CommandOptions | None = None,
        overrides: object = None,
    ) -> CompletedProcess[bytes]:
        with self._lock:
            self.calls.append(list(args))
            self.options.append(options)
        target = args[-1]
        if target in self.failures:
            return CompletedProcess(list(args), self.failures[target], b"", f"cannot format {target}".encode())
        cwd = options.cwd if options is not None and options.cwd is not None else Path()
        source = (cwd / target).read_bytes().decode("utf-8")
        return CompletedProcess(list(args), 0, self.transform(source).encode("utf-8"), b"")


@pytest.fixture
def fake_formatter() -> FakeFormatter:
    """Return a fresh :class:`FakeFormatter`."""
    return FakeFormatter()


@pytest.fixture
def c_project(tmp_path: Path) -> Path:
    """Create a small C project with one badly and one well formatted file."""

    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "bad.c").write_text("\t#include <stdio.h>\n\nint x;\n", encoding="utf-8")
    (tmp_path / "src" / "good.c").write_text("#include <stdlib.h>\n", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("\tnot C\n", encoding="utf-8")
    return tmp_path
