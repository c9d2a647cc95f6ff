# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""clang-format adapter reporting formatting differences as line-ranged violations.

See https://clang.llvm.org/docs/ClangFormat.html for the formatter itself.
"""

from __future__ import annotations

import shlex
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import ClassVar, Final

from ..annotations import aggregate_result
from ..config import OutputConfig
from ..diffing import diff_lines, has_changes
from ..discovery import discover_files
from ..errors import DependencyMissingError
from ..logging import warn
from ..models import DiffHunk, FileChanges, LintEnvelope, LintResult
from ..process import (
    CommandOptions,
    RunnerCallable,
    SubprocessExecutionError,
    find_executable,
    run_command,
)

CLANG_FORMAT_EXECUTABLE: Final[str] = "clang-format"
FIX_FLAG: Final[str] = "-i"


def _decode(stream: str | bytes | None) -> str:
    """Return captured output as text without translating line endings."""

    if stream is None:
        return ""
    if isinstance(stream, bytes):
        return stream.decode("utf-8", errors="replace")
    return stream


def _read_source(path: Path) -> str:
    return path.read_bytes().decode("utf-8", errors="replace")


@dataclass(frozen=True, slots=True)
class _FileCheck:
    """Outcome of checking one file."""

    file: str
    changes: tuple[DiffHunk, ...] = ()
    error: str | None = None
    stderr: str = ""


@dataclass(frozen=True, slots=True)
class ClangFormat:
    """Run clang-format and diff its output against the files on disk.

    Attributes:
        args: Extra arguments passed to every clang-format invocation.
        prefix: Command prefix such as a launcher (``"xcrun"``), split shell-style.
        jobs: Maximum number of files checked concurrently.
        timeout: Per-invocation timeout in seconds.
        output: Console presentation settings for progress messages.
        runner: Command runner, replaceable for testing.
    """

    name: ClassVar[str] = "clang_format"
    default_extensions: ClassVar[tuple[str, ...]] = ("c", "cc", "cpp", "h", "hpp", "m", "mm")

    args: tuple[str, ...] = ()
    prefix: str = ""
    jobs: int = 1
    timeout: float | None = None
    output: OutputConfig = field(default_factory=OutputConfig)
    runner: RunnerCallable = run_command

    def verify_setup(self, root: Path) -> None:
        """Raise :class:`DependencyMissingError` when a required program is missing.

        clang-format must always be on ``PATH``; a command prefix adds its own
        program to the check.
        """

        required = [CLANG_FORMAT_EXECUTABLE]
        if self.prefix.strip():
            required.insert(0, self._prefix_args()[0])
        for executable in required:
            if find_executable(executable) is None:
                raise DependencyMissingError(self.name, executable)

    def lint(self, root: Path, extensions: Sequence[str], fix: bool = False) -> LintEnvelope:
        """Check (or fix) every file under ``root`` with one of ``extensions``.

        Args:
            root: Directory to lint.
            extensions: Non-empty list of file extensions.
            fix: Rewrite files in place with a single clang-format invocation.

        Returns:
            LintEnvelope: Per-file hunks in check mode, raw status in fix mode.
        """

        files = discover_files(root, extensions)
        if fix:
            return self._apply_fixes(root, files)
        return self._check_files(root, files)

    def parse_output(self, root: Path, envelope: LintEnvelope) -> LintResult:
        """Build violations from the hunks carried by ``envelope``."""

        return aggregate_result(envelope)

    def _prefix_args(self) -> list[str]:
        return shlex.split(self.prefix)

    def _command(self, *extra: str) -> list[str]:
        return [*self._prefix_args(), CLANG_FORMAT_EXECUTABLE, *extra]

    def _options(self, root: Path) -> CommandOptions:
        return CommandOptions(
            cwd=root,
            check=False,
            capture_output=True,
            text=False,
            timeout=self.timeout,
            discard_stdin=True,
        )

    def _apply_fixes(self, root: Path, files: Sequence[str]) -> LintEnvelope:
        if not files:
            return LintEnvelope(status=0)
        command = self._command(FIX_FLAG, *self.args, *files)
        try:
            completed = self.runner(command, options=self._options(root))
        except (OSError, ValueError, SubprocessExecutionError) as exc:
            self._report(f"Unable to run {shlex.join(command)}: {exc}")
            return LintEnvelope(status=1, stderr=str(exc))
        return LintEnvelope(status=completed.returncode, stderr=_decode(completed.stderr))

    def _check_files(self, root: Path, files: Sequence[str]) -> LintEnvelope:
        check = partial(self._check_file, root)
        if self.jobs > 1 and len(files) > 1:
            with ThreadPoolExecutor(max_workers=min(self.jobs, len(files))) as executor:
                outcomes = list(executor.map(check, files))
        else:
            outcomes = [check(file) for file in files]

        payload = tuple(FileChanges(file=item.file, changes=item.changes) for item in outcomes if item.changes)
        errors = [item.error for item in outcomes if item.error]
        stderr_parts = [part for item in outcomes for part in (item.error, item.stderr) if part]
        status = 1 if payload or errors else 0
        return LintEnvelope(status=status, payload=payload, stderr="\n".join(stderr_parts))

    def _check_file(self, root: Path, file: str) -> _FileCheck:
        command = self._command(*self.args, file)
        try:
            completed = self.runner(command, options=self._options(root))
        except (OSError, ValueError, SubprocessExecutionError) as exc:
            return self._failed(file, f"unable to run {shlex.join(command)}: {exc}")
        stderr = _decode(completed.stderr).strip()
        if completed.returncode != 0:
            return self._failed(file, f"{CLANG_FORMAT_EXECUTABLE} exited with status {completed.returncode}: {stderr}")
        try:
            original = _read_source(root / file)
        except OSError as exc:
            return self._failed(file, f"unable to read file: {exc}")
        hunks = diff_lines(original, _decode(completed.stdout))
        changes = tuple(hunks) if has_changes(hunks) else ()
        return _FileCheck(file=file, changes=changes, stderr=stderr)

    def _failed(self, file: str, reason: str) -> _FileCheck:
        message = f"{file}: {reason}"
        self._report(message)
        return _FileCheck(file=file, error=message)

    def _report(self, message: str) -> None:
        warn(message, use_emoji=self.output.emoji, use_color=self.output.color)


__all__ = ["ClangFormat"]
