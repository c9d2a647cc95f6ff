# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Data models exchanged between linter adapters and their callers."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .severity import Severity


class HunkKind(str, Enum):
    """Classify a contiguous run of lines produced by the line diff."""

    UNCHANGED = "unchanged"
    REMOVED = "removed"
    ADDED = "added"


class DiffHunk(BaseModel):
    """One contiguous run of a line diff.

    ``line_count`` counts original-file lines for unchanged and removed hunks
    and reformatted-output lines for added hunks.
    """

    model_config = ConfigDict(frozen=True)

    kind: HunkKind
    line_count: int = Field(ge=0)
    text: str

    @property
    def is_change(self) -> bool:
        """Return ``True`` for removed and added hunks."""

        return self.kind is not HunkKind.UNCHANGED


class FileChanges(BaseModel):
    """Hunk sequence computed for a single file, keyed by its relative path."""

    model_config = ConfigDict(frozen=True)

    file: str
    changes: tuple[DiffHunk, ...] = Field(default_factory=tuple)


class LintEnvelope(BaseModel):
    """Serialisable output of a lint run handed to ``parse_output``.

    ``stderr`` aggregates execution errors reported for individual files (check
    mode) or the formatter's stderr (fix mode).
    """

    model_config = ConfigDict(frozen=True)

    status: int = 0
    payload: tuple[FileChanges, ...] = Field(default_factory=tuple)
    stderr: str = ""

    def to_json(self) -> str:
        """Serialise the envelope to JSON text without losing hunk content."""

        return self.model_dump_json()

    @classmethod
    def from_json(cls, text: str) -> LintEnvelope:
        """Restore an envelope previously produced by :meth:`to_json`."""

        return cls.model_validate_json(text)


class Violation(BaseModel):
    """Code style finding covering an inclusive, 1-based original line range."""

    model_config = ConfigDict(frozen=True)

    path: str
    first_line: int = Field(ge=1)
    last_line: int = Field(ge=1)
    message: str

    @model_validator(mode="after")
    def _check_range(self) -> Violation:
        if self.last_line < self.first_line:
            raise ValueError("last_line must not precede first_line")
        return self

    @property
    def location(self) -> str:
        """Return ``path:first-last`` (or ``path:line`` for single-line spans)."""

        if self.first_line == self.last_line:
            return f"{self.path}:{self.first_line}"
        return f"{self.path}:{self.first_line}-{self.last_line}"


class LintResult(BaseModel):
    """Parsed outcome of a linter run split by severity."""

    model_config = ConfigDict(frozen=True)

    is_success: bool
    warning: tuple[Violation, ...] = Field(default_factory=tuple)
    error: tuple[Violation, ...] = Field(default_factory=tuple)

    def by_severity(self, severity: Severity) -> tuple[Violation, ...]:
        """Return the violations recorded at ``severity``."""

        return self.error if severity is Severity.ERROR else self.warning

    @property
    def violations(self) -> tuple[Violation, ...]:
        """Return errors followed by warnings."""

        return (*self.error, *self.warning)

    def summary(self, linter_name: str) -> str:
        """Return a one-line description of the result for ``linter_name``.

        Args:
            linter_name: Adapter identifier mentioned in the summary.

        Returns:
            str: Human readable summary counting errors and warnings.
        """

        errors = len(self.error)
        warnings = len(self.warning)
        if errors and warnings:
            return f"Found {errors} errors and {warnings} warnings with {linter_name}"
        if errors:
            return f"Found {errors} errors with {linter_name}"
        if warnings:
            return f"Found {warnings} warnings with {linter_name}"
        return f"No code style issues found with {linter_name}"


__all__ = ["DiffHunk", "FileChanges", "HunkKind", "LintEnvelope", "LintResult", "Violation"]
