# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run external formatters and report their changes as line-ranged violations."""

from __future__ import annotations

from .adapters import ClangFormat, LinterAdapter
from .annotations import aggregate_result, build_violations
from .diffing import diff_lines
from .errors import ConfigError, DependencyMissingError, StylecheckError, UnknownLinterError
from .models import DiffHunk, FileChanges, HunkKind, LintEnvelope, LintResult, Violation
from .registry import DEFAULT_REGISTRY, LinterRegistry, register_linter

__all__ = [
    "ClangFormat",
    "ConfigError",
    "DEFAULT_REGISTRY",
    "DependencyMissingError",
    "DiffHunk",
    "FileChanges",
    "HunkKind",
    "LintEnvelope",
    "LintResult",
    "LinterAdapter",
    "LinterRegistry",
    "StylecheckError",
    "UnknownLinterError",
    "Violation",
    "aggregate_result",
    "build_violations",
    "diff_lines",
    "register_linter",
]
