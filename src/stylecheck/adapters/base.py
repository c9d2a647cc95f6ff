# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Capability contract implemented by every linter adapter."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from ..models import LintEnvelope, LintResult


@runtime_checkable
class LinterAdapter(Protocol):
    """Protocol describing a formatter or linter integration.

    Adapters are stateless apart from their construction-time settings, so a
    single instance may serve several invocations. ``parse_output`` must not run
    processes and must return equal results for equal inputs.
    """

    @property
    def name(self) -> str:
        """Return the stable identifier used in summaries and the registry."""

        raise NotImplementedError

    @property
    def default_extensions(self) -> Sequence[str]:
        """Return the file extensions linted when none are configured."""

        raise NotImplementedError

    def verify_setup(self, root: Path) -> None:
        """Ensure the external tooling is available.

        Args:
            root: Directory the linter will run in.

        Raises:
            DependencyMissingError: If a required executable is not on ``PATH``.
        """

        raise NotImplementedError

    def lint(self, root: Path, extensions: Sequence[str], fix: bool = False) -> LintEnvelope:
        """Run the tool over files under ``root`` matching ``extensions``.

        Args:
            root: Directory to lint.
            extensions: Non-empty list of file extensions to include.
            fix: Apply fixes in place instead of reporting them.

        Returns:
            LintEnvelope: Serialisable output handed to :meth:`parse_output`.
        """

        raise NotImplementedError

    def parse_output(self, root: Path, envelope: LintEnvelope) -> LintResult:
        """Convert ``envelope`` into violations grouped by severity.

        Args:
            root: Directory in which the linter ran.
            envelope: Output previously returned by :meth:`lint`.

        Returns:
            LintResult: Freshly built result.
        """

        raise NotImplementedError


__all__ = ["LinterAdapter"]
