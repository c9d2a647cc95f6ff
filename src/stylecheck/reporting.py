# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console rendering of linter reports."""

from __future__ import annotations

from collections.abc import Sequence

from rich.text import Text

from .config import OutputConfig
from .console import get_console_manager
from .logging import section
from .models import Violation
from .runner import LinterReport
from .severity import Severity

_SEVERITY_STYLES = {Severity.ERROR: "bold red", Severity.WARNING: "bold yellow"}


def format_violation(violation: Violation, severity: Severity, *, color: bool) -> Text:
    """Return a Rich text block describing ``violation``."""

    text = Text()
    text.append(f"{severity.value}: ", style=_SEVERITY_STYLES[severity] if color else None)
    text.append(violation.location, style="bold" if color else None)
    text.append("\n")
    text.append(violation.message.rstrip("\n"))
    return text


def render_reports(reports: Sequence[LinterReport], output: OutputConfig) -> None:
    """Print every violation of ``reports`` followed by the linter summaries."""

    console = get_console_manager().get(color=output.color, emoji=output.emoji)
    for report in reports:
        if not report.result.violations:
            continue
        section(report.name, use_color=output.color)
        for severity in (Severity.ERROR, Severity.WARNING):
            for violation in report.result.by_severity(severity):
                console.print(format_violation(violation, severity, color=output.color))
    section("Summary", use_color=output.color)
    for report in reports:
        console.print(Text(report.summary))


__all__ = ["format_violation", "render_reports"]
