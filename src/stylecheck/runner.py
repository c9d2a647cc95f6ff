# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Drive a single linter through setup verification, linting and parsing."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .adapters.base import LinterAdapter
from .config import Config, LinterSettings, OutputConfig
from .errors import DependencyMissingError
from .logging import fail, info, ok, warn
from .models import LintEnvelope, LintResult
from .registry import DEFAULT_REGISTRY, LinterRegistry


@dataclass(frozen=True, slots=True)
class LinterReport:
    """Outcome of running one linter."""

    name: str
    result: LintResult
    summary: str
    envelope: LintEnvelope | None = None
    setup_error: str | None = None

    @property
    def ok(self) -> bool:
        """Return ``True`` when setup succeeded and no violations were found."""

        return self.setup_error is None and self.result.is_success


def run_linter(
    adapter: LinterAdapter,
    settings: LinterSettings,
    root: Path,
    *,
    fix: bool = False,
    output: OutputConfig | None = None,
) -> LinterReport:
    """Verify, run and parse ``adapter`` for the files under ``root``.

    A missing dependency aborts only this linter and is reported on the
    returned :class:`LinterReport`.

    Args:
        adapter: Linter implementation to run.
        settings: Extensions and working directory for the linter.
        root: Workspace root; ``settings.directory`` is resolved against it.
        fix: Apply fixes instead of reporting violations.
        output: Console presentation settings.

    Returns:
        LinterReport: Parsed result together with its summary line.
    """

    out = output or OutputConfig()
    lint_dir = settings.directory if settings.directory.is_absolute() else root / settings.directory
    extensions = list(settings.extensions or adapter.default_extensions)

    info(f"Verifying setup for {adapter.name}…", use_emoji=out.emoji, use_color=out.color)
    try:
        adapter.verify_setup(lint_dir)
    except DependencyMissingError as exc:
        fail(str(exc), use_emoji=out.emoji, use_color=out.color)
        return LinterReport(
            name=adapter.name,
            result=LintResult(is_success=False),
            summary=f"Skipped {adapter.name}: {exc}",
            setup_error=str(exc),
        )
    ok(f"Verified {adapter.name} setup", use_emoji=out.emoji, use_color=out.color)

    action = "Linting and auto-fixing" if fix else "Linting"
    info(
        f"{action} files in {lint_dir} with {adapter.name} (extensions: {', '.join(extensions)})…",
        use_emoji=out.emoji,
        use_color=out.color,
    )
    envelope = adapter.lint(lint_dir, extensions, fix)
    result = adapter.parse_output(root, envelope)
    summary = result.summary(adapter.name)
    if result.is_success:
        ok(summary, use_emoji=out.emoji, use_color=out.color)
    else:
        if not result.violations:
            summary = f"{adapter.name} failed with exit status {envelope.status}"
        warn(summary, use_emoji=out.emoji, use_color=out.color)
    return LinterReport(name=adapter.name, result=result, summary=summary, envelope=envelope)


def run_configured(
    config: Config,
    root: Path,
    names: list[str],
    *,
    registry: LinterRegistry | None = None,
) -> list[LinterReport]:
    """Run each linter in ``names`` with its configured settings.

    Raises:
        UnknownLinterError: If a name is not registered.
    """

    active = registry if registry is not None else DEFAULT_REGISTRY
    factories = [(name, active[name]) for name in names]
    reports: list[LinterReport] = []
    for name, factory in factories:
        default_extensions = getattr(factory, "default_extensions", ())
        settings = config.settings_for(name, default_extensions)
        adapter = active.create(
            name,
            settings,
            jobs=config.execution.jobs,
            timeout=config.execution.timeout,
            output=config.output,
        )
        reports.append(run_linter(adapter, settings, root, fix=config.execution.auto_fix, output=config.output))
    return reports


__all__ = ["LinterReport", "run_configured", "run_linter"]
