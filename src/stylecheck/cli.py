# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command line entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .config import Config, LinterSettings, load_config
from .errors import ConfigError, UnknownLinterError
from .logging import fail
from .registry import DEFAULT_REGISTRY
from .reporting import render_reports
from .runner import run_configured

app = typer.Typer(help="Check code style with external formatters.", no_args_is_help=True, add_completion=False)


def _apply_overrides(
    config: Config,
    names: list[str],
    *,
    extensions: str | None,
    args: str | None,
    prefix: str | None,
) -> Config:
    linters = dict(config.linters)
    for name in names:
        settings = config.settings_for(name)
        updates: dict[str, object] = {}
        if extensions is not None:
            requested = [item.strip() for item in extensions.split(",") if item.strip()]
            if not requested:
                raise ConfigError(f"--extensions must name at least one extension, got {extensions!r}")
            updates["extensions"] = requested
        if args is not None:
            updates["args"] = args
        if prefix is not None:
            updates["prefix"] = prefix
        linters[name] = LinterSettings.model_validate({**settings.model_dump(), **updates})
    return config.model_copy(update={"linters": linters})


@app.command("lint")
def lint_command(
    root: Annotated[Path, typer.Argument(help="Workspace root.", file_okay=False)] = Path("."),
    linter: Annotated[
        list[str] | None,
        typer.Option("--linter", "-l", help="Linter to run; repeatable. Defaults to configured linters."),
    ] = None,
    extensions: Annotated[str | None, typer.Option(help="Comma separated file extensions.")] = None,
    fix: Annotated[bool, typer.Option("--fix", help="Apply fixes in place.")] = False,
    args: Annotated[str | None, typer.Option("--args", help="Extra formatter arguments.")] = None,
    prefix: Annotated[str | None, typer.Option(help="Command prefix for the formatter.")] = None,
    jobs: Annotated[int | None, typer.Option("--jobs", "-j", min=1, help="Files checked concurrently.")] = None,
    timeout: Annotated[float | None, typer.Option(min=0.1, help="Per-command timeout in seconds.")] = None,
    config_path: Annotated[Path | None, typer.Option("--config", help="Configuration file.")] = None,
    no_emoji: Annotated[bool, typer.Option("--no-emoji", help="Disable emoji output.")] = False,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable coloured output.")] = False,
) -> None:
    """Run linters over ROOT and report code style violations."""

    workspace = root.resolve()
    try:
        config = load_config(workspace, config_path)
        names = list(linter or config.enabled_linters() or [next(iter(DEFAULT_REGISTRY))])
        config = _apply_overrides(config, names, extensions=extensions, args=args, prefix=prefix)
        execution_updates: dict[str, object] = {"auto_fix": fix or config.execution.auto_fix}
        if jobs is not None:
            execution_updates["jobs"] = jobs
        if timeout is not None:
            execution_updates["timeout"] = timeout
        config = config.model_copy(
            update={
                "execution": config.execution.model_copy(update=execution_updates),
                "output": config.output.model_copy(
                    update={
                        "emoji": config.output.emoji and not no_emoji,
                        "color": config.output.color and not no_color,
                    },
                ),
            },
        )
        reports = run_configured(config, workspace, names)
    except (ConfigError, UnknownLinterError) as exc:
        fail(str(exc), use_emoji=not no_emoji, use_color=not no_color)
        raise typer.Exit(code=2) from exc

    render_reports(reports, config.output)
    if not all(report.ok for report in reports):
        raise typer.Exit(code=1)


@app.command("list")
def list_command() -> None:
    """List registered linters."""

    for name in DEFAULT_REGISTRY:
        typer.echo(name)


__all__ = ["app"]
