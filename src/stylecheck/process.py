# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution of formatter binaries."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; commands are passed as argument
# lists and ``shell=True`` is never used.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final, Literal, Protocol, runtime_checkable

CommandOverrideValue = Path | Mapping[str, str] | bool | float | int | None
CommandOptionKey = Literal["cwd", "env", "check", "capture_output", "text", "timeout", "discard_stdin"]
CommandOverrideMapping = Mapping[CommandOptionKey, CommandOverrideValue]

_COMMAND_KEYS: Final[frozenset[str]] = frozenset(
    {"cwd", "env", "check", "capture_output", "text", "timeout", "discard_stdin"}
)
TIMEOUT_RETURNCODE: Final[int] = 124


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Immutable command execution options."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    check: bool = True
    capture_output: bool = False
    text: bool = True
    timeout: float | None = None
    discard_stdin: bool = False

    def with_overrides(self, overrides: CommandOverrideMapping) -> CommandOptions:
        """Return a new options instance with ``overrides`` applied.

        Args:
            overrides: Mapping of option names to replacement values.

        Returns:
            CommandOptions: Updated options instance.

        Raises:
            TypeError: If ``overrides`` includes an unknown option name.
            ValueError: When a timeout override is negative.
        """

        unknown = [key for key in overrides if key not in _COMMAND_KEYS]
        if unknown:
            message = ", ".join(sorted(unknown))
            raise TypeError(f"Unknown command option(s): {message}")
        timeout = overrides.get("timeout", self.timeout)
        if isinstance(timeout, (int, float)) and not isinstance(timeout, bool) and timeout < 0:
            raise ValueError("timeout override must be non-negative")
        return replace(self, **dict(overrides))


class SubprocessExecutionError(RuntimeError):
    """Raised when a subprocess exits with a non-zero status while ``check`` is true."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stdout: str | None,
        stderr: str | None,
    ) -> None:
        """Initialise the error with captured subprocess metadata.

        Args:
            command: Normalised command sequence that was executed.
            returncode: Exit status reported by the subprocess.
            stdout: Captured standard output stream.
            stderr: Captured standard error stream.
        """
        super().__init__(
            f"Command '{command[0]}' exited with status {returncode}. stderr: {stderr or '<none>'}",
        )
        self.command = tuple(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


@runtime_checkable
class RunnerCallable(Protocol):
    """Callable protocol for invoking external tool commands."""

    def __call__(
        self,
        args: Sequence[str],
        *,
        options: CommandOptions | None = None,
        overrides: CommandOverrideMapping | None = None,
    ) -> CompletedProcess[str] | CompletedProcess[bytes]:
        """Execute ``args`` returning a completed subprocess.

        The captured streams are bytes when ``options.text`` is false.
        """

        raise NotImplementedError


def find_executable(cmd: str) -> str | None:
    """Locate an executable on ``PATH``."""

    return shutil.which(cmd)


def _ensure_text(value: str | bytes | None) -> str | None:
    """Return ``value`` decoded to text when supplied as ``bytes``."""

    if value is None or isinstance(value, str):
        return value
    return value.decode(errors="ignore")


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Resolve the executable of ``args`` against ``PATH``.

    Args:
        args: Raw command arguments supplied by the caller.

    Returns:
        list[str]: Argument list whose head is an absolute executable path.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
    """

    if not args:
        raise ValueError("subprocess command requires at least one argument")

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = find_executable(head)
    if resolved is None:
        raise FileNotFoundError(f"Executable '{head}' was not found on PATH")
    return [resolved, *rest]


def run_command(
    args: Sequence[str],
    *,
    options: CommandOptions | None = None,
    overrides: CommandOverrideMapping | None = None,
) -> CompletedProcess[str] | CompletedProcess[bytes]:
    """Execute ``args`` after normalising the executable path.

    A timeout never raises: the process is reported with exit status
    :data:`TIMEOUT_RETURNCODE` and a ``Command timed out`` line on stderr.

    Args:
        args: Command and argument sequence to execute.
        options: Base options configuring execution semantics.
        overrides: Keyword overrides applied to a cloned ``options`` instance.

    Returns:
        CompletedProcess: Subprocess execution metadata.

    Raises:
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
        SubprocessExecutionError: When ``check`` is true and the process exits
            with a non-zero status.
    """

    normalized = _normalize_args(args)
    resolved_options = (options or CommandOptions()).with_overrides(overrides or {})

    try:
        completed: CompletedProcess[str] | CompletedProcess[bytes] = subprocess.run(  # nosec B603
            normalized,
            cwd=str(resolved_options.cwd) if resolved_options.cwd is not None else None,
            env=dict(resolved_options.env) if resolved_options.env is not None else None,
            check=False,
            capture_output=resolved_options.capture_output,
            text=resolved_options.text,
            timeout=resolved_options.timeout,
            stdin=subprocess.DEVNULL if resolved_options.discard_stdin else None,
        )
    except subprocess.TimeoutExpired as exc:
        stdout = _ensure_text(exc.stdout) or ""
        stderr = _ensure_text(exc.stderr)
        timeout_value = resolved_options.timeout
        timeout_msg = (
            f"Command timed out after {timeout_value:.1f}s" if timeout_value is not None else "Command timed out"
        )
        completed = subprocess.CompletedProcess(
            args=normalized,
            returncode=TIMEOUT_RETURNCODE,
            stdout=stdout,
            stderr=f"{stderr}\n{timeout_msg}" if stderr else timeout_msg,
        )

    if resolved_options.check and completed.returncode != 0:
        raise SubprocessExecutionError(
            normalized,
            completed.returncode,
            completed.stdout if isinstance(completed.stdout, str) else None,
            completed.stderr if isinstance(completed.stderr, str) else None,
        )

    return completed


__all__ = [
    "CommandOptionKey",
    "CommandOptions",
    "CommandOverrideMapping",
    "RunnerCallable",
    "SubprocessExecutionError",
    "TIMEOUT_RETURNCODE",
    "find_executable",
    "run_command",
]
