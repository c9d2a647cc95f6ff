# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by stylecheck components."""

from __future__ import annotations


class StylecheckError(Exception):
    """Base class for errors raised by stylecheck."""


class DependencyMissingError(StylecheckError):
    """Raised when a linter's external executable cannot be resolved."""

    def __init__(self, linter: str, executable: str) -> None:
        """Record which ``linter`` is missing which ``executable``.

        Args:
            linter: Identifier of the adapter whose setup check failed.
            executable: Program that could not be found on ``PATH``.
        """

        super().__init__(f"{executable} is not installed (required by {linter})")
        self.linter = linter
        self.executable = executable


class ConfigError(StylecheckError):
    """Raised when configuration input is invalid."""


class UnknownLinterError(StylecheckError, KeyError):
    """Raised when a linter identifier is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown linter '{name}'")
        self.name = name

    def __str__(self) -> str:
        return str(self.args[0])


__all__ = ["ConfigError", "DependencyMissingError", "StylecheckError", "UnknownLinterError"]
