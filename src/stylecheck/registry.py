# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Linter registry providing lookup by identifier."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping

from .adapters.base import LinterAdapter
from .adapters.clang_format import ClangFormat
from .config import LinterSettings
from .errors import UnknownLinterError

LinterFactory = Callable[..., LinterAdapter]


class LinterRegistry(Mapping[str, LinterFactory]):
    """Central registry mapping linter identifiers to adapter factories.

    ``LinterRegistry`` behaves like a read-only mapping whose keys are linter
    names, iterated in registration order. Factories accept the keyword
    arguments understood by the adapter (``args``, ``prefix``, ``jobs`` ...).
    """

    def __init__(self) -> None:
        self._factories: dict[str, LinterFactory] = {}

    def register(self, name: str, factory: LinterFactory) -> None:
        """Register ``factory`` under ``name`` enforcing uniqueness.

        Raises:
            ValueError: If ``name`` is already registered.
        """

        if name in self._factories:
            raise ValueError(f"Linter '{name}' already registered")
        self._factories[name] = factory

    def reset(self) -> None:
        """Remove all registered linters."""
        self._factories.clear()

    def try_get(self, name: str) -> LinterFactory | None:
        """Return the factory registered as ``name`` or ``None``."""

        return self._factories.get(name)

    def create(self, name: str, settings: LinterSettings | None = None, **options: object) -> LinterAdapter:
        """Instantiate the adapter ``name`` configured from ``settings``.

        Args:
            name: Registered linter identifier.
            settings: Optional per-linter settings supplying ``args`` and ``prefix``.
            **options: Additional keyword arguments forwarded to the factory.

        Returns:
            LinterAdapter: Configured adapter instance.

        Raises:
            UnknownLinterError: If ``name`` is not registered.
        """

        factory = self[name]
        if settings is not None:
            options = {"args": tuple(settings.args), "prefix": settings.prefix, **options}
        return factory(**options)

    def __len__(self) -> int:
        return len(self._factories)

    def __iter__(self) -> Iterator[str]:
        return iter(self._factories)

    def __getitem__(self, name: str) -> LinterFactory:
        try:
            return self._factories[name]
        except KeyError:
            raise UnknownLinterError(name) from None


DEFAULT_REGISTRY = LinterRegistry()


def register_linter(name: str, factory: LinterFactory) -> None:
    """Register ``factory`` with the shared :data:`DEFAULT_REGISTRY`."""
    DEFAULT_REGISTRY.register(name, factory)


register_linter(ClangFormat.name, ClangFormat)


__all__ = ["DEFAULT_REGISTRY", "LinterFactory", "LinterRegistry", "register_linter"]
