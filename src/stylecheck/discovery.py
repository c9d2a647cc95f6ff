# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Locate files to lint by extension."""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Final

_BRACE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\{([^{}]*)\}")


def normalize_extensions(extensions: Sequence[str]) -> tuple[str, ...]:
    """Return ``extensions`` stripped of whitespace and leading dots.

    Args:
        extensions: Extensions such as ``["c", ".mm"]``.

    Returns:
        tuple[str, ...]: Cleaned extensions in their original order, duplicates removed.

    Raises:
        ValueError: If no usable extension remains.
    """

    cleaned: list[str] = []
    for extension in extensions:
        value = extension.strip().lstrip(".")
        if value and value not in cleaned:
            cleaned.append(value)
    if not cleaned:
        raise ValueError("at least one file extension is required")
    return tuple(cleaned)


def extension_pattern(extensions: Sequence[str]) -> str:
    """Return the glob pattern matching every file with one of ``extensions``.

    A single extension yields ``**/*.c``; several yield a brace list such as
    ``**/*.{c,mm}``.
    """

    cleaned = normalize_extensions(extensions)
    if len(cleaned) == 1:
        return f"**/*.{cleaned[0]}"
    return f"**/*.{{{','.join(cleaned)}}}"


def expand_braces(pattern: str) -> list[str]:
    """Expand every ``{a,b}`` group of ``pattern`` into separate patterns."""

    match = _BRACE_PATTERN.search(pattern)
    if match is None:
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded: list[str] = []
    for option in match.group(1).split(","):
        for candidate in expand_braces(f"{head}{option}{tail}"):
            if candidate not in expanded:
                expanded.append(candidate)
    return expanded


def _is_hidden(relative: Path) -> bool:
    return any(part.startswith(".") for part in relative.parts)


def iter_matches(root: Path, pattern: str) -> Iterator[Path]:
    """Yield files under ``root`` matching ``pattern`` as relative paths.

    Matching is case-sensitive; directories and dot-prefixed entries are skipped.
    """

    for expanded in expand_braces(pattern):
        for candidate in root.glob(expanded, case_sensitive=True):
            relative = candidate.relative_to(root)
            if _is_hidden(relative) or not candidate.is_file():
                continue
            yield relative


def discover_files(root: Path, extensions: Sequence[str]) -> list[str]:
    """Return POSIX paths, relative to ``root``, of files matching ``extensions``.

    Args:
        root: Directory to search.
        extensions: Non-empty list of file extensions to include.

    Returns:
        list[str]: Sorted, de-duplicated relative paths.
    """

    pattern = extension_pattern(extensions)
    return sorted({path.as_posix() for path in iter_matches(root, pattern)})


__all__ = ["discover_files", "expand_braces", "extension_pattern", "iter_matches", "normalize_extensions"]
