# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Line-level diffing between a file and its reformatted counterpart."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from difflib import SequenceMatcher

from .models import DiffHunk, HunkKind


def _hunk(kind: HunkKind, lines: Sequence[str]) -> DiffHunk:
    return DiffHunk(kind=kind, line_count=len(lines), text="".join(lines))


def split_lines(text: str) -> list[str]:
    """Split ``text`` after every ``\\n`` keeping the terminators.

    Only ``\\n`` ends a line; carriage returns and form feeds stay part of the
    line so numbering matches what editors and review tools display.
    """

    pieces = text.split("\n")
    lines = [piece + "\n" for piece in pieces[:-1]]
    if pieces[-1]:
        lines.append(pieces[-1])
    return lines


def diff_lines(original: str, reformatted: str) -> list[DiffHunk]:
    """Return the ordered hunks transforming ``original`` into ``reformatted``.

    Lines are compared verbatim including their terminators, so ``"x"`` and
    ``"x\\n"`` differ. Replacements are emitted as a removed hunk immediately
    followed by an added hunk.

    Args:
        original: Full text of the file as found on disk.
        reformatted: Full text produced by the formatter.

    Returns:
        list[DiffHunk]: Hunks in original order. Identical inputs yield a single
        unchanged hunk and two empty inputs yield an empty list.
    """

    before = split_lines(original)
    after = split_lines(reformatted)
    matcher = SequenceMatcher(None, before, after, autojunk=False)

    hunks: list[DiffHunk] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            hunks.append(_hunk(HunkKind.UNCHANGED, before[i1:i2]))
            continue
        if tag in ("delete", "replace"):
            hunks.append(_hunk(HunkKind.REMOVED, before[i1:i2]))
        if tag in ("insert", "replace"):
            hunks.append(_hunk(HunkKind.ADDED, after[j1:j2]))
    return hunks


def has_changes(hunks: Iterable[DiffHunk]) -> bool:
    """Return ``True`` when any hunk removes or adds content."""

    return any(hunk.is_change for hunk in hunks)


__all__ = ["diff_lines", "has_changes", "split_lines"]
