# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Convert per-file diff hunks into line-ranged violation records.

The builder walks the hunks of one file in order, tracking the next original
line number to annotate. Removed hunks open a violation spanning the removed
lines; an added hunk that directly follows a removal extends the same record
with a ``***`` separator, while an added hunk with nothing removed before it
becomes a pure insertion record. Unchanged hunks close any pending record and
move the line cursor forward.

Whitespace runs at either end of each rendered line are made visible (``·``
for spaces, ``▸`` before tabs) so indentation-only differences remain
readable in review comments.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Enum
from typing import Final

from .models import DiffHunk, HunkKind, LintEnvelope, LintResult, Violation

SPACE_GLYPH: Final[str] = "·"
TAB_GLYPH: Final[str] = "▸\t"
REMOVED_PREFIX: Final[str] = "- "
ADDED_PREFIX: Final[str] = "+ "
SEPARATOR: Final[str] = "***\n"

_LINE_PARTS: Final[re.Pattern[str]] = re.compile(r"(\s*)(.*?)(\s*)")


def visible_whitespace(text: str) -> str:
    """Replace spaces and tabs in ``text`` with visible glyphs."""

    return text.replace(" ", SPACE_GLYPH).replace("\t", TAB_GLYPH)


def render_lines(text: str, prefix: str) -> str:
    """Render hunk ``text`` line by line behind ``prefix``.

    Args:
        text: Literal hunk content, usually terminated by a line break.
        prefix: Marker placed before every rendered line.

    Returns:
        str: Rendered lines joined by ``\\n`` without a trailing line break.
    """

    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    rendered: list[str] = []
    for line in lines:
        leading, core, trailing = _LINE_PARTS.fullmatch(line).groups()
        rendered.append(prefix + visible_whitespace(leading) + core + visible_whitespace(trailing))
    return "\n".join(rendered)


class _BuilderState(Enum):
    IDLE = "idle"
    REMOVAL = "removal"
    REPLACEMENT = "replacement"
    INSERTION = "insertion"


class AnnotationBuilder:
    """Accumulate the hunks of a single file into :class:`Violation` records."""

    def __init__(self, path: str) -> None:
        self.path = path
        self._line = 1
        self._span = 1
        self._message = ""
        self._state = _BuilderState.IDLE
        self._violations: list[Violation] = []

    def build(self, hunks: Iterable[DiffHunk]) -> list[Violation]:
        """Consume ``hunks`` and return the resulting violations in order.

        Args:
            hunks: Hunk sequence of the file in original order.

        Returns:
            list[Violation]: Records with non-overlapping original line spans.
        """

        for hunk in hunks:
            self.feed(hunk)
        self.flush()
        return list(self._violations)

    def feed(self, hunk: DiffHunk) -> None:
        """Advance the state machine by one hunk."""

        if hunk.kind is not HunkKind.ADDED:
            self.flush()

        if hunk.kind is HunkKind.REMOVED:
            self._message += render_lines(hunk.text, REMOVED_PREFIX) + "\n"
            self._span = hunk.line_count
            self._state = _BuilderState.REMOVAL
        elif hunk.kind is HunkKind.ADDED:
            if self._state is _BuilderState.IDLE:
                # Nothing removed: the span is measured in inserted lines.
                self._span = hunk.line_count
                self._state = _BuilderState.INSERTION
            else:
                self._message += SEPARATOR
                self._state = _BuilderState.REPLACEMENT
            self._message += render_lines(hunk.text, ADDED_PREFIX)
        else:
            self._line += hunk.line_count

    def flush(self) -> None:
        """Emit the pending record, if any, and move past its span."""

        if self._state is _BuilderState.IDLE or not self._message:
            self._state = _BuilderState.IDLE
            return
        last_line = max(self._line, self._line + self._span - 1)
        self._violations.append(
            Violation(path=self.path, first_line=self._line, last_line=last_line, message=self._message),
        )
        self._line += self._span
        self._message = ""
        self._state = _BuilderState.IDLE


def build_violations(path: str, hunks: Iterable[DiffHunk]) -> list[Violation]:
    """Return the violations described by the hunks of the file at ``path``."""

    return AnnotationBuilder(path).build(hunks)


def aggregate_result(envelope: LintEnvelope) -> LintResult:
    """Collect the violations of every file in ``envelope`` into a result.

    Formatter findings are reported at error severity. A successful envelope is
    returned as an empty success without inspecting its payload.

    Args:
        envelope: Output of a linter's ``lint`` step.

    Returns:
        LintResult: Freshly built result owned by the caller.
    """

    if envelope.status == 0:
        return LintResult(is_success=True)
    errors: list[Violation] = []
    for entry in envelope.payload:
        errors.extend(build_violations(entry.file, entry.changes))
    return LintResult(is_success=False, error=tuple(errors))


__all__ = [
    "ADDED_PREFIX",
    "AnnotationBuilder",
    "REMOVED_PREFIX",
    "SEPARATOR",
    "SPACE_GLYPH",
    "TAB_GLYPH",
    "aggregate_result",
    "build_violations",
    "render_lines",
    "visible_whitespace",
]
