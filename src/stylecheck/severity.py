# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity levels attached to reported violations."""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """Severity buckets exposed by :class:`stylecheck.models.LintResult`."""

    ERROR = "error"
    WARNING = "warning"


__all__ = ["Severity"]
