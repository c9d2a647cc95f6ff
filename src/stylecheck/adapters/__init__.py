# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Linter adapters shipped with stylecheck."""

from __future__ import annotations

from .base import LinterAdapter
from .clang_format import ClangFormat

__all__ = ["ClangFormat", "LinterAdapter"]
