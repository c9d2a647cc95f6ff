# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the subprocess wrapper."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from stylecheck.process import (
    TIMEOUT_RETURNCODE,
    CommandOptions,
    SubprocessExecutionError,
    run_command,
)


def test_non_zero_status_is_returned_when_not_checking(tmp_path: Path) -> None:
    completed = run_command(
        [sys.executable, "-c", "import sys; print('out'); sys.exit(3)"],
        options=CommandOptions(cwd=tmp_path, check=False, capture_output=True),
    )

    assert completed.returncode == 3
    assert completed.stdout.strip() == "out"


def test_non_zero_status_raises_when_checking() -> None:
    with pytest.raises(SubprocessExecutionError) as excinfo:
        run_command(
            [sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(4)"],
            options=CommandOptions(capture_output=True),
        )

    assert excinfo.value.returncode == 4
    assert excinfo.value.stderr == "boom"


def test_binary_capture_preserves_carriage_returns() -> None:
    completed = run_command(
        [sys.executable, "-c", "import sys; sys.stdout.buffer.write(b'a\\r\\nb')"],
        options=CommandOptions(check=False, capture_output=True, text=False),
    )

    assert completed.stdout == b"a\r\nb"


def test_timeout_is_reported_as_status() -> None:
    completed = run_command(
        [sys.executable, "-c", "import time; time.sleep(10)"],
        options=CommandOptions(check=False, capture_output=True),
        overrides={"timeout": 0.2},
    )

    assert completed.returncode == TIMEOUT_RETURNCODE
    assert "Command timed out after 0.2s" in completed.stderr


def test_missing_executable_raises_file_not_found() -> None:
    with pytest.raises(FileNotFoundError):
        run_command(["definitely-not-a-real-formatter-binary"])


def test_overrides_validate_keys_and_timeout() -> None:
    options = CommandOptions()

    with pytest.raises(TypeError):
        options.with_overrides({"shell": True})  # type: ignore[dict-item]
    with pytest.raises(ValueError):
        options.with_overrides({"timeout": -1})
    assert options.with_overrides({"check": False}).check is False
    assert options.check is True
