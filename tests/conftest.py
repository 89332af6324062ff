"""Pytest configuration for test isolation.

The CLI loads ``.env`` from the working directory and reads
``STATEMENT_PNL_*`` environment variables; it also configures the package
logger once per process. Each test gets a clean working directory, a scrubbed
environment, and a fresh logger so results do not depend on test order.
"""

from __future__ import annotations

import os
import textwrap
from collections.abc import Iterator
from pathlib import Path

import pytest

from statement_pnl.logging_setup import reset_logging


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for key in list(os.environ):
        if key.startswith("STATEMENT_PNL_"):
            monkeypatch.delenv(key, raising=False)
    # Keep CLI output free of INFO/WARNING log lines.
    monkeypatch.setenv("STATEMENT_PNL_LOG_LEVEL", "ERROR")
    monkeypatch.chdir(tmp_path)
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def write_csv(tmp_path: Path):
    """Write dedented CSV text to ``tmp_path/name`` and return the path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(text).lstrip("\n") + "\n", encoding="utf-8")
        return path

    return _write
