"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes CSV lines into a temporary file."""

    def _write(name: str, *lines: str, raw: bytes | None = None) -> Path:
        file_path = tmp_path / name
        if raw is not None:
            file_path.write_bytes(raw)
        else:
            file_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return file_path

    return _write
