"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def photosnap_config(tmp_path: Path):
    """Config rooted in a temporary ingest/output tree."""
    from core.config import PhotoSnapConfig

    ingest_dir = tmp_path / "ingest"
    ingest_dir.mkdir()
    return PhotoSnapConfig(
        api_key="test-key",
        ingest_dir=ingest_dir,
        output_dir=tmp_path / "out",
    )
