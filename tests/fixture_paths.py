"""Shared fixture path helpers for tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def fixture_path(relative_path: str) -> Path:
    """Resolve a fixture path relative to tests/fixtures.

    Args:
        relative_path: Path under fixtures root.

    Returns:
        Absolute fixture path.
    """
    tests_root = Path(__file__).resolve().parent
    return tests_root / "fixtures" / relative_path


def load_json_fixture(relative_path: str) -> dict[str, Any]:
    """Load a JSON fixture file as a dictionary."""
    return json.loads(fixture_path(relative_path).read_text(encoding="utf-8"))
