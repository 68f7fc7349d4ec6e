"""Unit tests for core config parsing."""

from __future__ import annotations

import pytest

from core.config import PhotoSnapConfig
from core.errors import PhotoSnapConfigError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unset config variables and undo anything dotenv sets during a test."""
    for name in (
        "FLICKR_API_KEY",
        "PHOTOSNAP_INGEST_DIR",
        "PHOTOSNAP_OUTPUT_DIR",
        "PHOTOSNAP_CALLS_PER_SECOND",
        "PHOTOSNAP_MAX_RETRIES",
        "PHOTOSNAP_FETCH_WORKERS",
        "PHOTOSNAP_REGION_WORKERS",
        "PHOTOSNAP_REQUEST_TIMEOUT",
        "PHOTOSNAP_API_ENDPOINT",
        "PHOTOSNAP_LOG_LEVEL",
    ):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_from_env_requires_api_key(tmp_path) -> None:
    """Config should fail fast when no API key is available."""
    with pytest.raises(PhotoSnapConfigError, match="FLICKR_API_KEY"):
        PhotoSnapConfig.from_env(tmp_path / "missing.env")


def test_from_env_reads_api_key_from_env_file(tmp_path) -> None:
    """Config should load the API key from the dotenv file."""
    env_file = tmp_path / ".local.env"
    env_file.write_text("FLICKR_API_KEY=from-file\n", encoding="utf-8")

    config = PhotoSnapConfig.from_env(env_file)

    assert config.api_key == "from-file"


def test_from_env_prefers_process_environment(tmp_path, monkeypatch) -> None:
    """Values already in the environment should win over the env file."""
    env_file = tmp_path / ".local.env"
    env_file.write_text("FLICKR_API_KEY=from-file\n", encoding="utf-8")
    monkeypatch.setenv("FLICKR_API_KEY", "from-env")

    config = PhotoSnapConfig.from_env(env_file)

    assert config.api_key == "from-env"


def test_from_env_uses_defaults(monkeypatch) -> None:
    """Unset optional values should fall back to defaults."""
    monkeypatch.setenv("FLICKR_API_KEY", "key")

    config = PhotoSnapConfig.from_env(None)

    assert (config.ingest_dir.name, config.output_dir.name, config.calls_per_second) == (
        "ingest",
        "out",
        1.0,
    )


def test_from_env_reads_directory_overrides(monkeypatch) -> None:
    """Config should resolve ingest and output directories from environment."""
    monkeypatch.setenv("FLICKR_API_KEY", "key")
    monkeypatch.setenv("PHOTOSNAP_INGEST_DIR", "./data/ingest-lists")
    monkeypatch.setenv("PHOTOSNAP_OUTPUT_DIR", "./data/snapshots")

    config = PhotoSnapConfig.from_env(None)

    assert (config.ingest_dir.name, config.output_dir.name) == ("ingest-lists", "snapshots")


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("PHOTOSNAP_CALLS_PER_SECOND", "fast"),
        ("PHOTOSNAP_CALLS_PER_SECOND", "0"),
        ("PHOTOSNAP_CALLS_PER_SECOND", "nan"),
        ("PHOTOSNAP_REQUEST_TIMEOUT", "inf"),
        ("PHOTOSNAP_MAX_RETRIES", "0"),
        ("PHOTOSNAP_FETCH_WORKERS", "two"),
        ("PHOTOSNAP_LOG_LEVEL", "chatty"),
    ],
)
def test_from_env_rejects_invalid_values(monkeypatch, name: str, value: str) -> None:
    """Invalid numeric or level values should name the offending variable."""
    monkeypatch.setenv("FLICKR_API_KEY", "key")
    monkeypatch.setenv(name, value)

    with pytest.raises(PhotoSnapConfigError, match=name):
        PhotoSnapConfig.from_env(None)
