"""Unit tests for region ingest list reading."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.errors import PhotoSnapConfigError, PhotoSnapIngestError
from ingest.id_list_reader import discover_regions, read_id_list
from tests.fixture_paths import fixture_path


def test_read_id_list_reads_ids_in_file_order() -> None:
    """Reader should return ids in the order they appear."""
    photo_ids = read_id_list(fixture_path("ingest/brooklyn.ndjson"))

    assert photo_ids == ["52811200001", "52811200002", "52811200003"]


def test_read_id_list_returns_empty_list_for_empty_file(tmp_path: Path) -> None:
    """An empty ingest file is a valid, empty region."""
    ingest_path = tmp_path / "empty.ndjson"
    ingest_path.write_text("", encoding="utf-8")

    assert read_id_list(ingest_path) == []


def test_read_id_list_preserves_duplicates(tmp_path: Path) -> None:
    """Deduplication belongs to reconciliation, not to the reader."""
    ingest_path = tmp_path / "dupes.ndjson"
    ingest_path.write_text('"1"\n"2"\n"1"\n', encoding="utf-8")

    assert read_id_list(ingest_path) == ["1", "2", "1"]


def test_read_id_list_raises_for_non_string_value(tmp_path: Path) -> None:
    """Numeric ids are rejected so ids keep their exact string form."""
    ingest_path = tmp_path / "numbers.ndjson"
    ingest_path.write_text('"1"\n2\n', encoding="utf-8")

    with pytest.raises(PhotoSnapIngestError, match=":2"):
        read_id_list(ingest_path)


def test_read_id_list_raises_for_invalid_json(tmp_path: Path) -> None:
    """Undecodable ingest data is a configuration error."""
    ingest_path = tmp_path / "broken.ndjson"
    ingest_path.write_text('"1"\n"2\n', encoding="utf-8")

    with pytest.raises(PhotoSnapIngestError):
        read_id_list(ingest_path)


def test_read_id_list_raises_for_missing_file(tmp_path: Path) -> None:
    """A missing ingest file is reported as an ingest error."""
    with pytest.raises(PhotoSnapIngestError):
        read_id_list(tmp_path / "missing.ndjson")


def test_discover_regions_maps_names_to_files(tmp_path: Path) -> None:
    """Only .ndjson files should become regions, named without the suffix."""
    for name in ("queens.ndjson", "bronx.ndjson", "notes.txt"):
        (tmp_path / name).write_text("", encoding="utf-8")

    regions = discover_regions(tmp_path)

    assert list(regions) == ["bronx", "queens"]


def test_discover_regions_raises_for_missing_directory(tmp_path: Path) -> None:
    """A missing ingest directory is a configuration error."""
    with pytest.raises(PhotoSnapConfigError):
        discover_regions(tmp_path / "nope")
