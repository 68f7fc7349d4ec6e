"""Region ingest list readers.

This module discovers region ingest files and decodes each one into
the ordered list of photo ids the region snapshot should contain.
"""

from __future__ import annotations

from pathlib import Path

from core.constants import REGION_FILE_SUFFIX
from core.errors import PhotoSnapConfigError, PhotoSnapIngestError
from store.json_stream import JsonStreamError, iter_json_values


def discover_regions(ingest_dir: Path) -> dict[str, Path]:
    """Map region names to their ingest files.

    Args:
        ingest_dir: Directory holding ``<region>.ndjson`` files.

    Returns:
        Region name to ingest path, ordered by region name.

    Raises:
        PhotoSnapConfigError: If the ingest directory does not exist.
    """
    if not ingest_dir.is_dir():
        raise PhotoSnapConfigError(
            f"Ingest directory {ingest_dir} does not exist. "
            "Create it or set PHOTOSNAP_INGEST_DIR."
        )
    regions: dict[str, Path] = {}
    for file_path in sorted(ingest_dir.iterdir()):
        if file_path.is_file() and file_path.suffix == REGION_FILE_SUFFIX:
            regions[file_path.name[: -len(REGION_FILE_SUFFIX)]] = file_path
    return regions


def read_id_list(ingest_path: Path) -> list[str]:
    """Read ordered photo ids from one region ingest file.

    Args:
        ingest_path: Path to the region ingest file.

    Returns:
        Ids in file order, duplicates included.

    Raises:
        PhotoSnapIngestError: If the file is missing or holds a non-string value.
    """
    try:
        text = ingest_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        raise PhotoSnapIngestError(
            f"Failed to read ingest file {ingest_path}: {error}. "
            "Regenerate the region id list and retry."
        ) from error
    photo_ids: list[str] = []
    try:
        for line_number, value in iter_json_values(text):
            if not isinstance(value, str):
                raise PhotoSnapIngestError(
                    f"Invalid ingest value at {ingest_path}:{line_number}: "
                    f"expected JSON string photo id, got {type(value).__name__}."
                )
            photo_ids.append(value)
    except JsonStreamError as error:
        raise PhotoSnapIngestError(
            f"Failed to parse ingest file {ingest_path}:{error.line_number}: {error}. "
            "Fix the JSON syntax and retry."
        ) from error
    return photo_ids
