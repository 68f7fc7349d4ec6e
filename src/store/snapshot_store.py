"""Regional snapshot store.

This module persists one snapshot file per region and reads it back
as an id-keyed mapping for reconciliation.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Sequence

from core.config import PhotoSnapConfig
from core.constants import REGION_FILE_SUFFIX, SNAPSHOT_TEMP_PREFIX
from core.errors import PhotoSnapStoreError
from core.logging_config import get_logger
from core.types import PhotoEntry
from store.entry_payload import entry_from_payload, entry_to_json_line
from store.json_stream import JsonStreamError, iter_json_values

_LOGGER = get_logger(__name__)


class SnapshotStore:
    """Filesystem-backed snapshot store.

    A region's snapshot is replaced wholesale on every write. Writes are
    staged in a temp file beside the snapshot and swapped in with an
    atomic rename, so readers only ever observe complete snapshots.
    """

    def __init__(self, config: PhotoSnapConfig) -> None:
        """Initialize snapshot store from config.

        Args:
            config: Runtime configuration.

        Raises:
            PhotoSnapStoreError: If the output directory cannot be created.
        """
        self._output_dir = config.output_dir
        try:
            self._output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise PhotoSnapStoreError(
                f"Failed to create output directory {self._output_dir}: {error}. "
                "Check permissions or set PHOTOSNAP_OUTPUT_DIR."
            ) from error

    def snapshot_path(self, region: str) -> Path:
        """Return the snapshot file path for a region."""
        return self._output_dir / f"{region}{REGION_FILE_SUFFIX}"

    def read(self, region: str) -> dict[str, PhotoEntry]:
        """Load a region snapshot keyed by photo id.

        Args:
            region: Region name.

        Returns:
            Mapping of photo id to entry; empty when no snapshot exists yet.

        Raises:
            PhotoSnapStoreError: If the snapshot is unreadable or corrupt.
        """
        snapshot_path = self.snapshot_path(region)
        try:
            text = snapshot_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as error:
            raise PhotoSnapStoreError(
                f"Failed to read snapshot {snapshot_path}: {error}. "
                "Restore the file or delete it to rebuild the region."
            ) from error
        entries: dict[str, PhotoEntry] = {}
        try:
            for line_number, payload in iter_json_values(text):
                entry = _parse_entry(snapshot_path, line_number, payload)
                entries[entry.photo_id] = entry
        except JsonStreamError as error:
            raise PhotoSnapStoreError(
                f"Corrupt snapshot {snapshot_path}: {error}. "
                "Restore the file or delete it to rebuild the region."
            ) from error
        return entries

    def write(self, region: str, entries: Sequence[PhotoEntry]) -> Path:
        """Atomically replace a region snapshot.

        Args:
            region: Region name.
            entries: Records in final output order.

        Returns:
            Written snapshot path.

        Raises:
            PhotoSnapStoreError: If staging or replacing the file fails.
        """
        snapshot_path = self.snapshot_path(region)
        temp_path: Path | None = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self._output_dir,
                prefix=f"{SNAPSHOT_TEMP_PREFIX}{region}-",
                suffix=REGION_FILE_SUFFIX,
                delete=False,
            ) as handle:
                temp_path = Path(handle.name)
                for entry in entries:
                    handle.write(entry_to_json_line(entry))
                    handle.write("\n")
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_path, snapshot_path)
        except BaseException as error:
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
            if isinstance(error, OSError):
                raise PhotoSnapStoreError(
                    f"Failed to write snapshot {snapshot_path}: {error}. "
                    "The previous snapshot was left unchanged."
                ) from error
            raise
        _LOGGER.info(
            "region_snapshot_written",
            region=region,
            path=str(snapshot_path),
            entry_count=len(entries),
        )
        return snapshot_path


def _parse_entry(snapshot_path: Path, line_number: int, payload: object) -> PhotoEntry:
    """Validate and deserialize one snapshot value.

    Args:
        snapshot_path: Snapshot file for error context.
        line_number: One-based line of the value.
        payload: Decoded JSON value.

    Returns:
        Parsed entry.

    Raises:
        PhotoSnapStoreError: If the value is not a valid entry object.
    """
    if not isinstance(payload, dict):
        raise PhotoSnapStoreError(
            f"Corrupt snapshot {snapshot_path} at line {line_number}: "
            "expected JSON object. Restore the file or delete it to rebuild the region."
        )
    try:
        return entry_from_payload(payload)
    except ValueError as error:
        raise PhotoSnapStoreError(
            f"Corrupt snapshot {snapshot_path} at line {line_number}: {error}. "
            "Restore the file or delete it to rebuild the region."
        ) from error
