"""Python SDK for region snapshot operations.

This module exposes high-level APIs for syncing, planning, and reading
region snapshots backed by the snapshot store and Flickr client.
"""

from __future__ import annotations

from typing import Iterable

from client.flickr_client import FlickrClient
from core.config import PhotoSnapConfig
from core.types import PhotoEntry, RegionPlan, RunReport
from ingest.id_list_reader import discover_regions
from ingest.pipeline import plan_regions, reconcile_regions
from store.snapshot_store import SnapshotStore


class PhotoSnapClient:
    """Primary SDK entry point for region snapshot workflows."""

    def __init__(
        self,
        config: PhotoSnapConfig | None = None,
        flickr_client: FlickrClient | None = None,
    ) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration; read from env when omitted.
            flickr_client: Optional remote client, built lazily from config.
        """
        self._config = config or PhotoSnapConfig.from_env()
        self._flickr_client = flickr_client
        self._store = SnapshotStore(self._config)

    @property
    def config(self) -> PhotoSnapConfig:
        return self._config

    def regions(self) -> list[str]:
        """List region names that have an ingest file."""
        return list(discover_regions(self._config.ingest_dir))

    def sync(self, regions: Iterable[str] | None = None) -> RunReport:
        """Reconcile region snapshots with their ingest lists.

        Args:
            regions: Optional subset of region names; all when omitted.

        Returns:
            Per-region results and failures.

        Raises:
            PhotoSnapConfigError: If the ingest directory or a region is missing.
        """
        return reconcile_regions(self._config, self._remote(), regions)

    def plan(self, regions: Iterable[str] | None = None) -> list[RegionPlan]:
        """Report which ids each region would fetch, without remote calls."""
        return plan_regions(self._config, regions)

    def load_snapshot(self, region: str) -> dict[str, PhotoEntry]:
        """Read the current snapshot of one region keyed by photo id.

        Raises:
            PhotoSnapStoreError: If the snapshot is corrupt.
        """
        return self._store.read(region)

    def close(self) -> None:
        """Release the remote client's connections if one was created."""
        if self._flickr_client is not None:
            self._flickr_client.close()

    def _remote(self) -> FlickrClient:
        if self._flickr_client is None:
            self._flickr_client = FlickrClient(self._config)
        return self._flickr_client
