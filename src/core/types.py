"""Shared typed models.

This module defines immutable data models used by ingest, store,
client, and transform layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping


@dataclass(frozen=True)
class PictureSize:
    """One available rendition of a photo.

    Attributes:
        label: Semantic size name such as ``Medium 640``.
        width: Width in pixels.
        height: Height in pixels.
        source: Direct image URL for this rendition.
    """

    label: str
    width: int
    height: int
    source: str


@dataclass(frozen=True)
class PhotoEntry:
    """Flat persisted record for one photo.

    Attributes:
        photo_id: Flickr photo id, unique within a region snapshot.
        sizes: Renditions in the order returned by the service.
        owner_username: Owner display name.
        owner_icon: Owner buddy icon URL.
        title: Photo title.
        description: Free-text description, possibly empty.
        date_taken: Capture timestamp exactly as the service returns it.
        latitude: Latitude string, empty when unknown.
        longitude: Longitude string, empty when unknown.
        location_accuracy: Service accuracy level string.
        location_description: Comma-joined place names, most specific first.
        webpage: Canonical photo page URL.
    """

    photo_id: str
    sizes: tuple[PictureSize, ...] = ()
    owner_username: str = ""
    owner_icon: str = ""
    title: str = ""
    description: str = ""
    date_taken: str = ""
    latitude: str = ""
    longitude: str = ""
    location_accuracy: str = ""
    location_description: str = ""
    webpage: str = ""


@dataclass(frozen=True)
class RegionPlan:
    """HIT/MISS classification of one region's ingest ids.

    Attributes:
        region: Region name.
        photo_ids: Deduplicated ids in ingest order.
        hit_ids: Ids already present in the snapshot.
        miss_ids: Ids that must be fetched, in ingest order.
    """

    region: str
    photo_ids: tuple[str, ...]
    hit_ids: tuple[str, ...]
    miss_ids: tuple[str, ...]


@dataclass(frozen=True)
class RegionResult:
    """Outcome of one reconciled region.

    Attributes:
        region: Region name.
        snapshot_path: Written snapshot file.
        entry_count: Records in the written snapshot.
        reused_count: Records carried forward from the prior snapshot.
        fetched_ids: Ids fetched and added during this run.
        skipped_ids: Ids the service reported as unavailable.
    """

    region: str
    snapshot_path: Path
    entry_count: int
    reused_count: int
    fetched_ids: tuple[str, ...] = ()
    skipped_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class RunReport:
    """Outcome of one multi-region run.

    Attributes:
        results: Reconciled regions in region-name order.
        failures: Region name to error message for aborted regions.
    """

    results: tuple[RegionResult, ...]
    failures: Mapping[str, str]

    @property
    def succeeded(self) -> bool:
        return not self.failures
