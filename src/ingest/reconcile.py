"""Region diff and merge helpers.

This module classifies ingest ids against a prior snapshot and builds
the final entry sequence in ingest order.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from core.types import PhotoEntry, RegionPlan
from transforms.id_deduplication import remove_duplicate_ids


def plan_region(
    region: str,
    photo_ids: Sequence[str],
    existing_entries: Mapping[str, PhotoEntry],
) -> RegionPlan:
    """Split ingest ids into snapshot hits and ids to fetch.

    Args:
        region: Region name.
        photo_ids: Ingest ids, possibly with duplicates.
        existing_entries: Prior snapshot keyed by id.

    Returns:
        Plan with deduplicated ids and their HIT/MISS split, both in ingest order.
    """
    unique_ids = remove_duplicate_ids(photo_ids)
    hit_ids = [photo_id for photo_id in unique_ids if photo_id in existing_entries]
    miss_ids = [photo_id for photo_id in unique_ids if photo_id not in existing_entries]
    return RegionPlan(
        region=region,
        photo_ids=tuple(unique_ids),
        hit_ids=tuple(hit_ids),
        miss_ids=tuple(miss_ids),
    )


def merge_region_entries(
    plan: RegionPlan,
    existing_entries: Mapping[str, PhotoEntry],
    fetched_entries: Mapping[str, PhotoEntry],
) -> list[PhotoEntry]:
    """Walk the ingest ids once and pick each id's entry.

    Hits come verbatim from the prior snapshot and misses from this run's
    fetches. Ids with neither (skipped photos) are left out.

    Args:
        plan: Region plan.
        existing_entries: Prior snapshot keyed by id.
        fetched_entries: Newly built entries keyed by id.

    Returns:
        Entries in ingest order.
    """
    merged: list[PhotoEntry] = []
    for photo_id in plan.photo_ids:
        entry = existing_entries.get(photo_id) or fetched_entries.get(photo_id)
        if entry is not None:
            merged.append(entry)
    return merged
