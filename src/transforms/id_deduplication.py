"""Photo id deduplication transform.

This module removes repeated ids from a region ingest list.
The first occurrence of an id fixes its position in the output.
"""

from __future__ import annotations

from typing import Iterable


def remove_duplicate_ids(photo_ids: Iterable[str]) -> list[str]:
    """Remove repeated photo ids while preserving first-occurrence order.

    Args:
        photo_ids: Ids in ingest order.

    Returns:
        Ordered ids with duplicates removed.
    """
    unique_ids: list[str] = []
    seen_ids: set[str] = set()
    for photo_id in photo_ids:
        if photo_id in seen_ids:
            continue
        seen_ids.add(photo_id)
        unique_ids.append(photo_id)
    return unique_ids
