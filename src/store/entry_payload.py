"""Shared JSON serialization for PhotoEntry payloads.

This module owns the persisted field names of snapshot records.
Names match the snapshots already published for every region.
"""

from __future__ import annotations

import json
from typing import Any

from core.types import PhotoEntry, PictureSize


def entry_to_payload(entry: PhotoEntry) -> dict[str, object]:
    """Serialize PhotoEntry into JSON-safe payload.

    Args:
        entry: Photo entry instance.

    Returns:
        Dictionary payload for JSON encoding.
    """
    return {
        "id": entry.photo_id,
        "sizes": [
            {
                "label": size.label,
                "width": size.width,
                "height": size.height,
                "source": size.source,
            }
            for size in entry.sizes
        ],
        "ownerUsername": entry.owner_username,
        "ownerIcon": entry.owner_icon,
        "title": entry.title,
        "description": entry.description,
        "dateTaken": entry.date_taken,
        "latitude": entry.latitude,
        "longitude": entry.longitude,
        "locationAccuracy": entry.location_accuracy,
        "locationDescription": entry.location_description,
        "url": entry.webpage,
    }


def entry_from_payload(payload: dict[str, Any]) -> PhotoEntry:
    """Deserialize JSON payload into PhotoEntry.

    Args:
        payload: Serialized entry payload.

    Returns:
        Parsed PhotoEntry.

    Raises:
        ValueError: If the id is missing, a text field is not a string,
            or a size row is invalid.
    """
    photo_id = payload.get("id")
    if not isinstance(photo_id, str) or not photo_id:
        raise ValueError("expected non-empty string field 'id'")
    raw_sizes = payload.get("sizes") or []
    if not isinstance(raw_sizes, list):
        raise ValueError("expected list field 'sizes'")
    return PhotoEntry(
        photo_id=photo_id,
        sizes=tuple(_size_from_payload(item) for item in raw_sizes),
        owner_username=_text_field(payload, "ownerUsername"),
        owner_icon=_text_field(payload, "ownerIcon"),
        title=_text_field(payload, "title"),
        description=_text_field(payload, "description"),
        date_taken=_text_field(payload, "dateTaken"),
        latitude=_text_field(payload, "latitude"),
        longitude=_text_field(payload, "longitude"),
        location_accuracy=_text_field(payload, "locationAccuracy"),
        location_description=_text_field(payload, "locationDescription"),
        webpage=_text_field(payload, "url"),
    )


def entry_to_json_line(entry: PhotoEntry) -> str:
    """Render one entry as a compact JSON line without trailing newline."""
    return json.dumps(entry_to_payload(entry), ensure_ascii=False)


def _size_from_payload(payload: Any) -> PictureSize:
    if not isinstance(payload, dict):
        raise ValueError("expected JSON object in 'sizes'")
    try:
        width = int(payload.get("width", 0))
        height = int(payload.get("height", 0))
    except (TypeError, ValueError) as error:
        raise ValueError(f"invalid size dimensions: {error}") from error
    return PictureSize(
        label=_text_field(payload, "label"),
        width=width,
        height=height,
        source=_text_field(payload, "source"),
    )


def _text_field(payload: dict[str, Any], name: str) -> str:
    value = payload.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"expected string field '{name}', got {type(value).__name__}")
    return value
