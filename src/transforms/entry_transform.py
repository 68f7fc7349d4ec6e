"""Flickr payload to PhotoEntry transform.

This module flattens the nested getInfo and getSizes payloads into
the persisted entry shape. It performs no I/O.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.constants import (
    DEFAULT_OWNER_ICON,
    LOCATION_SEPARATOR,
    NO_CUSTOM_ICON_SERVER,
    OWNER_ICON_TEMPLATE,
    OWNER_PROFILE_PREFIX,
)
from core.errors import PhotoSnapMalformedResponseError
from core.types import PhotoEntry, PictureSize

_LOCATION_SEGMENTS = ("neighbourhood", "locality", "county", "region", "country")


def build_entry(
    photo_id: str,
    raw_info: Mapping[str, Any],
    raw_sizes: Mapping[str, Any],
) -> PhotoEntry:
    """Build a flat entry from raw getInfo and getSizes payloads.

    Args:
        photo_id: Id the payloads were fetched for.
        raw_info: Decoded ``flickr.photos.getInfo`` response.
        raw_sizes: Decoded ``flickr.photos.getSizes`` response.

    Returns:
        Normalized photo entry.

    Raises:
        PhotoSnapMalformedResponseError: If a payload lacks its expected structure.
    """
    photo = _require_object(raw_info, "photo", photo_id, "getInfo")
    owner = _optional_object(photo, "owner", photo_id)
    location = _optional_object(photo, "location", photo_id)
    dates = _optional_object(photo, "dates", photo_id)
    return PhotoEntry(
        photo_id=photo_id,
        sizes=parse_sizes(photo_id, raw_sizes),
        owner_username=_text(owner.get("username"), photo_id),
        owner_icon=build_owner_icon(owner),
        title=_content(photo.get("title"), photo_id),
        description=_content(photo.get("description"), photo_id),
        date_taken=_text(dates.get("taken"), photo_id),
        latitude=_text(location.get("latitude"), photo_id),
        longitude=_text(location.get("longitude"), photo_id),
        location_accuracy=_text(location.get("accuracy"), photo_id),
        location_description=build_location_description(location),
        webpage=build_webpage(photo, owner),
    )


def parse_sizes(photo_id: str, raw_sizes: Mapping[str, Any]) -> tuple[PictureSize, ...]:
    """Extract renditions from a getSizes payload in service order.

    Args:
        photo_id: Id for error context.
        raw_sizes: Decoded ``flickr.photos.getSizes`` response.

    Returns:
        Parsed picture sizes.

    Raises:
        PhotoSnapMalformedResponseError: If the size list is missing or invalid.
    """
    sizes = _require_object(raw_sizes, "sizes", photo_id, "getSizes")
    size_rows = sizes.get("size")
    if not isinstance(size_rows, list):
        raise PhotoSnapMalformedResponseError(
            f"getSizes response for photo {photo_id} has no 'sizes.size' list."
        )
    parsed: list[PictureSize] = []
    for row in size_rows:
        if not isinstance(row, dict):
            raise PhotoSnapMalformedResponseError(
                f"getSizes response for photo {photo_id} has a non-object size row."
            )
        parsed.append(
            PictureSize(
                label=_text(row.get("label"), photo_id),
                width=_dimension(row.get("width"), photo_id),
                height=_dimension(row.get("height"), photo_id),
                source=_text(row.get("source"), photo_id),
            )
        )
    return tuple(parsed)


def build_owner_icon(owner: Mapping[str, Any]) -> str:
    """Return the owner's buddy icon URL.

    Owners without a custom icon report icon server ``"0"`` and get the
    service-wide default icon.
    """
    icon_server = str(owner.get("iconserver") or NO_CUSTOM_ICON_SERVER)
    if icon_server == NO_CUSTOM_ICON_SERVER:
        return DEFAULT_OWNER_ICON
    return OWNER_ICON_TEMPLATE.format(
        farm=owner.get("iconfarm", 0),
        server=icon_server,
        nsid=owner.get("nsid", ""),
    )


def build_location_description(location: Mapping[str, Any]) -> str:
    """Join non-empty place names from most to least specific."""
    segments = [_content(_location_node(location, name)) for name in _LOCATION_SEGMENTS]
    return LOCATION_SEPARATOR.join(segment for segment in segments if segment)


def build_webpage(photo: Mapping[str, Any], owner: Mapping[str, Any]) -> str:
    """Return the first listed photo page URL, else the owner's profile URL."""
    urls = photo.get("urls")
    url_rows = urls.get("url") if isinstance(urls, dict) else None
    if isinstance(url_rows, list) and url_rows:
        return _content(url_rows[0])
    return f"{OWNER_PROFILE_PREFIX}{owner.get('nsid', '')}"


def _location_node(location: Mapping[str, Any], name: str) -> Any:
    # Flickr spells the most specific segment "neighbourhood".
    if name == "neighbourhood" and name not in location:
        return location.get("neighborhood")
    return location.get(name)


def _require_object(
    payload: Mapping[str, Any],
    key: str,
    photo_id: str,
    operation: str,
) -> Mapping[str, Any]:
    value = payload.get(key) if isinstance(payload, Mapping) else None
    if not isinstance(value, dict):
        raise PhotoSnapMalformedResponseError(
            f"{operation} response for photo {photo_id} has no '{key}' object."
        )
    return value


def _optional_object(payload: Mapping[str, Any], key: str, photo_id: str) -> Mapping[str, Any]:
    value = payload.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise PhotoSnapMalformedResponseError(
            f"getInfo response for photo {photo_id} has a non-object '{key}' field."
        )
    return value


def _content(node: Any, photo_id: str = "") -> str:
    """Read a Flickr ``{"_content": ...}`` text node."""
    if isinstance(node, dict):
        return _text(node.get("_content"), photo_id)
    return _text(node, photo_id)


def _text(value: Any, photo_id: str = "") -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise PhotoSnapMalformedResponseError(
        f"Response for photo {photo_id} has a non-scalar text field: {value!r}."
    )


def _dimension(value: Any, photo_id: str) -> int:
    """Parse a pixel dimension sent either as a number or a numeric string."""
    if value is None or value == "":
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise PhotoSnapMalformedResponseError(
            f"getSizes response for photo {photo_id} has invalid dimension {value!r}."
        )
    try:
        return int(value)
    except ValueError as error:
        raise PhotoSnapMalformedResponseError(
            f"getSizes response for photo {photo_id} has invalid dimension {value!r}."
        ) from error
