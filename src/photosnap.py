"""Public SDK surface for photosnap.

This module provides a stable import path for library users.
It re-exports the primary client, typed models, and error types.
"""

from __future__ import annotations

from client.flickr_client import FlickrClient
from client.rate_limiter import TokenBucketRateLimiter
from core.config import PhotoSnapConfig
from core.errors import (
    PhotoSnapConfigError,
    PhotoSnapError,
    PhotoSnapIngestError,
    PhotoSnapMalformedResponseError,
    PhotoSnapPhotoUnavailableError,
    PhotoSnapRetryableError,
    PhotoSnapStoreError,
    PhotoSnapTransportError,
)
from core.types import PhotoEntry, PictureSize, RegionPlan, RegionResult, RunReport
from store.region_sdk import PhotoSnapClient
from transforms.entry_transform import build_entry

__all__ = [
    "FlickrClient",
    "PhotoEntry",
    "PhotoSnapClient",
    "PhotoSnapConfig",
    "PhotoSnapConfigError",
    "PhotoSnapError",
    "PhotoSnapIngestError",
    "PhotoSnapMalformedResponseError",
    "PhotoSnapPhotoUnavailableError",
    "PhotoSnapRetryableError",
    "PhotoSnapStoreError",
    "PhotoSnapTransportError",
    "PictureSize",
    "RegionPlan",
    "RegionResult",
    "RunReport",
    "TokenBucketRateLimiter",
    "build_entry",
]
