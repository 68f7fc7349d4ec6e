"""Core constants used across photosnap modules.

This module centralizes service addresses and runtime defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_ENV_FILE = Path(".local.env")
DEFAULT_INGEST_DIR = Path("ingest")
DEFAULT_OUTPUT_DIR = Path("out")
REGION_FILE_SUFFIX = ".ndjson"
SNAPSHOT_TEMP_PREFIX = ".tmp-"
DEFAULT_API_ENDPOINT = "https://www.flickr.com/services/rest"
FLICKR_GET_INFO_METHOD = "flickr.photos.getInfo"
FLICKR_GET_SIZES_METHOD = "flickr.photos.getSizes"
FLICKR_RESPONSE_FORMAT = "json"
FLICKR_NO_JSON_CALLBACK = "1"
FLICKR_PHOTO_NOT_FOUND_CODE = 1
FLICKR_PERMISSION_DENIED_CODE = 2
FLICKR_SERVICE_UNAVAILABLE_CODE = 105
DEFAULT_OWNER_ICON = "https://www.flickr.com/images/buddyicon.gif"
NO_CUSTOM_ICON_SERVER = "0"
OWNER_ICON_TEMPLATE = "https://farm{farm}.staticflickr.com/{server}/buddyicons/{nsid}.jpg"
OWNER_PROFILE_PREFIX = "https://flickr.com/photos/"
LOCATION_SEPARATOR = ", "
DEFAULT_CALLS_PER_SECOND = 1.0
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_BACKOFF_SECONDS = 2.0
DEFAULT_FETCH_WORKERS = 1
DEFAULT_REGION_WORKERS = 1
DEFAULT_LOG_LEVEL = "INFO"
