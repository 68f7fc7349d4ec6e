"""Photosnap exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class PhotoSnapError(Exception):
    """Base exception for all photosnap failures."""


class PhotoSnapConfigError(PhotoSnapError):
    """Raised for invalid runtime configuration."""


class PhotoSnapIngestError(PhotoSnapConfigError):
    """Raised for missing or malformed region ingest files."""


class PhotoSnapTransportError(PhotoSnapError):
    """Raised when the remote photo service cannot be reached or refuses a call.

    Attributes:
        status_code: HTTP status when a response was received.
        api_code: Flickr error code from a ``stat=fail`` payload.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        api_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.api_code = api_code


class PhotoSnapRetryableError(PhotoSnapTransportError):
    """Raised for transient transport failures worth retrying."""


class PhotoSnapPhotoUnavailableError(PhotoSnapTransportError):
    """Raised when one photo id is unknown or private upstream."""


class PhotoSnapMalformedResponseError(PhotoSnapError):
    """Raised when a remote payload does not match the expected schema."""


class PhotoSnapStoreError(PhotoSnapError):
    """Raised for snapshot read and write failures."""
