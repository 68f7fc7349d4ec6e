"""Runtime configuration model for photosnap.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
import os
from pathlib import Path

from dotenv import load_dotenv

from core.constants import (
    DEFAULT_API_ENDPOINT,
    DEFAULT_CALLS_PER_SECOND,
    DEFAULT_ENV_FILE,
    DEFAULT_FETCH_WORKERS,
    DEFAULT_INGEST_DIR,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_REGION_WORKERS,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
)
from core.errors import PhotoSnapConfigError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class PhotoSnapConfig:
    """Validated runtime configuration.

    Attributes:
        api_key: Flickr API key sent with every remote call.
        ingest_dir: Directory holding one ``<region>.ndjson`` id list per region.
        output_dir: Directory holding one snapshot file per region.
        api_endpoint: Flickr REST endpoint URL.
        calls_per_second: Global rate limit shared by all remote calls.
        request_timeout: Per-call timeout in seconds.
        max_retries: Retries per call after a transient failure.
        fetch_workers: Concurrent photo fetches within one region.
        region_workers: Regions reconciled concurrently.
        log_level: Minimum structured log level.
    """

    api_key: str
    ingest_dir: Path
    output_dir: Path
    api_endpoint: str = DEFAULT_API_ENDPOINT
    calls_per_second: float = DEFAULT_CALLS_PER_SECOND
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    max_retries: int = DEFAULT_MAX_RETRIES
    fetch_workers: int = DEFAULT_FETCH_WORKERS
    region_workers: int = DEFAULT_REGION_WORKERS
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, env_file: Path | None = DEFAULT_ENV_FILE) -> "PhotoSnapConfig":
        """Build config from the env file and process environment.

        Args:
            env_file: Optional dotenv file; values already present in the
                process environment take precedence.

        Returns:
            A validated config object.

        Raises:
            PhotoSnapConfigError: If the API key is missing or a value is invalid.
        """
        if env_file is not None and Path(env_file).is_file():
            load_dotenv(env_file, override=False)
        api_key = os.getenv("FLICKR_API_KEY", "").strip()
        if not api_key:
            raise PhotoSnapConfigError(
                "FLICKR_API_KEY is not set. "
                f"Export it or add it to {env_file or 'the environment'}."
            )
        ingest_dir = os.getenv("PHOTOSNAP_INGEST_DIR", str(DEFAULT_INGEST_DIR))
        output_dir = os.getenv("PHOTOSNAP_OUTPUT_DIR", str(DEFAULT_OUTPUT_DIR))
        return cls(
            api_key=api_key,
            ingest_dir=Path(ingest_dir).expanduser(),
            output_dir=Path(output_dir).expanduser(),
            api_endpoint=os.getenv("PHOTOSNAP_API_ENDPOINT", DEFAULT_API_ENDPOINT),
            calls_per_second=_parse_positive_float(
                "PHOTOSNAP_CALLS_PER_SECOND", DEFAULT_CALLS_PER_SECOND
            ),
            request_timeout=_parse_positive_float(
                "PHOTOSNAP_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT_SECONDS
            ),
            max_retries=_parse_positive_int("PHOTOSNAP_MAX_RETRIES", DEFAULT_MAX_RETRIES),
            fetch_workers=_parse_positive_int("PHOTOSNAP_FETCH_WORKERS", DEFAULT_FETCH_WORKERS),
            region_workers=_parse_positive_int(
                "PHOTOSNAP_REGION_WORKERS", DEFAULT_REGION_WORKERS
            ),
            log_level=_parse_log_level(os.getenv("PHOTOSNAP_LOG_LEVEL", DEFAULT_LOG_LEVEL)),
        )


def _parse_positive_float(name: str, default: float) -> float:
    """Parse a positive float environment value.

    Args:
        name: Environment variable name.
        default: Value used when the variable is unset.

    Returns:
        Parsed value.

    Raises:
        PhotoSnapConfigError: If the value is not a positive number.
    """
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        value = float(raw_value)
    except ValueError as error:
        raise PhotoSnapConfigError(
            f"Invalid {name} value: expected number, got '{raw_value}'. "
            f"Set {name} to a positive numeric value."
        ) from error
    if not math.isfinite(value) or value <= 0:
        raise PhotoSnapConfigError(
            f"Invalid {name} value: expected a finite positive number, got '{raw_value}'."
        )
    return value


def _parse_positive_int(name: str, default: int) -> int:
    """Parse a positive integer environment value.

    Args:
        name: Environment variable name.
        default: Value used when the variable is unset.

    Returns:
        Parsed value.

    Raises:
        PhotoSnapConfigError: If the value is not an integer of at least one.
    """
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        value = int(raw_value)
    except ValueError as error:
        raise PhotoSnapConfigError(
            f"Invalid {name} value: expected integer, got '{raw_value}'. "
            f"Set {name} to a numeric value."
        ) from error
    if value < 1:
        raise PhotoSnapConfigError(
            f"Invalid {name} value: expected at least 1, got '{raw_value}'."
        )
    return value


def _parse_log_level(raw_value: str) -> str:
    """Normalize and validate the log level name."""
    level = raw_value.strip().upper()
    if level not in _LOG_LEVELS:
        raise PhotoSnapConfigError(
            f"Invalid PHOTOSNAP_LOG_LEVEL value '{raw_value}'. "
            f"Use one of: {', '.join(_LOG_LEVELS)}."
        )
    return level
