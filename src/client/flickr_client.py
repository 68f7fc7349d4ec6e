"""Flickr REST client.

This module issues rate-limited ``flickr.photos.*`` calls and classifies
failures into retryable, skippable, and fatal errors.
"""

from __future__ import annotations

from typing import Any, Mapping

import requests
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from client.rate_limiter import TokenBucketRateLimiter
from core.config import PhotoSnapConfig
from core.constants import (
    DEFAULT_RETRY_BACKOFF_SECONDS,
    FLICKR_GET_INFO_METHOD,
    FLICKR_GET_SIZES_METHOD,
    FLICKR_NO_JSON_CALLBACK,
    FLICKR_PERMISSION_DENIED_CODE,
    FLICKR_PHOTO_NOT_FOUND_CODE,
    FLICKR_RESPONSE_FORMAT,
    FLICKR_SERVICE_UNAVAILABLE_CODE,
)
from core.errors import (
    PhotoSnapMalformedResponseError,
    PhotoSnapPhotoUnavailableError,
    PhotoSnapRetryableError,
    PhotoSnapTransportError,
)
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)
_UNAVAILABLE_CODES = (FLICKR_PHOTO_NOT_FOUND_CODE, FLICKR_PERMISSION_DENIED_CODE)


class FlickrClient:
    """Rate-limited client for the photo metadata calls.

    Every call consumes one token from the shared limiter, including
    retried attempts.
    """

    def __init__(
        self,
        config: PhotoSnapConfig,
        session: Any | None = None,
        rate_limiter: TokenBucketRateLimiter | None = None,
        retry_backoff: float = DEFAULT_RETRY_BACKOFF_SECONDS,
    ) -> None:
        """Initialize client from config.

        Args:
            config: Runtime configuration with API key and limits.
            session: Optional ``requests.Session`` compatible object.
            rate_limiter: Optional shared limiter; built from config when omitted.
            retry_backoff: Initial backoff in seconds between retried attempts.
        """
        self._config = config
        self._session = session if session is not None else requests.Session()
        self._rate_limiter = rate_limiter or TokenBucketRateLimiter(config.calls_per_second)
        self._retry_backoff = retry_backoff

    @property
    def rate_limiter(self) -> TokenBucketRateLimiter:
        return self._rate_limiter

    def fetch_info(self, photo_id: str) -> dict[str, Any]:
        """Return the raw ``flickr.photos.getInfo`` payload for a photo."""
        return self.call(FLICKR_GET_INFO_METHOD, {"photo_id": photo_id})

    def fetch_sizes(self, photo_id: str) -> dict[str, Any]:
        """Return the raw ``flickr.photos.getSizes`` payload for a photo."""
        return self.call(FLICKR_GET_SIZES_METHOD, {"photo_id": photo_id})

    def call(self, method: str, params: Mapping[str, str]) -> dict[str, Any]:
        """Call one REST method, retrying transient failures.

        Args:
            method: Flickr method name.
            params: Method-specific query parameters.

        Returns:
            Decoded JSON object.

        Raises:
            PhotoSnapRetryableError: If transient failures outlast the retry budget.
            PhotoSnapPhotoUnavailableError: If the photo is unknown or private.
            PhotoSnapTransportError: For other refused calls.
            PhotoSnapMalformedResponseError: If the body is not a JSON object.
        """
        retrying = Retrying(
            stop=stop_after_attempt(self._config.max_retries + 1),
            wait=wait_exponential_jitter(initial=self._retry_backoff, jitter=self._retry_backoff),
            retry=retry_if_exception_type(PhotoSnapRetryableError),
            before_sleep=_log_retry,
            reraise=True,
        )
        return retrying(self._call_once, method, params)

    def close(self) -> None:
        """Release pooled HTTP connections."""
        self._session.close()

    def _call_once(self, method: str, params: Mapping[str, str]) -> dict[str, Any]:
        query = _build_query(method, params, self._config.api_key)
        self._rate_limiter.acquire()
        _LOGGER.info("flickr_api_call", method=method, **params)
        try:
            response = self._session.get(
                self._config.api_endpoint,
                params=query,
                timeout=self._config.request_timeout,
            )
        except (requests.exceptions.Timeout, requests.exceptions.ConnectionError) as error:
            raise PhotoSnapRetryableError(
                f"{method} call failed: {error.__class__.__name__}. "
                "Check network connectivity."
            ) from error
        except requests.exceptions.RequestException as error:
            raise PhotoSnapTransportError(f"{method} call failed: {error}") from error
        _check_status(method, response.status_code)
        payload = _decode_payload(method, response)
        _check_api_status(method, params, payload)
        return payload


def _build_query(method: str, params: Mapping[str, str], api_key: str) -> dict[str, str]:
    """Merge fixed protocol parameters into method parameters."""
    query = dict(params)
    query["method"] = method
    query["api_key"] = api_key
    query["format"] = FLICKR_RESPONSE_FORMAT
    query["nojsoncallback"] = FLICKR_NO_JSON_CALLBACK
    return query


def _check_status(method: str, status_code: int) -> None:
    """Raise for non-200 HTTP statuses.

    Args:
        method: Flickr method name for context.
        status_code: HTTP response status.

    Raises:
        PhotoSnapRetryableError: For throttling and server errors.
        PhotoSnapTransportError: For any other non-200 status.
    """
    if status_code == 200:
        return
    if status_code == 429 or status_code >= 500:
        raise PhotoSnapRetryableError(
            f"{method} returned HTTP {status_code}.", status_code=status_code
        )
    raise PhotoSnapTransportError(
        f"{method} returned HTTP {status_code}. Check the API key and endpoint.",
        status_code=status_code,
    )


def _decode_payload(method: str, response: Any) -> dict[str, Any]:
    """Decode a response body into a JSON object.

    Raises:
        PhotoSnapMalformedResponseError: If the body is not a JSON object.
    """
    try:
        payload = response.json()
    except ValueError as error:
        raise PhotoSnapMalformedResponseError(
            f"{method} returned a body that is not valid JSON."
        ) from error
    if not isinstance(payload, dict):
        raise PhotoSnapMalformedResponseError(
            f"{method} returned JSON {type(payload).__name__}, expected object."
        )
    return payload


def _check_api_status(method: str, params: Mapping[str, str], payload: Mapping[str, Any]) -> None:
    """Raise for Flickr ``stat=fail`` envelopes.

    Raises:
        PhotoSnapPhotoUnavailableError: For unknown or private photos.
        PhotoSnapRetryableError: When Flickr reports itself unavailable.
        PhotoSnapTransportError: For other API failures.
    """
    if payload.get("stat", "ok") != "fail":
        return
    code = payload.get("code")
    message = payload.get("message", "")
    api_code = code if isinstance(code, int) else None
    detail = f"{method} failed for {dict(params)}: code {code}, {message}"
    if api_code in _UNAVAILABLE_CODES:
        raise PhotoSnapPhotoUnavailableError(detail, status_code=200, api_code=api_code)
    if api_code == FLICKR_SERVICE_UNAVAILABLE_CODE:
        raise PhotoSnapRetryableError(detail, status_code=200, api_code=api_code)
    raise PhotoSnapTransportError(detail, status_code=200, api_code=api_code)


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    _LOGGER.warning(
        "flickr_api_retry",
        attempt=retry_state.attempt_number,
        error=str(error),
    )
