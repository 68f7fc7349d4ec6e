"""In-memory stand-ins for the Flickr service used across tests."""

from __future__ import annotations

import threading
from typing import Any

from core.errors import PhotoSnapError
from tests.fixture_paths import load_json_fixture


class FakeMetadataSource:
    """Serves fixture payloads and records every call made.

    Ids listed in ``failures`` raise the mapped error from fetch_info.
    """

    def __init__(self, failures: dict[str, PhotoSnapError] | None = None) -> None:
        self.calls: list[tuple[str, str]] = []
        self._failures = failures or {}
        self.closed = False
        self._lock = threading.Lock()

    def fetch_info(self, photo_id: str) -> dict[str, Any]:
        self._record("getInfo", photo_id)
        if photo_id in self._failures:
            raise self._failures[photo_id]
        payload = load_json_fixture("flickr/get_info.json")
        payload["photo"]["id"] = photo_id
        payload["photo"]["title"]["_content"] = f"Photo {photo_id}"
        return payload

    def fetch_sizes(self, photo_id: str) -> dict[str, Any]:
        self._record("getSizes", photo_id)
        return load_json_fixture("flickr/get_sizes.json")

    def close(self) -> None:
        self.closed = True

    @property
    def fetched_ids(self) -> list[str]:
        return [photo_id for method, photo_id in self.calls if method == "getInfo"]

    def _record(self, method: str, photo_id: str) -> None:
        with self._lock:
            self.calls.append((method, photo_id))


class FakeResponse:
    """Minimal ``requests.Response`` replacement."""

    def __init__(self, status_code: int = 200, payload: Any = None, text: str | None = None):
        self.status_code = status_code
        self._payload = payload
        self._text = text

    def json(self) -> Any:
        if self._text is not None:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeSession:
    """Session returning queued responses or raising queued errors."""

    def __init__(self, outcomes: list[Any]) -> None:
        self._outcomes = list(outcomes)
        self.requests: list[dict[str, Any]] = []
        self.closed = False

    def get(self, url: str, params: dict[str, str], timeout: float) -> FakeResponse:
        self.requests.append({"url": url, "params": dict(params), "timeout": timeout})
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def close(self) -> None:
        self.closed = True


class NoWaitRateLimiter:
    """Rate limiter that counts acquisitions without sleeping."""

    def __init__(self) -> None:
        self.acquired = 0

    def acquire(self) -> float:
        self.acquired += 1
        return 0.0
