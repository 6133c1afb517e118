"""HTTP transport used by the Valence facade."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

import fsspec
import requests

log = logging.getLogger(__name__)

# Default chunk size for streaming downloads (1MB)
DEFAULT_CHUNK_SIZE = 1024 * 1024


@dataclass
class RequestConfig:
    """Configuration for a single request."""

    method: str = "GET"
    url: str = ""
    json: Any = None
    timeout: Optional[float] = None


@dataclass(frozen=True)
class ApiResponse:
    """Outcome of one API call.

    Valence errors are ordinary values here: a 4xx or 5xx status is carried
    in `status_code` and the raw body in `error`, and it is up to the caller
    to decide whether that is fatal.
    """

    status_code: int
    body: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status_code // 100 == 2


def _decode(resp: requests.Response) -> Any:
    """Return the JSON body of `resp`, or None when there is none."""
    if not resp.content:
        return None
    try:
        return resp.json()
    except (json.JSONDecodeError, ValueError):
        log.debug("Non-JSON body for %s (%s bytes)", resp.url, len(resp.content))
        return None


def _error_response(resp: requests.Response) -> ApiResponse:
    return ApiResponse(status_code=resp.status_code, error=resp.text)


class Transport:
    """Thin wrapper around a `requests.Session`.

    HTTP status errors never raise here; only network level failures
    (`requests.RequestException`) propagate.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.chunk_size = chunk_size

    def request(self, config: RequestConfig) -> ApiResponse:
        """Perform a JSON request.

        Args:
            config: Fully populated ``RequestConfig`` instance.

        Returns:
            An ``ApiResponse`` with the decoded body on success, or the raw
            error text otherwise.
        """
        resp = self.session.request(
            method=config.method,
            url=config.url,
            json=config.json,
            timeout=config.timeout or self.timeout,
        )
        if resp.status_code // 100 != 2:
            log.info("%s %s returned %s", config.method, config.url, resp.status_code)
            return _error_response(resp)
        return ApiResponse(status_code=resp.status_code, body=_decode(resp))

    def download(self, url: str, filepath: str) -> ApiResponse:
        """Stream the body of a GET into `filepath`.

        `filepath` may be a local path or any URL `fsspec` can open for
        writing. Nothing is written when the server answers with an error.
        """
        with self.session.get(url, stream=True, timeout=self.timeout) as resp:
            if resp.status_code // 100 != 2:
                return _error_response(resp)
            with fsspec.open(filepath, "wb") as f:
                for chunk in resp.iter_content(chunk_size=self.chunk_size):
                    f.write(chunk)

        log.info("Downloaded %s", filepath)
        return ApiResponse(status_code=resp.status_code)

    def upload(
        self, method: str, url: str, filepath: str, field_name: str, filename: str
    ) -> ApiResponse:
        """Send `filepath` as the single multipart field `field_name`."""
        with fsspec.open(filepath, "rb") as f:
            resp = self.session.request(
                method=method,
                url=url,
                files={field_name: (filename, f)},
                timeout=self.timeout,
            )
        if resp.status_code // 100 != 2:
            return _error_response(resp)
        return ApiResponse(status_code=resp.status_code, body=_decode(resp))
