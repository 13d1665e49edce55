"""
kakao_api/utils/http_client.py

WHAT THIS FILE IS FOR
---------------------
This module provides a minimal, synchronous HTTP client abstraction
used by every capability builder to make its single outbound call to
the Kakao API.

It exists to:
- Centralize request preparation (query string, urlencoded form or
  multipart/form-data, chosen by requests from what is passed)
- Standardize timeout handling
- Translate requests' exception zoo into this library's taxonomy
- Avoid scattering raw `requests.post(...)` calls across capabilities

This client is intentionally kept *very thin*.

WHAT THIS FILE IS NOT FOR
-------------------------
This module is NOT responsible for:
- Retry logic (there is exactly one attempt)
- Logging or structured tracing
- Endpoint discovery or URL templating
- Interpreting status codes or decoding response bodies

Those responsibilities belong to the capability layer
(kakao_api/capabilities/*).

CONNECTION SEMANTICS
--------------------
Each call opens a fresh requests.Session and closes it on return, and
callers send `Connection: close`. No connection is ever reused.

ERROR TRANSLATION
-----------------
- Preparation fails (missing scheme, invalid URL, bad field types)
    -> RequestBuildError
- Deadline expires (connect or read)
    -> TransportTimeoutError
- Any other network-level failure (DNS, refused, reset, SSL)
    -> TransportError

The original requests exception is always chained (`raise ... from exc`).
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple, Union

import requests

from kakao_api.utils.errors import RequestBuildError, TransportError, TransportTimeoutError

# Timeout can be:
# - single float -> applied to both connect + read
# - (connect_timeout, read_timeout)
TimeoutType = Union[float, Tuple[float, float]]


class HttpClient:
    """
    Minimal synchronous HTTP client wrapper.

    It intentionally:
    - Does NOT add retries
    - Does NOT add logging
    - Does NOT interpret response payloads
    """

    def __init__(self, timeout_seconds: TimeoutType = 60):
        self.timeout_seconds = timeout_seconds

    def prepare(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, Any]] = None,
        data: Optional[Mapping[str, Any]] = None,
        files: Optional[Mapping[str, Any]] = None,
    ) -> requests.PreparedRequest:
        """
        Assemble the request without sending it.

        With `files` the body is multipart/form-data and requests sets the
        boundary-inclusive Content-Type; with only `data` it is
        application/x-www-form-urlencoded.
        """
        request = requests.Request(
            method=method,
            url=url,
            headers=dict(headers or {}),
            params=dict(params or {}),
            data=dict(data or {}),
            files=dict(files or {}),
        )
        try:
            return request.prepare()
        except (requests.RequestException, ValueError, TypeError) as exc:
            raise RequestBuildError(f"cannot build {method} request for {url}: {exc}") from exc

    def send(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, Any]] = None,
        data: Optional[Mapping[str, Any]] = None,
        files: Optional[Mapping[str, Any]] = None,
        timeout_seconds: Optional[TimeoutType] = None,
    ) -> requests.Response:
        """
        Prepare and send exactly one request.

        Returns:
            requests.Response, whatever its status code.

        Raises:
            RequestBuildError, TransportTimeoutError, TransportError
        """
        prepared = self.prepare(method, url, headers=headers, params=params, data=data, files=files)
        timeout = timeout_seconds if timeout_seconds is not None else self.timeout_seconds

        with requests.Session() as session:
            try:
                return session.send(prepared, timeout=timeout)
            except requests.Timeout as exc:
                raise TransportTimeoutError(f"{method} {url} timed out after {timeout}s") from exc
            except requests.RequestException as exc:
                raise TransportError(f"{method} {url} failed: {exc}") from exc


def form_fields(**fields: Any) -> Dict[str, str]:
    """Drop unset (None) fields and render the rest as strings."""
    out: Dict[str, str] = {}
    for key, value in fields.items():
        if value is None:
            continue
        if isinstance(value, bool):
            out[key] = "true" if value else "false"
        else:
            out[key] = str(value)
    return out
