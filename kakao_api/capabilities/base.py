"""
kakao_api/capabilities/base.py

WHAT THIS FILE IS FOR
---------------------
Shared shape of every capability builder:

    builder = factory(...)            # defaults from Settings
    builder.authorize_with(key)...    # chained setters, each returns self
    result = builder.collect()        # exactly one network call

It owns:
- Settings threading (explicit `settings=`, else get_settings())
- The formatted Authorization value
- The current Source and its lifetime (a replaced FileSource is closed)
- The single send + status check + decode step used by collect()
- Structured logging of the call outcome

CALL FLOW
---------
collect() (capability)
  -> RequestBuilder._send()
      -> HttpClient.send()             RequestBuildError / TransportError
  -> RequestBuilder._decode_json() or _decode_xml()
                                       ApiResponseError / DecodeError

Secrets (the Authorization value) are never logged.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any, Mapping, Optional, Type, TypeVar

import requests
import structlog
from pydantic import ValidationError

from kakao_api.schemas.output_schema import ResultModel
from kakao_api.utils.errors import (
    ApiResponseError,
    DecodeError,
    RequestBuildError,
    TransportError,
)
from kakao_api.utils.http_client import HttpClient
from kakao_api.utils.key_formatter import AUTHORIZATION_HEADER, format_key
from kakao_api.utils.result_persistence import xml_to_dict
from kakao_api.utils.settings import Settings, get_settings
from kakao_api.utils.source_classifier import FileSource, Source, close_source

logger = structlog.get_logger(__name__)

_B = TypeVar("_B", bound="RequestBuilder")
_R = TypeVar("_R", bound=ResultModel)


class RequestBuilder:
    """Base class for capability builders."""

    capability: str = "unknown"

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        self.auth_key = format_key(self.settings.default_secret(), self.settings.key_prefix)
        self.source: Optional[Source] = None
        self.http = HttpClient(timeout_seconds=self.settings.http_timeout_seconds)

    def authorize_with(self: _B, key: str) -> _B:
        """Set the REST API key; the configured scheme prefix is prepended."""
        self.auth_key = format_key(key, self.settings.key_prefix)
        return self

    # ------------------------------------------------------------------ #
    # Source ownership
    # ------------------------------------------------------------------ #
    def _replace_source(self, source: Source) -> None:
        previous = self.source
        self.source = source
        if previous is not source:
            close_source(previous)

    def _require_source(self) -> Source:
        source = self.source
        if source is None:
            raise RequestBuildError(f"{self.capability}: no source configured")
        if isinstance(source, FileSource) and source.closed:
            raise RequestBuildError(
                f"{self.capability}: file source {source.path!r} was already consumed by a previous collect()"
            )
        return source

    def close(self) -> None:
        """Release an open file source without collecting."""
        close_source(self.source)

    def __enter__(self: _B) -> _B:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------ #
    # Execution
    # ------------------------------------------------------------------ #
    def _headers(self) -> dict[str, str]:
        return {
            AUTHORIZATION_HEADER: self.auth_key,
            "Connection": "close",
        }

    def _send(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        data: Optional[Mapping[str, Any]] = None,
        files: Optional[Mapping[str, Any]] = None,
    ) -> requests.Response:
        """
        Send the one request of collect() and reject HTTP errors.

        Raises:
            RequestBuildError, TransportError, ApiResponseError
        """
        ctx = {"capability": self.capability, "method": method, "url": url, "multipart": bool(files)}
        try:
            resp = self.http.send(method, url, headers=self._headers(), params=params, data=data, files=files)
        except RequestBuildError as exc:
            logger.error("kakao_call_build_failed", error=str(exc), **ctx)
            raise
        except TransportError as exc:
            logger.warning("kakao_call_transport_failed", error=str(exc), error_type=type(exc).__name__, **ctx)
            raise

        if resp.status_code >= 400:
            snippet = (resp.text or "")[:500]
            logger.warning(
                "kakao_call_http_error",
                status_code=resp.status_code,
                response_snippet=snippet,
                **ctx,
            )
            raise ApiResponseError(resp.status_code, snippet)

        logger.info("kakao_call_success", status_code=resp.status_code, **ctx)
        return resp

    def _decode_json(self, resp: requests.Response, model: Type[_R]) -> _R:
        try:
            data = resp.json()
        except ValueError as exc:
            raise DecodeError(
                f"{self.capability}: response is not JSON (status={resp.status_code})"
            ) from exc
        return self._validate(data, model)

    def _decode_xml(self, resp: requests.Response, model: Type[_R]) -> _R:
        try:
            root = ET.fromstring(resp.content)
        except ET.ParseError as exc:
            raise DecodeError(
                f"{self.capability}: response is not XML (status={resp.status_code})"
            ) from exc
        if root.tag != model.xml_root:
            raise DecodeError(
                f"{self.capability}: expected <{model.xml_root}> root element, got <{root.tag}>"
            )
        data = xml_to_dict(root)
        # empty lists have no element at all in the XML body
        for field in model.xml_list_fields:
            data.setdefault(field, [])
        return self._validate(data, model)

    def _validate(self, data: Any, model: Type[_R]) -> _R:
        if not isinstance(data, dict):
            raise DecodeError(f"{self.capability}: expected an object, got {type(data).__name__}")
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise DecodeError(
                f"{self.capability}: response does not match {model.__name__}: {exc.error_count()} error(s)"
            ) from exc
