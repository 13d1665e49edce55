# tests/conftest.py
from __future__ import annotations

import json
from typing import Any, List, Optional, Union

import pytest
import requests

import kakao_api.utils.http_client as http_mod
from kakao_api.utils.settings import Settings


def make_response(
    status_code: int,
    body: Union[bytes, str, dict, list],
    content_type: str = "application/json",
) -> requests.Response:
    if isinstance(body, (dict, list)):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode("utf-8")
    resp = requests.Response()
    resp.status_code = status_code
    resp._content = body
    resp.encoding = "utf-8"
    resp.headers["Content-Type"] = content_type
    return resp


class FakeTransport:
    """
    Stands in for requests.Session as used by HttpClient.send():

        with requests.Session() as session:
            return session.send(prepared, timeout=...)
    """

    def __init__(self) -> None:
        self.calls: List[requests.PreparedRequest] = []
        self.timeouts: List[Any] = []
        self.sessions_opened = 0
        self.sessions_closed = 0
        self.response: requests.Response = make_response(200, {})
        self.error: Optional[Exception] = None

    def respond(self, status_code: int, body: Any, content_type: str = "application/json") -> None:
        self.response = make_response(status_code, body, content_type)
        self.error = None

    def fail(self, exc: Exception) -> None:
        self.error = exc

    @property
    def last(self) -> requests.PreparedRequest:
        assert self.calls, "Expected at least one request to be sent"
        return self.calls[-1]

    def session(self) -> "_FakeSession":
        self.sessions_opened += 1
        return _FakeSession(self)


class _FakeSession:
    def __init__(self, transport: FakeTransport) -> None:
        self._transport = transport

    def __enter__(self) -> "_FakeSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._transport.sessions_closed += 1

    def send(self, prepared: requests.PreparedRequest, timeout: Any = None) -> requests.Response:
        self._transport.calls.append(prepared)
        self._transport.timeouts.append(timeout)
        if self._transport.error is not None:
            raise self._transport.error
        return self._transport.response


@pytest.fixture()
def fake_transport(monkeypatch: pytest.MonkeyPatch) -> FakeTransport:
    transport = FakeTransport()
    monkeypatch.setattr(http_mod.requests, "Session", transport.session)
    return transport


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        key_prefix="KakaoAK",
        rest_api_key=None,
        local_api_base_url="https://local.test/v2/local",
        vision_api_base_url="https://vision.test/v2/vision",
        pose_api_base_url="https://pose.test/pose",
        http_timeout_seconds=5.0,
    )
