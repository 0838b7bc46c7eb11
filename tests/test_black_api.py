from __future__ import annotations

from typing import Any, List

import pytest
import requests

from playground.errors import FormatServiceError, MalformedResponse
from playground.formatter import black_api
from playground.formatter.black_api import BlackApiService
from playground.formatter.factory import MASTER_URL, STABLE_URL, build_registry

BODY = {
    "source_code": "x=1",
    "formatted_code": "x = 1\n",
    "options": {"line_length": 88},
    "state": "tok",
    "issue_link": "https://github.com/psf/black/issues/new",
    "version": "19.3b0",
}


class _Resp:
    def __init__(self, status: int = 200, data: Any = None, bad_json: bool = False):
        self.status_code = status
        self._data = data
        self._bad_json = bad_json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code}", response=self)

    def json(self) -> Any:
        if self._bad_json:
            raise ValueError("not json")
        return self._data


class _Calls(list):
    replies: List[_Resp]


@pytest.fixture
def http(monkeypatch):
    calls = _Calls()
    calls.replies = []

    def _request(method, url, **kwargs):
        calls.append({"method": method, "url": url, **kwargs})
        return calls.replies.pop(0)

    monkeypatch.setattr(black_api.requests, "request", _request)
    return calls


def test_get_version(http) -> None:
    http.replies.append(_Resp(data={"version": "19.3b0"}))
    svc = BlackApiService("stable", STABLE_URL + "/", time_out_s=5)
    assert svc.get_version() == "19.3b0"
    assert http[0]["method"] == "GET"
    assert http[0]["url"] == f"{STABLE_URL}/version"
    assert http[0]["timeout"] == 5


def test_fetch_with_and_without_state(http) -> None:
    http.replies.extend([_Resp(data=BODY), _Resp(data=BODY)])
    svc = BlackApiService("master", MASTER_URL)
    svc.fetch("abc123")
    svc.fetch()
    assert http[0]["params"] == {"state": "abc123"}
    assert http[1]["params"] is None


def test_format_posts_source_and_options(http) -> None:
    http.replies.append(_Resp(data=BODY))
    svc = BlackApiService("stable", STABLE_URL)
    resp = svc.format("x=1", {"skip_string_normalization": True})
    assert http[0]["method"] == "POST"
    assert http[0]["json"] == {"source": "x=1", "options": {"skip_string_normalization": True}}
    assert resp.state == "tok"
    assert resp.formatted_code == "x = 1\n"


def test_http_error_becomes_service_error(http) -> None:
    http.replies.append(_Resp(status=502))
    with pytest.raises(FormatServiceError) as exc:
        BlackApiService("stable", STABLE_URL).format("x", {})
    assert exc.value.status == 502


def test_transport_error_becomes_service_error(monkeypatch) -> None:
    def _boom(method, url, **kwargs):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(black_api.requests, "request", _boom)
    with pytest.raises(FormatServiceError):
        BlackApiService("stable", STABLE_URL).get_version()


def test_bad_json_and_missing_fields_are_malformed(http) -> None:
    http.replies.append(_Resp(bad_json=True))
    svc = BlackApiService("stable", STABLE_URL)
    with pytest.raises(MalformedResponse):
        svc.fetch()

    http.replies.append(_Resp(data={"formatted_code": "x"}))
    with pytest.raises(MalformedResponse):
        svc.fetch()

    http.replies.append(_Resp(data={}))
    with pytest.raises(MalformedResponse):
        svc.get_version()


def test_build_registry_defaults_and_config() -> None:
    reg = build_registry()
    assert list(reg) == ["stable", "master"]
    assert reg["master"].base_url == MASTER_URL

    reg = build_registry({
        "deployments": {"preview": {"type": "black_api", "base_url": "http://localhost:8000/"}},
        "http": {"timeout_s": 3},
    })
    assert reg["preview"].base_url == "http://localhost:8000"
    assert reg["preview"].timeout_s == 3


def test_build_registry_unknown_type() -> None:
    with pytest.raises(ValueError):
        build_registry({"deployments": {"x": {"type": "nope", "base_url": "http://x"}}})


def test_null_text_fields_are_malformed(http) -> None:
    http.replies.append(_Resp(data={**BODY, "formatted_code": None, "state": None}))
    with pytest.raises(MalformedResponse) as exc:
        BlackApiService("stable", STABLE_URL).fetch()
    assert "formatted_code" in str(exc.value)
    assert "state" in str(exc.value)

    http.replies.append(_Resp(data={**BODY, "options": None}))
    with pytest.raises(MalformedResponse):
        BlackApiService("stable", STABLE_URL).format("x", {})
