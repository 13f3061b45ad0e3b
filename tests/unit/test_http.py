from __future__ import annotations

import http.client
import io
import sys
import urllib.error
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "downloading"))

import pie_downloading.http as http_mod
from pie_downloading.exceptions import MalformedResponse, TransportFailure
from pie_downloading.http import HttpResponse, UrllibHttpClient


class _FakeResponse:
    status = 200

    def __init__(self, body: bytes = b'{"assets": []}'):
        self._body = body
        self.headers = {"Content-Type": "application/json"}

    def read(self):
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


def _http_error(url: str, code: int) -> urllib.error.HTTPError:
    return urllib.error.HTTPError(url, code, "error", {}, None)


@pytest.fixture(autouse=True)
def _plain_tls(monkeypatch):
    monkeypatch.setattr(http_mod, "_build_ssl_context", lambda: None)


def test_get_sends_default_and_extra_headers(monkeypatch) -> None:
    seen = {}

    def fake_urlopen(request, timeout=None, context=None):
        seen["headers"] = dict(request.header_items())
        seen["timeout"] = timeout
        return _FakeResponse()

    monkeypatch.setattr(http_mod.urllib.request, "urlopen", fake_urlopen)

    client = UrllibHttpClient(timeout_s=7, user_agent="pie-test")
    response = client.get("https://api.example/x", {"headers": {"Authorization": "Bearer t"}})

    assert response.decode_json() == {"assets": []}
    assert seen["timeout"] == 7
    assert seen["headers"]["User-agent"] == "pie-test"
    assert seen["headers"]["Authorization"] == "Bearer t"
    assert seen["headers"]["Accept"] == "application/vnd.github+json"


def test_http_error_maps_to_transport_failure(monkeypatch) -> None:
    def fake_urlopen(request, timeout=None, context=None):
        raise _http_error(request.full_url, 404)

    monkeypatch.setattr(http_mod.urllib.request, "urlopen", fake_urlopen)

    with pytest.raises(TransportFailure) as info:
        UrllibHttpClient().get("https://api.example/missing")
    assert info.value.status_code == 404
    assert info.value.url == "https://api.example/missing"


def test_network_error_has_no_status(monkeypatch) -> None:
    def fake_urlopen(request, timeout=None, context=None):
        raise urllib.error.URLError("connection refused")

    monkeypatch.setattr(http_mod.urllib.request, "urlopen", fake_urlopen)

    with pytest.raises(TransportFailure) as info:
        UrllibHttpClient().get("https://api.example/x")
    assert info.value.status_code is None


def test_auth_failure_retried_once_when_allowed(monkeypatch) -> None:
    attempts: list[dict[str, str]] = []

    def fake_urlopen(request, timeout=None, context=None):
        attempts.append(dict(request.header_items()))
        if len(attempts) == 1:
            raise _http_error(request.full_url, 401)
        return _FakeResponse()

    monkeypatch.setattr(http_mod.urllib.request, "urlopen", fake_urlopen)

    client = UrllibHttpClient(on_auth_failure=lambda _url: {"Authorization": "Bearer fresh"})
    client.get("https://api.example/x")

    assert len(attempts) == 2
    assert attempts[1]["Authorization"] == "Bearer fresh"


def test_auth_failure_not_retried_when_disabled(monkeypatch) -> None:
    attempts: list[str] = []

    def fake_urlopen(request, timeout=None, context=None):
        attempts.append(request.full_url)
        raise _http_error(request.full_url, 401)

    monkeypatch.setattr(http_mod.urllib.request, "urlopen", fake_urlopen)

    client = UrllibHttpClient(on_auth_failure=lambda _url: {"Authorization": "Bearer fresh"})
    with pytest.raises(TransportFailure) as info:
        client.get("https://api.example/x", {"retry_auth_failure": False})

    assert info.value.status_code == 401
    assert len(attempts) == 1


def test_decode_json_rejects_garbage() -> None:
    with pytest.raises(MalformedResponse) as info:
        HttpResponse(status=200, body=b"\xff\xfe").decode_json()
    assert info.value.field == "<body>"


def test_truncated_body_maps_to_transport_failure(monkeypatch) -> None:
    class _TruncatedResponse(_FakeResponse):
        def read(self):
            raise http.client.IncompleteRead(b'{"assets": [', 64)

    monkeypatch.setattr(http_mod.urllib.request, "urlopen", lambda *a, **kw: _TruncatedResponse())

    with pytest.raises(TransportFailure) as info:
        UrllibHttpClient().get("https://api.example/x")
    assert info.value.status_code is None
    assert isinstance(info.value.__cause__, http.client.IncompleteRead)


def test_url_without_scheme_maps_to_transport_failure() -> None:
    with pytest.raises(TransportFailure) as info:
        UrllibHttpClient().get("api.github.com/repos/a/b/releases/tags/1")
    assert info.value.status_code is None
    assert info.value.url == "api.github.com/repos/a/b/releases/tags/1"


def test_http_error_body_is_closed(monkeypatch) -> None:
    body = io.BytesIO(b'{"message": "Not Found"}')

    def fake_urlopen(request, timeout=None, context=None):
        raise urllib.error.HTTPError(request.full_url, 404, "Not Found", {}, body)

    monkeypatch.setattr(http_mod.urllib.request, "urlopen", fake_urlopen)

    with pytest.raises(TransportFailure):
        UrllibHttpClient().get("https://api.example/missing")
    assert body.closed


def test_decode_json_rejects_deep_nesting() -> None:
    depth = 100_000
    body = b"[" * depth + b"]" * depth
    with pytest.raises(MalformedResponse) as info:
        HttpResponse(status=200, body=body).decode_json()
    assert info.value.field == "<body>"
