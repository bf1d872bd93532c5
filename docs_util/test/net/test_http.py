"""Tests for net/http.py - HTTP client abstraction."""

from __future__ import annotations

import io
import urllib.error
import urllib.request
from typing import Any

import pytest

from docs_util.core.result import Err, Ok
from docs_util.net.http import HttpClient, HttpError, MockHttpClient, RealHttpClient


class TestHttpError:
    def test_str_with_status(self) -> None:
        error = HttpError(url="https://example.com/api", status=500, message="Internal Error")
        assert str(error) == "HTTP 500: Internal Error (https://example.com/api)"

    def test_str_without_status(self) -> None:
        error = HttpError(url="https://example.com", status=0, message="Timeout")
        assert str(error) == "Timeout (https://example.com)"

    def test_auth_hint(self) -> None:
        assert HttpError(url="u", status=401, message="Unauthorized").hint is not None
        assert HttpError(url="u", status=500, message="boom").hint is None


class TestMockHttpClient:
    def test_isinstance_check(self) -> None:
        assert isinstance(MockHttpClient(), HttpClient)

    def test_json_list_response(self) -> None:
        client = MockHttpClient()
        client.set_json("https://api.example.com/items", [1, 2])
        assert client.get_json("https://api.example.com/items") == Ok([1, 2])

    def test_unknown_url_is_404(self) -> None:
        result = MockHttpClient().get_text("https://example.com/missing")
        assert isinstance(result, Err)
        assert result.error.status == 404

    def test_records_calls_and_headers(self) -> None:
        client = MockHttpClient()
        client.set_text("https://example.com/a", "hello")
        client.get_text("https://example.com/a", headers={"X-Test": "1"})
        assert client.calls == [("get_text", "https://example.com/a")]
        assert client.headers == [{"X-Test": "1"}]


class _FakeResponse(io.BytesIO):
    def __enter__(self) -> _FakeResponse:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class TestRealHttpClient:
    def test_isinstance_check(self) -> None:
        assert isinstance(RealHttpClient(), HttpClient)

    def test_get_json_sends_headers(self, monkeypatch: pytest.MonkeyPatch) -> None:
        seen: dict[str, Any] = {}

        def fake_urlopen(req: urllib.request.Request, **kwargs: Any) -> _FakeResponse:
            seen["headers"] = dict(req.header_items())
            seen["timeout"] = kwargs.get("timeout")
            return _FakeResponse(b'[{"tag_name": "v1.0.0"}]')

        monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

        client = RealHttpClient(timeout=5.0, user_agent="test-agent")
        result = client.get_json("https://api.example.com/releases", headers={"Authorization": "token t"})

        assert result == Ok([{"tag_name": "v1.0.0"}])
        # urllib capitalizes header names
        assert seen["headers"]["User-agent"] == "test-agent"
        assert seen["headers"]["Authorization"] == "token t"
        assert seen["timeout"] == 5.0

    def test_http_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_urlopen(req: urllib.request.Request, **kwargs: Any) -> _FakeResponse:
            raise urllib.error.HTTPError(req.full_url, 404, "Not Found", {}, None)  # type: ignore[arg-type]

        monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

        result = RealHttpClient().get_text("https://example.com/missing")

        assert result == Err(HttpError(url="https://example.com/missing", status=404, message="Not Found"))

    def test_network_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_urlopen(req: urllib.request.Request, **kwargs: Any) -> _FakeResponse:
            raise urllib.error.URLError("Connection refused")

        monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

        result = RealHttpClient().get_text("https://example.com")

        assert isinstance(result, Err)
        assert result.error.status == 0
        assert result.error.message == "Connection refused"

    def test_invalid_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_urlopen(req: urllib.request.Request, **kwargs: Any) -> _FakeResponse:
            return _FakeResponse(b"<html>")

        monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

        result = RealHttpClient().get_json("https://example.com")

        assert isinstance(result, Err)
        assert "JSON parse error" in result.error.message
