"""HTTP client abstraction.

This module provides:
- HttpClient: Protocol for HTTP GETs (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Canned responses keyed by URL, for testing
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.request
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from docs_util import __version__
from docs_util.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "RealHttpClient",
    "MockHttpClient",
    "HttpError",
]


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    @property
    def hint(self) -> str | None:
        if self.status in (401, 403):
            return "check that GITHUB_TOKEN has read access to the repository"
        return None

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP GET operations.

    Lets the GitHub client, the dependency resolver and the security scan
    report run against canned responses in tests.
    """

    def get_json(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> Result[object, HttpError]:
        """Fetch URL and parse the body as JSON (object or array)."""
        ...

    def get_text(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> Result[str, HttpError]:
        """Fetch URL and return the body as text."""
        ...


class RealHttpClient:
    """Real HTTP client using urllib.

    Handles:
    - HTTPS with system certificates
    - Extra request headers (e.g. Authorization)
    - Timeout handling
    """

    def __init__(
        self, timeout: float = 30.0, user_agent: str = f"docs-util/{__version__}"
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def _request(self, url: str, headers: Mapping[str, str] | None) -> Result[bytes, HttpError]:
        all_headers = {"User-Agent": self.user_agent}
        if headers:
            all_headers.update(headers)
        try:
            req = urllib.request.Request(url, headers=all_headers)
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(response.read())
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

    def get_json(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> Result[object, HttpError]:
        result = self._request(url, headers)
        if isinstance(result, Err):
            return result

        try:
            data: object = json.loads(result.value.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=url, status=0, message=f"JSON parse error: {e}"))
        return Ok(data)

    def get_text(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> Result[str, HttpError]:
        result = self._request(url, headers)
        if isinstance(result, Err):
            return result

        try:
            return Ok(result.value.decode("utf-8"))
        except UnicodeDecodeError as e:
            return Err(HttpError(url=url, status=0, message=f"Decode error: {e}"))


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_json("https://api.github.com/repos/o/r/releases?per_page=100&page=1", [])
        result = client.get_json("https://api.github.com/repos/o/r/releases?per_page=100&page=1")
        assert result == Ok([])

    Unknown URLs answer with a 404 error.
    """

    def __init__(self) -> None:
        self._json_responses: dict[str, object | HttpError] = {}
        self._text_responses: dict[str, str | HttpError] = {}
        self.calls: list[tuple[str, str]] = []
        self.headers: list[dict[str, str]] = []

    def set_json(self, url: str, response: object | HttpError) -> None:
        self._json_responses[url] = response

    def set_text(self, url: str, response: str | HttpError) -> None:
        self._text_responses[url] = response

    def get_json(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> Result[object, HttpError]:
        self.calls.append(("get_json", url))
        self.headers.append(dict(headers or {}))

        if url not in self._json_responses:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))

        response = self._json_responses[url]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    def get_text(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> Result[str, HttpError]:
        self.calls.append(("get_text", url))
        self.headers.append(dict(headers or {}))

        if url not in self._text_responses:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))

        response = self._text_responses[url]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)
