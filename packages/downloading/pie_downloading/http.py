"""HTTP transport for GitHub API requests."""

from __future__ import annotations

import http.client
import json
import os
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Protocol

import certifi

from pie_core.config import DEFAULT_USER_AGENT
from pie_core.logging_setup import get_logger

from .exceptions import MalformedResponse, TransportFailure


GITHUB_ACCEPT = "application/vnd.github+json"

AuthFailureCallback = Callable[[str], "Mapping[str, str] | None"]

_logger = get_logger("http")


@dataclass(frozen=True)
class HttpResponse:
    status: int
    body: bytes
    headers: Mapping[str, str] = field(default_factory=dict)

    def decode_json(self) -> Any:
        try:
            return json.loads(self.body.decode("utf-8"))
        except (UnicodeDecodeError, ValueError, RecursionError) as exc:
            raise MalformedResponse("<body>", f"response is not valid JSON ({exc})") from exc


class HttpClient(Protocol):
    def get(self, url: str, options: Mapping[str, Any] | None = None) -> HttpResponse:
        """Fetch ``url``; raise ``TransportFailure`` on any non-2xx or network error."""
        ...


def _build_ssl_context() -> ssl.SSLContext:
    """Create TLS context for API requests with explicit CA handling."""
    if os.environ.get("PIE_ALLOW_INSECURE_TLS", "").strip() == "1":
        return ssl._create_unverified_context()

    ca_bundle = os.environ.get("PIE_CA_BUNDLE", "").strip()
    if ca_bundle:
        return ssl.create_default_context(cafile=ca_bundle)

    return ssl.create_default_context(cafile=certifi.where())


class UrllibHttpClient:
    """Blocking client over ``urllib.request``.

    Options understood by ``get``:
        headers: extra request headers.
        retry_auth_failure: when true (default) a 401/403 is retried once with
            headers from ``on_auth_failure``, if that callback is set.
    """

    def __init__(
        self,
        timeout_s: int = 30,
        user_agent: str = DEFAULT_USER_AGENT,
        on_auth_failure: AuthFailureCallback | None = None,
    ) -> None:
        self.timeout_s = timeout_s
        self.user_agent = user_agent
        self.on_auth_failure = on_auth_failure

    def _request(self, url: str, headers: Mapping[str, str]) -> HttpResponse:
        merged = {"User-Agent": self.user_agent, "Accept": GITHUB_ACCEPT}
        merged.update(headers)

        try:
            request = urllib.request.Request(url, headers=merged, method="GET")
            with urllib.request.urlopen(request, timeout=self.timeout_s, context=_build_ssl_context()) as response:
                return HttpResponse(
                    status=int(getattr(response, "status", 200)),
                    body=response.read(),
                    headers=dict(response.headers.items()),
                )
        except urllib.error.HTTPError as exc:
            exc.close()
            raise TransportFailure(
                f"HTTP {exc.code} for {url}",
                status_code=exc.code,
                url=url,
            ) from exc
        except (urllib.error.URLError, http.client.HTTPException, OSError) as exc:
            raise TransportFailure(f"Request to {url} failed: {exc}", url=url) from exc
        except ValueError as exc:
            # urllib rejects URLs without a scheme before any I/O
            raise TransportFailure(f"Invalid request URL {url!r}: {exc}", url=url) from exc

    def get(self, url: str, options: Mapping[str, Any] | None = None) -> HttpResponse:
        options = options or {}
        headers = dict(options.get("headers") or {})

        try:
            return self._request(url, headers)
        except TransportFailure as exc:
            if exc.status_code not in (401, 403):
                raise
            if not options.get("retry_auth_failure", True) or self.on_auth_failure is None:
                raise

            retry_headers = self.on_auth_failure(url)
            if not retry_headers:
                raise

            _logger.info(
                "retrying after auth failure status=%s",
                exc.status_code,
                extra={"event": "http_auth_retry"},
            )
            headers.update(retry_headers)
            return self._request(url, headers)
