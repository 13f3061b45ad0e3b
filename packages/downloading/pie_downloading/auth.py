"""Authentication headers for GitHub API requests."""

from __future__ import annotations

import os
from typing import Mapping, Protocol
from urllib.parse import urlparse


GITHUB_HOSTS = ("github.com", "api.github.com")


class AuthHeaderProvider(Protocol):
    def add_authentication_header(
        self,
        headers: Mapping[str, str],
        api_base_url: str,
        scope_url: str,
    ) -> dict[str, str]:
        ...


def _host(url: str) -> str:
    return (urlparse(url).hostname or "").lower()


class GithubTokenAuth:
    """Adds a bearer token for the host the reference download URL lives on.

    Packages hosted on github.com authenticate against the API host, so a
    ``github.com`` scope falls back to the token for ``api_base_url``'s host.
    """

    def __init__(self, tokens_by_host: Mapping[str, str] | None = None) -> None:
        self._tokens = {k.lower(): v for k, v in (tokens_by_host or {}).items() if v}

    @classmethod
    def from_env(cls) -> GithubTokenAuth:
        tokens: dict[str, str] = {}
        token = os.environ.get("PIE_GITHUB_TOKEN", "").strip() or os.environ.get("GITHUB_TOKEN", "").strip()
        if token:
            for host in GITHUB_HOSTS:
                tokens[host] = token
        return cls(tokens)

    def token_for(self, api_base_url: str, scope_url: str) -> str | None:
        scope_host = _host(scope_url)
        token = self._tokens.get(scope_host)
        if token is None and scope_host == "github.com":
            token = self._tokens.get(_host(api_base_url))
        return token

    def add_authentication_header(
        self,
        headers: Mapping[str, str],
        api_base_url: str,
        scope_url: str,
    ) -> dict[str, str]:
        out = dict(headers)
        token = self.token_for(api_base_url, scope_url)
        if token:
            out["Authorization"] = f"Bearer {token}"
        return out
