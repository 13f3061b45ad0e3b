"""Release asset listing lookup against the GitHub Releases API."""

from __future__ import annotations

from typing import Any

from pie_core.logging_setup import get_logger

from .auth import AuthHeaderProvider
from .exceptions import MalformedResponse, ReleaseTagNotFound, TransportFailure
from .http import HttpClient
from .models import Package, ReleaseAsset


_logger = get_logger("fetcher")


def _required_string(item: dict[str, Any], key: str, path: str) -> str:
    if key not in item:
        raise MalformedResponse(f"{path}.{key}", "missing")
    value = item[key]
    if not isinstance(value, str):
        raise MalformedResponse(f"{path}.{key}", f"expected string, got {type(value).__name__}")
    if not value:
        raise MalformedResponse(f"{path}.{key}", "empty string")
    return value


def parse_release_assets(payload: Any) -> list[ReleaseAsset]:
    """Validate a decoded release payload and return its assets in API order.

    The whole listing is checked before anything is returned, so a single bad
    entry rejects the response.
    """
    if not isinstance(payload, dict):
        raise MalformedResponse("<root>", f"expected object, got {type(payload).__name__}")
    if "assets" not in payload:
        raise MalformedResponse("assets", "missing")

    raw_assets = payload["assets"]
    if not isinstance(raw_assets, list):
        raise MalformedResponse("assets", f"expected list, got {type(raw_assets).__name__}")

    assets: list[ReleaseAsset] = []
    for index, item in enumerate(raw_assets):
        path = f"assets[{index}]"
        if not isinstance(item, dict):
            raise MalformedResponse(path, f"expected object, got {type(item).__name__}")
        assets.append(
            ReleaseAsset(
                name=_required_string(item, "name", path),
                download_url=_required_string(item, "browser_download_url", path),
            )
        )
    return assets


class ReleaseAssetsFetcher:
    def __init__(self, github_api_base_url: str) -> None:
        self.github_api_base_url = github_api_base_url.rstrip("/")

    def release_url(self, package: Package) -> str:
        return (
            f"{self.github_api_base_url}/repos/{package.github_org_and_repository}"
            f"/releases/tags/{package.version}"
        )

    def fetch(self, package: Package, auth: AuthHeaderProvider, http: HttpClient) -> list[ReleaseAsset]:
        if not package.reference_download_url:
            raise ValueError(f"Package {package.name}:{package.version} has no reference download URL")

        url = self.release_url(package)
        headers = auth.add_authentication_header({}, self.github_api_base_url, package.reference_download_url)
        _logger.debug("fetching release %s", url, extra={"event": "release_fetch"})

        try:
            response = http.get(url, {"retry_auth_failure": False, "headers": headers})
        except TransportFailure as exc:
            # https://docs.github.com/en/rest/releases/releases#get-a-release-by-tag-name
            if exc.status_code == 404:
                raise ReleaseTagNotFound(package) from exc
            raise

        assets = parse_release_assets(response.decode_json())
        _logger.debug(
            "release %s lists %d assets",
            package.version,
            len(assets),
            extra={"event": "release_assets_parsed"},
        )
        return assets
