"""Prebuilt extension binary lookup on GitHub Releases."""

from .auth import AuthHeaderProvider, GithubTokenAuth
from .exceptions import (
    CouldNotFindReleaseAsset,
    MalformedResponse,
    NoMatchingAsset,
    ReleaseAssetError,
    ReleaseTagNotFound,
    TransportFailure,
)
from .fetcher import ReleaseAssetsFetcher, parse_release_assets
from .http import HttpClient, HttpResponse, UrllibHttpClient
from .matcher import select_matching_asset
from .models import (
    Architecture,
    OperatingSystemFamily,
    Package,
    ReleaseAsset,
    TargetPlatform,
    ThreadSafetyMode,
    WindowsCompiler,
)
from .naming import NamingConventionGenerator, WindowsExtensionAssetName
from .resolver import GithubPackageReleaseAssets, resolve_target

__all__ = [
    "Architecture",
    "AuthHeaderProvider",
    "CouldNotFindReleaseAsset",
    "GithubPackageReleaseAssets",
    "GithubTokenAuth",
    "HttpClient",
    "HttpResponse",
    "MalformedResponse",
    "NamingConventionGenerator",
    "NoMatchingAsset",
    "OperatingSystemFamily",
    "Package",
    "ReleaseAsset",
    "ReleaseAssetError",
    "ReleaseAssetsFetcher",
    "ReleaseTagNotFound",
    "TargetPlatform",
    "ThreadSafetyMode",
    "TransportFailure",
    "UrllibHttpClient",
    "WindowsCompiler",
    "parse_release_assets",
    "resolve_target",
    "select_matching_asset",
]
