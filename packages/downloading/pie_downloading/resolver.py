"""Download URL resolution for OS/architecture specific extension binaries."""

from __future__ import annotations

from pie_core.logging_setup import get_logger

from .auth import AuthHeaderProvider
from .fetcher import ReleaseAssetsFetcher
from .http import HttpClient
from .matcher import select_matching_asset
from .models import (
    Architecture,
    OperatingSystemFamily,
    Package,
    TargetPlatform,
    ThreadSafetyMode,
    WindowsCompiler,
)
from .naming import NamingConventionGenerator, WindowsExtensionAssetName


_logger = get_logger("resolver")


def _normalize_os(system: str) -> OperatingSystemFamily:
    s = system.lower()
    if s.startswith("win"):
        return OperatingSystemFamily.WINDOWS
    if s.startswith("darwin") or s.startswith("mac"):
        return OperatingSystemFamily.DARWIN
    if "bsd" in s:
        return OperatingSystemFamily.BSD
    return OperatingSystemFamily.LINUX


def _normalize_arch(machine: str) -> Architecture:
    m = machine.lower()
    if m in ("x86_64", "amd64", "x64"):
        return Architecture.X86_64
    if m in ("aarch64", "arm64"):
        return Architecture.ARM64
    if m in ("x86", "i386", "i686"):
        return Architecture.X86
    raise ValueError(f"Unsupported architecture: {machine!r}")


def resolve_target(
    system: str,
    machine: str,
    php_version: str,
    thread_safety: ThreadSafetyMode | str = ThreadSafetyMode.NON_THREAD_SAFE,
    compiler: WindowsCompiler | str | None = None,
) -> TargetPlatform:
    os_family = _normalize_os(system)
    if not isinstance(thread_safety, ThreadSafetyMode):
        thread_safety = ThreadSafetyMode(thread_safety.lower())

    windows_compiler: WindowsCompiler | None = None
    if os_family is OperatingSystemFamily.WINDOWS and compiler:
        windows_compiler = compiler if isinstance(compiler, WindowsCompiler) else WindowsCompiler(compiler.lower())

    return TargetPlatform(
        os_family=os_family,
        architecture=_normalize_arch(machine),
        php_version=php_version,
        thread_safety=thread_safety,
        windows_compiler=windows_compiler,
    )


class GithubPackageReleaseAssets:
    """Finds the prebuilt binary for a package on its GitHub release."""

    def __init__(
        self,
        github_api_base_url: str,
        naming: NamingConventionGenerator | None = None,
        fetcher: ReleaseAssetsFetcher | None = None,
    ) -> None:
        self.github_api_base_url = github_api_base_url
        self.naming = naming or WindowsExtensionAssetName()
        self.fetcher = fetcher or ReleaseAssetsFetcher(github_api_base_url)

    def find_download_url_for_package(
        self,
        target: TargetPlatform,
        package: Package,
        auth: AuthHeaderProvider,
        http: HttpClient,
    ) -> str:
        expected_names = self.naming.acceptable_names(target, package)
        assets = self.fetcher.fetch(package, auth, http)
        asset = select_matching_asset(expected_names, assets, package)

        _logger.info(
            "resolved %s:%s to %s",
            package.name,
            package.version,
            asset.name,
            extra={"event": "release_asset_resolved"},
        )
        return asset.download_url

    find_windows_download_url_for_package = find_download_url_for_package
