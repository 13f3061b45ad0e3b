"""Typed models for packages, target platforms and release assets."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OperatingSystemFamily(str, Enum):
    WINDOWS = "windows"
    LINUX = "linux"
    DARWIN = "darwin"
    BSD = "bsd"


class Architecture(str, Enum):
    X86_64 = "x86_64"
    X86 = "x86"
    ARM64 = "arm64"


class ThreadSafetyMode(str, Enum):
    THREAD_SAFE = "ts"
    NON_THREAD_SAFE = "nts"


class WindowsCompiler(str, Enum):
    VC14 = "vc14"
    VC15 = "vc15"
    VS16 = "vs16"
    VS17 = "vs17"


@dataclass(frozen=True)
class Package:
    name: str
    version: str
    organization: str
    repository: str
    reference_download_url: str | None = None

    @property
    def github_org_and_repository(self) -> str:
        return f"{self.organization}/{self.repository}"

    @classmethod
    def from_repo(cls, repo: str, name: str, version: str, reference_download_url: str | None = None) -> Package:
        org, sep, repository = repo.strip().strip("/").partition("/")
        if not sep or not org or not repository or "/" in repository:
            raise ValueError(f"Expected GitHub repository as 'org/repo', got {repo!r}")
        if reference_download_url is None:
            reference_download_url = f"https://github.com/{org}/{repository}/archive/{version}.zip"
        return cls(
            name=name,
            version=version,
            organization=org,
            repository=repository,
            reference_download_url=reference_download_url,
        )


@dataclass(frozen=True)
class TargetPlatform:
    os_family: OperatingSystemFamily
    architecture: Architecture
    php_version: str
    thread_safety: ThreadSafetyMode
    windows_compiler: WindowsCompiler | None = None


@dataclass(frozen=True)
class ReleaseAsset:
    name: str
    download_url: str
