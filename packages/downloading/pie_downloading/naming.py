"""Asset naming conventions for prebuilt Windows extension binaries."""

from __future__ import annotations

from typing import Protocol

from .models import Package, TargetPlatform


class NamingConventionGenerator(Protocol):
    def acceptable_names(self, target: TargetPlatform, package: Package) -> tuple[str, ...]:
        """Return a non-empty, ordered tuple of lowercase asset names."""
        ...


class WindowsExtensionAssetName:
    """Names used by php/php-windows-builder style release pipelines.

    Both ``{ts}-{compiler}`` and ``{compiler}-{ts}`` orderings are seen in the
    wild, so both are accepted.
    """

    @staticmethod
    def _asset_names(target: TargetPlatform, package: Package, file_extension: str) -> tuple[str, ...]:
        if target.windows_compiler is None:
            raise ValueError("Windows asset names require a target with a Windows compiler")

        ts = target.thread_safety.value
        compiler = target.windows_compiler.value
        arch = target.architecture.value
        prefix = f"php_{package.name}-{package.version}-{target.php_version}"

        return (
            f"{prefix}-{ts}-{compiler}-{arch}.{file_extension}".lower(),
            f"{prefix}-{compiler}-{ts}-{arch}.{file_extension}".lower(),
        )

    def zip_names(self, target: TargetPlatform, package: Package) -> tuple[str, ...]:
        return self._asset_names(target, package, "zip")

    def dll_names(self, target: TargetPlatform, package: Package) -> tuple[str, ...]:
        return self._asset_names(target, package, "dll")

    def acceptable_names(self, target: TargetPlatform, package: Package) -> tuple[str, ...]:
        return self.zip_names(target, package)
