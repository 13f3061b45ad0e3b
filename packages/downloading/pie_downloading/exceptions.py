"""Release asset lookup exceptions.

Every failure in the lookup flow is raised to the immediate caller. The
"not found" outcomes share ``CouldNotFindReleaseAsset`` so callers can offer
a build-from-source fallback with a single ``except`` clause.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Package


class ReleaseAssetError(Exception):
    """Base class for all release asset lookup failures."""


class CouldNotFindReleaseAsset(ReleaseAssetError):
    """Raised when no usable prebuilt asset exists for a package."""


class ReleaseTagNotFound(CouldNotFindReleaseAsset):
    """Raised when the version tag has no release on the remote host."""

    def __init__(self, package: Package) -> None:
        """Initialize the exception with the package whose tag is missing.

        Args:
            package: The package that was looked up.
        """
        self.package = package
        super().__init__(
            f"Could not find release by tag name for {package.name}:{package.version} "
            f"in {package.github_org_and_repository}",
        )


class NoMatchingAsset(CouldNotFindReleaseAsset):
    """Raised when a release exists but none of its assets has an acceptable name."""

    def __init__(self, expected_names: tuple[str, ...], package: Package | None = None) -> None:
        """Initialize the exception with the names that were searched for.

        Args:
            expected_names: The acceptable asset names, in search order.
            package: Optional package, used to qualify the message.
        """
        self.expected_names = tuple(expected_names)
        self.package = package
        subject = f"{package.name}:{package.version}" if package is not None else "package"
        super().__init__(
            f"Could not find release asset for {subject} named one of {', '.join(self.expected_names)}",
        )


class MalformedResponse(ReleaseAssetError):
    """Raised when the release API returns JSON of an unexpected shape."""

    def __init__(self, field: str, detail: str) -> None:
        """Initialize the exception with the violating field.

        Args:
            field: Path of the offending field, e.g. ``assets[2].name``.
            detail: What was wrong with it.
        """
        self.field = field
        self.detail = detail
        super().__init__(f"Malformed release response at {field}: {detail}")


class TransportFailure(ReleaseAssetError):
    """Raised for any HTTP or network failure other than a missing release tag."""

    def __init__(self, message: str, status_code: int | None = None, url: str | None = None) -> None:
        """Initialize the exception with the transport details.

        Args:
            message: Human readable description of the failure.
            status_code: HTTP status, or ``None`` when no response was received.
            url: The requested URL, when known.
        """
        self.status_code = status_code
        self.url = url
        super().__init__(message)
