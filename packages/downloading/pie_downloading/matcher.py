"""Pick the release asset whose name matches the platform naming convention."""

from __future__ import annotations

from typing import Iterable, Sequence

from .exceptions import NoMatchingAsset
from .models import Package, ReleaseAsset


def select_matching_asset(
    acceptable_names: Iterable[str],
    assets: Sequence[ReleaseAsset],
    package: Package | None = None,
) -> ReleaseAsset:
    """Return the first asset, in API order, whose lowercased name is acceptable."""
    expected = tuple(acceptable_names)
    lookup = frozenset(expected)

    for asset in assets:
        if asset.name.lower() in lookup:
            return asset

    raise NoMatchingAsset(expected, package)
