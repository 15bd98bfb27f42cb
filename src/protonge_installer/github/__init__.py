"""GitHub release resolution for GE-Proton."""

from protonge_installer.github.models import (
    Asset,
    Release,
    SelectedAssets,
    classify_assets,
)
from protonge_installer.github.release_resolver import (
    ReleaseResolver,
    build_release_url,
    normalize_version,
)

__all__ = [
    "Asset",
    "Release",
    "ReleaseResolver",
    "SelectedAssets",
    "build_release_url",
    "classify_assets",
    "normalize_version",
]
