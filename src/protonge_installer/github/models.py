"""Release and asset models for the GitHub releases API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from protonge_installer.constants import CHECKSUM_SUFFIX
from protonge_installer.exceptions import DecodeError, MalformedReleaseError


def _require_str(data: dict[str, Any], key: str, source: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        msg = f"missing or invalid field '{key}'"
        raise DecodeError(msg, target=source)
    return value


@dataclass(slots=True, frozen=True)
class Asset:
    """Represents a downloadable release asset.

    Attributes:
        name: Asset filename
        browser_download_url: Direct download URL for the asset
        size: Asset size in bytes (0 when unknown)

    """

    name: str
    browser_download_url: str
    size: int = 0

    @classmethod
    def from_api_response(cls, asset_data: Any, source: str) -> Asset:
        """Create Asset from GitHub API response data.

        Args:
            asset_data: Raw asset object from the API
            source: URL the data came from, for diagnostics

        Returns:
            Asset instance

        Raises:
            DecodeError: If required fields are missing or ill-typed

        """
        if not isinstance(asset_data, dict):
            msg = "asset entry is not an object"
            raise DecodeError(msg, target=source)

        size = asset_data.get("size", 0)
        return cls(
            name=_require_str(asset_data, "name", source),
            browser_download_url=_require_str(
                asset_data, "browser_download_url", source
            ),
            size=size if isinstance(size, int) else 0,
        )

    def is_checksum(self) -> bool:
        """Check if this asset is the detached checksum file."""
        return self.name.endswith(CHECKSUM_SUFFIX)


@dataclass(slots=True, frozen=True)
class Release:
    """A resolved release: its canonical tag and its assets.

    Attributes:
        tag_name: Canonical release identifier, e.g. "GE-Proton9-20"
        assets: Assets in API order
        html_url: Release page URL, empty when not provided

    """

    tag_name: str
    assets: tuple[Asset, ...]
    html_url: str = ""

    @classmethod
    def from_api_response(cls, api_data: Any, source: str) -> Release:
        """Create Release from decoded GitHub API JSON.

        Args:
            api_data: Decoded JSON body
            source: URL the data came from, for diagnostics

        Returns:
            Release instance

        Raises:
            DecodeError: If the body does not have the release shape

        """
        if not isinstance(api_data, dict):
            msg = "release body is not an object"
            raise DecodeError(msg, target=source)

        raw_assets = api_data.get("assets")
        if not isinstance(raw_assets, list):
            msg = "missing or invalid field 'assets'"
            raise DecodeError(msg, target=source)

        html_url = api_data.get("html_url")
        return cls(
            tag_name=_require_str(api_data, "tag_name", source),
            assets=tuple(
                Asset.from_api_response(item, source) for item in raw_assets
            ),
            html_url=html_url if isinstance(html_url, str) else "",
        )


@dataclass(slots=True, frozen=True)
class SelectedAssets:
    """The payload archive and its checksum file."""

    payload: Asset
    checksum: Asset


def classify_assets(
    assets: tuple[Asset, ...] | list[Asset],
    release_name: str = "",
) -> SelectedAssets:
    """Pick the payload and checksum assets of a release.

    An asset whose name ends with the checksum suffix is the checksum file;
    every other asset is a payload candidate. Exactly one of each must exist.

    Args:
        assets: Release assets
        release_name: Tag name used in error messages

    Returns:
        SelectedAssets with the payload and checksum asset

    Raises:
        MalformedReleaseError: If either bucket is empty or ambiguous

    """
    payloads = [asset for asset in assets if not asset.is_checksum()]
    checksums = [asset for asset in assets if asset.is_checksum()]

    for kind, bucket in (("payload", payloads), ("checksum", checksums)):
        if len(bucket) != 1:
            names = ", ".join(asset.name for asset in bucket) or "none"
            msg = (
                f"expected exactly one {kind} asset, "
                f"found {len(bucket)} ({names})"
            )
            raise MalformedReleaseError(msg, target=release_name or None)

    return SelectedAssets(payload=payloads[0], checksum=checksums[0])
