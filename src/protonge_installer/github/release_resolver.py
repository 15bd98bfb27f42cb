"""Resolve a version token to a concrete GE-Proton release.

The resolver issues exactly one request against the GitHub releases API:
either the "latest release" endpoint or the "release by tag" endpoint.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote

import aiohttp
import orjson

from protonge_installer.constants import (
    API_ACCEPT_HEADER,
    GITHUB_API_URL,
    LATEST_TOKEN,
    PACKAGE_PREFIX,
    RELEASES_PATH,
    TAGS_PATH,
)
from protonge_installer.exceptions import (
    DecodeError,
    ReleaseNotFoundError,
    TransportError,
)
from protonge_installer.github.models import Release
from protonge_installer.logger import get_logger

if TYPE_CHECKING:
    from typing import Any

logger = get_logger(__name__)


def normalize_version(token: str) -> str:
    """Prefix a version token with the package prefix if it lacks it.

    >>> normalize_version("9-20")
    'GE-Proton9-20'
    >>> normalize_version("GE-Proton9-20")
    'GE-Proton9-20'
    """
    if token.startswith(PACKAGE_PREFIX):
        return token
    return PACKAGE_PREFIX + token


def build_release_url(token: str) -> str:
    """Build the API URL for a version token.

    Args:
        token: "latest" or a release identifier

    Returns:
        URL of the latest-release or release-by-tag endpoint

    """
    base = GITHUB_API_URL + RELEASES_PATH
    if token == LATEST_TOKEN:
        return base + LATEST_TOKEN
    return base + TAGS_PATH + quote(normalize_version(token), safe="")


class ReleaseResolver:
    """Turns a version token into a Release via the GitHub API."""

    def __init__(self, session: aiohttp.ClientSession) -> None:
        """Initialize resolver with HTTP session.

        Args:
            session: aiohttp session for API requests

        """
        self.session = session

    async def resolve(self, token: str) -> Release:
        """Resolve a version token into a release.

        Args:
            token: "latest" or a version identifier such as "9-20"

        Returns:
            The resolved release

        Raises:
            ReleaseNotFoundError: If the API answers with a non-2xx status
            TransportError: If the request cannot be completed
            DecodeError: If the body is not a well-formed release

        """
        url = build_release_url(token)
        wanted = token if token == LATEST_TOKEN else normalize_version(token)
        logger.debug("Resolving release %s via %s", wanted, url)

        try:
            async with self.session.get(
                url, headers={"Accept": API_ACCEPT_HEADER}
            ) as response:
                if not 200 <= response.status < 300:  # noqa: PLR2004
                    msg = (
                        f"invalid release version {wanted} "
                        f"(HTTP {response.status})"
                    )
                    raise ReleaseNotFoundError(msg, target=url)
                body = await response.read()
        except TimeoutError as e:
            msg = f"timed out fetching release {wanted}"
            raise TransportError(msg, target=url) from e
        except aiohttp.ClientError as e:
            msg = f"could not fetch release {wanted}: {e}"
            raise TransportError(msg, target=url) from e

        release = Release.from_api_response(self._decode(body, url), url)
        logger.debug(
            "Release %s has %d assets", release.tag_name, len(release.assets)
        )
        return release

    @staticmethod
    def _decode(body: bytes, url: str) -> Any:
        try:
            return orjson.loads(body)
        except orjson.JSONDecodeError as e:
            msg = f"response is not valid JSON: {e}"
            raise DecodeError(msg, target=url) from e
