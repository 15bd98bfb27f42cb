"""HTTP session utilities for protonge-installer.

Creates the single aiohttp session used by every stage of an install.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiohttp

from protonge_installer.config import NetworkConfig
from protonge_installer.constants import USER_AGENT


def build_timeout(network: NetworkConfig) -> aiohttp.ClientTimeout:
    """Translate network settings into an aiohttp timeout.

    Used for API and checksum requests; archive downloads override it
    with build_stream_timeout.
    """
    timeout_seconds = network.timeout_seconds
    return aiohttp.ClientTimeout(
        total=timeout_seconds * 60,
        sock_read=timeout_seconds * 3,
        sock_connect=timeout_seconds,
    )


def build_stream_timeout(network: NetworkConfig) -> aiohttp.ClientTimeout:
    """Timeout for streaming a large body.

    There is no overall limit: a transfer that keeps receiving data runs to
    completion however long it takes. Only connecting and gaps between
    reads are bounded.
    """
    timeout_seconds = network.timeout_seconds
    return aiohttp.ClientTimeout(
        total=None,
        sock_read=timeout_seconds * 3,
        sock_connect=timeout_seconds,
    )


@asynccontextmanager
async def create_http_session(
    network: NetworkConfig,
) -> AsyncIterator[aiohttp.ClientSession]:
    """Create configured HTTP session.

    Args:
        network: Network configuration

    Yields:
        Configured aiohttp.ClientSession

    """
    connector = aiohttp.TCPConnector(limit=4)
    async with aiohttp.ClientSession(
        timeout=build_timeout(network),
        connector=connector,
        headers={"User-Agent": USER_AGENT},
    ) as session:
        yield session
